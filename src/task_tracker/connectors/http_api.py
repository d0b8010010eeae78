# src/task_tracker/connectors/http_api.py

"""HTTP JSON API over the task store.

Routes:
    POST   /task/                create a task, returns {"id": n}
    GET    /task/                all tasks
    DELETE /task/                delete all tasks
    GET    /task/{id}            one task
    DELETE /task/{id}            delete one task
    GET    /tag/{tagname}        tasks carrying a tag
    GET    /due/{yyyy}/{mm}/{dd} tasks due on a calendar date
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Path, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, ValidationError

from ..core.ports import TaskRepo
from ..tasks.errors import StorageUnavailableError, TaskNotFoundError
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class TaskCreateRequest(BaseModel):
    """Body of POST /task/. Unknown fields and timestamps without a UTC offset are rejected."""

    model_config = ConfigDict(extra="forbid")

    text: str
    tags: list[str] | None = None
    due: AwareDatetime | None = None


class TaskCreatedResponse(BaseModel):
    id: int


class TaskResponse(BaseModel):
    id: int
    text: str
    tags: list[str] = Field(default_factory=list)
    due: datetime | None = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(id=task.id, text=task.text, tags=list(task.tags), due=task.due)


def get_task_store(request: Request) -> TaskRepo:
    return request.app.state.task_store


StoreDep = Annotated[TaskRepo, Depends(get_task_store)]
DatePart = Annotated[str, Path(pattern=r"^[0-9]+$")]

router = APIRouter()


def _to_response(tasks: list[Task]) -> list[TaskResponse]:
    return [TaskResponse.from_task(t) for t in tasks]


@router.post("/task/", response_model=TaskCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_task(request: Request, store: StoreDep) -> TaskCreatedResponse:
    """Create a task from a JSON body."""
    logger.debug("Handling task create at %s", request.url.path)

    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if not media_type:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="missing Content-Type")
    if media_type != "application/json":
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="expect application/json Content-Type",
        )

    try:
        payload = TaskCreateRequest.model_validate_json(await request.body())
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=jsonable_encoder(exc.errors())
        ) from exc

    task_id = await run_in_threadpool(
        store.create_task, payload.text, payload.tags or [], payload.due
    )
    return TaskCreatedResponse(id=task_id)


@router.get("/task/", response_model=list[TaskResponse])
async def get_all_tasks(store: StoreDep) -> list[TaskResponse]:
    """List all tasks ordered by id."""
    return _to_response(await run_in_threadpool(store.get_all_tasks))


@router.delete("/task/", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_tasks(store: StoreDep) -> None:
    """Delete every task (ids are not reused afterwards)."""
    await run_in_threadpool(store.delete_all_tasks)


@router.get("/task/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, store: StoreDep) -> TaskResponse:
    task = await run_in_threadpool(store.get_task, task_id)
    return TaskResponse.from_task(task)


@router.delete("/task/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, store: StoreDep) -> None:
    await run_in_threadpool(store.delete_task, task_id)


@router.get("/tag/{tagname}", response_model=list[TaskResponse])
async def get_tasks_by_tag(tagname: str, store: StoreDep) -> list[TaskResponse]:
    return _to_response(await run_in_threadpool(store.get_tasks_by_tag, tagname))


@router.get("/due/{year}/{month}/{day}", response_model=list[TaskResponse])
async def get_tasks_by_due_date(
    year: DatePart, month: DatePart, day: DatePart, store: StoreDep
) -> list[TaskResponse]:
    """Tasks whose due timestamp falls on the given calendar date (zero padding optional)."""
    try:
        target = date(int(year), int(month), int(day))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    tasks = await run_in_threadpool(
        store.get_tasks_by_due_date, target.year, target.month, target.day
    )
    return _to_response(tasks)


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


async def _not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _storage_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "task storage unavailable"},
    )


async def _validation_handler(request: Request, exc: Exception) -> JSONResponse:
    # Malformed path parameters are client errors, reported as 400 like body errors.
    errors = exc.errors() if isinstance(exc, RequestValidationError) else str(exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": jsonable_encoder(errors)}
    )


def create_app(store: TaskRepo, *, title: str = "task-tracker") -> FastAPI:
    """Build the API around an already constructed store; the store is closed on shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("HTTP API starting (%s)", type(store).__name__)
        yield
        logger.info("HTTP API shutting down, closing task store")
        store.close()

    app = FastAPI(title=title, lifespan=lifespan)
    app.state.task_store = store
    app.include_router(router)
    app.add_exception_handler(TaskNotFoundError, _not_found_handler)
    app.add_exception_handler(StorageUnavailableError, _storage_unavailable_handler)
    app.add_exception_handler(RequestValidationError, _validation_handler)
    return app
