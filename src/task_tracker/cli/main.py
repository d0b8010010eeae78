# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts connectors:
- HTTP API served by uvicorn in the main thread (optional),
- console REPL (optional; runs in the main thread when HTTP is disabled,
  otherwise in a daemon thread next to the server; leaving the console
  with /exit or EOF then stops the server too).
"""

from __future__ import annotations

import logging
import threading

import uvicorn

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import InputFn, run_console_loop
from ..connectors.http_api import create_app
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown: release the task store."""
    try:
        state.task_store.close()
    except Exception:
        logger.exception("Task store close failed.")


def _console_then_stop(
    state: AppState, server: uvicorn.Server, *, read_line: InputFn = input
) -> None:
    """Run the console next to the HTTP server and ask the server to exit when it ends."""
    try:
        run_console_loop(state, read_line=read_line)
    finally:
        logger.info("Console closed, stopping HTTP API.")
        server.should_exit = True


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/task-tracker")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "task-tracker"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        if settings.http_enabled:
            app = create_app(state.task_store, title=settings.app_name)
            # log_config=None keeps the handlers installed by setup_logging().
            server = uvicorn.Server(
                uvicorn.Config(
                    app,
                    host=settings.http_host,
                    port=settings.http_port,
                    log_config=None,
                    log_level=level_name.lower(),
                )
            )

            if settings.console_enabled:
                threading.Thread(
                    target=_console_then_stop, args=(state, server), name="console", daemon=True
                ).start()

            logger.info("HTTP API listening on %s:%s", settings.http_host, settings.http_port)
            server.run()
        elif settings.console_enabled:
            run_console_loop(state)
        else:
            logger.warning("No connector enabled (HTTP and console are both off).")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
