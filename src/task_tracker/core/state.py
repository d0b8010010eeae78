# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskRepo


@dataclass
class AppState:
    # Settings are kept on the state so connectors can read them without globals.
    settings: object

    # The single store instance shared by every connector.
    task_store: TaskRepo
