# src/tasklist_sync/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskStore
from .synchronizer import Synchronizer


@dataclass
class AppState:
    # Store Settings on the state for easy access in commands and connectors.
    settings: object

    store: TaskStore
    sync: Synchronizer

    @property
    def backend(self) -> str:
        return str(getattr(self.settings, "store_backend", "unknown"))
