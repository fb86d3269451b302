# src/tasklist_sync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the TaskStore backend and wires it into a Synchronizer and AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskStore
from ..core.state import AppState
from ..core.synchronizer import Synchronizer
from ..tasks.rest_store import RestTaskStore
from ..tasks.task_store import SqliteTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_store(settings) -> TaskStore:
    """
    Build the configured TaskStore.

    "rest" requires TASKLIST_REST_URL and TASKLIST_REST_API_KEY; a missing value
    raises StoreError so the entrypoint can print a friendly message.
    """
    backend = str(getattr(settings, "store_backend", "sqlite"))
    if backend == "rest":
        return RestTaskStore(
            settings.rest_url,
            settings.rest_api_key or "",
            table=settings.rest_table,
            connect_timeout=settings.rest_connect_timeout,
            read_timeout=settings.rest_read_timeout,
        )
    return SqliteTaskStore(settings.tasks_db_path)


def create_initial_state(*, settings=None, store: TaskStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the store) injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if store is None:
        store = create_store(settings)

    logger.debug("Store backend: %s", getattr(settings, "store_backend", "?"))
    return AppState(settings=settings, store=store, sync=Synchronizer(store))
