# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist_sync.cli.bootstrap import create_initial_state
from tasklist_sync.core.state import AppState
from tasklist_sync.core.synchronizer import Synchronizer

from .fakes import FakeTaskStore, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        store_backend="sqlite",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        rest_url="",
        rest_api_key=None,
        rest_table="todoTable",
        rest_connect_timeout=1.0,
        rest_read_timeout=1.0,
    )


@pytest.fixture()
def store() -> FakeTaskStore:
    """Store pre-filled with three tasks; newest first is [3, 2, 1]."""
    return FakeTaskStore(
        [
            make_task(1, "Buy milk", minute=0),
            make_task(2, "Walk the dog", completed=True, minute=1),
            make_task(3, "Write report", minute=2),
        ]
    )


@pytest.fixture()
def sync(store: FakeTaskStore) -> Synchronizer:
    return Synchronizer(store)


@pytest.fixture()
def state(settings: SimpleNamespace, store: FakeTaskStore) -> AppState:
    """AppState wired with the in-memory fake store."""
    return create_initial_state(settings=settings, store=store)
