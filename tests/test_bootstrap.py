# tests/test_bootstrap.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist_sync.cli.bootstrap import create_initial_state, create_store
from tasklist_sync.config import Settings
from tasklist_sync.core.ports import StoreError
from tasklist_sync.tasks.rest_store import RestTaskStore
from tasklist_sync.tasks.task_store import SqliteTaskStore


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKLIST_STORE_BACKEND", "REST")
    monkeypatch.delenv("TASKLIST_REST_URL", raising=False)
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("TASKLIST_REST_API_KEY", "k")
    monkeypatch.setenv("TASKLIST_REST_READ_TIMEOUT_SECONDS", "not-a-number")
    monkeypatch.delenv("TASKLIST_TASKS_DB_PATH", raising=False)

    s = Settings.from_env()

    assert s.store_backend == "rest"
    assert s.rest_url == "https://example.supabase.co"
    assert s.rest_api_key == "k"
    assert s.rest_read_timeout == 15.0
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"


def test_unknown_backend_falls_back_to_sqlite(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKLIST_STORE_BACKEND", "mongo")

    assert Settings.from_env().store_backend == "sqlite"


def test_create_store_picks_backend(settings) -> None:
    assert isinstance(create_store(settings), SqliteTaskStore)

    settings.store_backend = "rest"
    settings.rest_url = "https://example.supabase.co"
    settings.rest_api_key = "k"
    assert isinstance(create_store(settings), RestTaskStore)


def test_rest_backend_without_key_fails_fast(settings) -> None:
    settings.store_backend = "rest"
    settings.rest_url = "https://example.supabase.co"

    with pytest.raises(StoreError):
        create_initial_state(settings=settings)


def test_initial_state_wires_synchronizer(settings) -> None:
    state = create_initial_state(settings=settings)

    assert state.backend == "sqlite"
    assert state.sync.tasks == ()
    assert state.sync.loading is False
    assert settings.tasks_db_path.exists()
