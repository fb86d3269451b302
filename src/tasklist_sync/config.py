# src/tasklist_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the REST key is only checked when the REST store is built).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

STORE_BACKENDS = ("sqlite", "rest")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Store selection ----
    store_backend: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- REST store (PostgREST / Supabase) ----
    rest_url: str
    rest_api_key: str | None
    rest_table: str
    rest_connect_timeout: float
    rest_read_timeout: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist").strip() or "tasklist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        store_backend = _env(_k("STORE_BACKEND"), "sqlite").strip().lower()
        if store_backend not in STORE_BACKENDS:
            store_backend = "sqlite"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        # Accept the Supabase project variables as a fallback for convenience.
        rest_url = (_first_env(_k("REST_URL"), "SUPABASE_URL", default="") or "").strip()
        rest_api_key = _first_env(_k("REST_API_KEY"), "SUPABASE_KEY", default=None)
        rest_table = _env(_k("REST_TABLE"), "todoTable").strip() or "todoTable"

        rest_connect_timeout = _env_float(_k("REST_CONNECT_TIMEOUT_SECONDS"), 5.0)
        rest_read_timeout = _env_float(_k("REST_READ_TIMEOUT_SECONDS"), 15.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            store_backend=store_backend,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            rest_url=rest_url,
            rest_api_key=rest_api_key,
            rest_table=rest_table,
            rest_connect_timeout=rest_connect_timeout,
            rest_read_timeout=rest_read_timeout,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
