# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO).",
    # Store selection
    "TASKLIST_STORE_BACKEND": "Task store backend: sqlite | rest (default: sqlite).",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory for logs and SQLite (default: .local/tasklist).",
    "TASKLIST_TASKS_DB_PATH": "SqliteTaskStore path (default: <data_dir>/tasks.sqlite3).",
    # REST store (PostgREST / Supabase)
    "TASKLIST_REST_URL": "Project URL, e.g. https://<project>.supabase.co (fallback: SUPABASE_URL).",
    "TASKLIST_REST_API_KEY": "API key sent as apikey + Bearer token (fallback: SUPABASE_KEY).",
    "TASKLIST_REST_TABLE": "Table name (default: todoTable).",
    "TASKLIST_REST_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "TASKLIST_REST_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 15).",
}
