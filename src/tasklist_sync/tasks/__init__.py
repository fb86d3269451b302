"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Progress) and Store record parsing
- task_store.py: SQLite-backed TaskStore
- rest_store.py: PostgREST/Supabase-compatible HTTP TaskStore
"""
