# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for logs and storage (default: .local/todo).",
    "TODO_DB_PATH": "SQLite key/value database (default: <data_dir>/todo.sqlite3).",
    "TODO_JSON_PATH": "JSON key/value file (default: <data_dir>/todo.json).",
    # Storage
    "TODO_STORAGE_BACKEND": "sqlite or json (default: sqlite).",
    "TODO_STORAGE_KEY": "Storage key holding the task list (default: tasks).",
    "TODO_ASYNC_SAVES": "Save on a background writer thread (true/false, default: true).",
    # Drafts
    "TODO_DEFAULT_PRIORITY": "Priority of a new task draft: Low, Medium or High (default: Medium).",
}
