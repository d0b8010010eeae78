# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACKER_APP_NAME": "App display name (default: task-tracker).",
    "TASKTRACKER_LOG_LEVEL": "Logging level (default: INFO).",
    # Storage
    "TASKTRACKER_STORE_BACKEND": "Task store backend: memory | sqlite (default: memory).",
    "TASKTRACKER_DATA_DIR": "Local data directory for logs and the database (default: .local/task-tracker).",
    "TASKTRACKER_TASKS_DB_PATH": "SQLite path for the sqlite backend (default: <data_dir>/tasks.sqlite3).",
    # Connectors
    "TASKTRACKER_HTTP_ENABLED": "Serve the HTTP API (true/false, default: true).",
    "TASKTRACKER_HTTP_HOST": "HTTP bind address (default: 127.0.0.1).",
    "TASKTRACKER_HTTP_PORT": "HTTP port (default: 8080).",
    "TASKTRACKER_CONSOLE_ENABLED": "Run the interactive console (true/false, default: false).",
}
