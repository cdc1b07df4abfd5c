# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACK_APP_NAME": "App display name (default: tasktrack).",
    "TASKTRACK_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TASKTRACK_DATA_DIR": "Local data + log directory (default: .local/tasktrack).",
    "TASKTRACK_BLOB_DIR": "Snapshot blob directory (default: <data_dir>/blobs).",
    # Record store
    "TASKTRACK_STORAGE_KEY": "Key the whole snapshot is stored under (default: typesafe_db).",
    "TASKTRACK_LATENCY_MS": "Simulated latency per store operation in ms (default: 500).",
    # Console
    "TASKTRACK_USER_ID": "User id that /add and /user act as (default: 1).",
}
