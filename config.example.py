# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "CHECKPOINT_APP_NAME": "App display name (default: checkpoint).",
    "CHECKPOINT_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "CHECKPOINT_DATA_DIR": "Local data directory (default: .local/checkpoint).",
    "CHECKPOINT_TASKS_PATH": "Task list JSON path (default: <data_dir>/tasks.json).",
    "CHECKPOINT_LOG_DIR": "Directory for checkpoint.log (default: <data_dir>).",
    # View / persistence
    "CHECKPOINT_PAGE_SIZE": "Rows per /list page (default: 20).",
    "CHECKPOINT_AUTOSAVE": "Save after every successful change (true/false, default: true).",
}
