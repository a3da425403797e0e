# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "SMARTGOALS_APP_NAME": "App display name, used as the REPL prompt (default: smartgoals).",
    "SMARTGOALS_LOG_LEVEL": "Console logging level; the console never goes below WARNING (default: INFO).",
    # Paths (gitignored)
    "SMARTGOALS_DATA_DIR": "Local data directory for the store and logs (default: .local/smartgoals).",
    "SMARTGOALS_STORE_PATH": "JSON key-value store path (default: <data_dir>/state.json).",
    # Tuning
    "SMARTGOALS_STATS_WINDOW_DAYS": "Days in the stats/timeline window, 1..7 (default: 7).",
    "SMARTGOALS_QUICK_TASK_HOURS": "Estimate used by '/task ... -' when hours are omitted (default: 2).",
}
