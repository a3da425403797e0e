# src/smartgoals/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "SMARTGOALS"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
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

    # ---- Local data paths ----
    data_dir: Path
    store_path: Path

    # ---- Planner tuning ----
    stats_window_days: int
    quick_task_hours: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "smartgoals") or "smartgoals"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/smartgoals"))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "state.json")

        # The rolling window is a week; allow shrinking it, never widening past 7.
        stats_window_days = min(7, max(1, _env_int(_k("STATS_WINDOW_DAYS"), 7)))
        quick_task_hours = max(0.5, _env_float(_k("QUICK_TASK_HOURS"), 2.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_path=store_path,
            stats_window_days=stats_window_days,
            quick_task_hours=quick_task_hours,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
