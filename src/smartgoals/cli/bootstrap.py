# src/smartgoals/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires a KeyValueStore and the initial PlannerState into an AppSession,
- owns the persistence boundary: after every successful core mutation the
  goals and daily stats are written back to the store.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from ..config import Settings, get_settings
from ..core.models import NO_FILTER, TaskFilter
from ..core.ports import DAILY_STATS_KEY, GOALS_KEY, KeyValueStore
from ..core.serialization import dump_daily_stats, dump_goals
from ..core.state import PlannerState, load_initial_state
from ..core.store import Result, refresh_daily_stats
from ..core.timeline import utc_now
from ..storage.json_store import JsonFileStore

logger = logging.getLogger(__name__)


@dataclass
class AppSession:
    """Mutable holder for the caller side: the current snapshot plus UI filters."""

    settings: Settings
    store: KeyValueStore
    planner: PlannerState
    filters: TaskFilter = NO_FILTER
    clock: Callable[[], datetime] = field(default=utc_now)

    def now(self) -> datetime:
        return self.clock()


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def create_session(
    *,
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> AppSession:
    """
    Create an AppSession from settings.

    Settings and store are injectable for tests; by default the JSON file
    at settings.store_path is used. Stats are recomputed for the current
    window right after loading, so a stale persisted window is replaced.
    """
    if settings is None:
        settings = get_settings()

    if store is None:
        _ensure_local_dirs(settings)
        store = JsonFileStore(settings.store_path)

    planner = load_initial_state(
        store.get(GOALS_KEY),
        store.get(DAILY_STATS_KEY),
        window_length=settings.stats_window_days,
    )
    planner = refresh_daily_stats(planner, now=clock())
    return AppSession(settings=settings, store=store, planner=planner, clock=clock)


def save_snapshot(session: AppSession) -> bool:
    """Write goals + daily stats to the store. Returns False if the write failed."""
    try:
        session.store.set(GOALS_KEY, dump_goals(session.planner.goals))
        session.store.set(DAILY_STATS_KEY, dump_daily_stats(session.planner.daily_stats))
    except OSError:
        logger.exception("Failed to persist state")
        return False
    logger.debug(
        "Persisted goals=%d tasks=%d",
        len(session.planner.goals),
        session.planner.task_count,
    )
    return True


def apply_result(session: AppSession, result: Result) -> bool:
    """Adopt a mutator's result; persist only when the mutation succeeded."""
    new_state, ok = result
    if not ok:
        return False
    session.planner = new_state
    save_snapshot(session)
    return True
