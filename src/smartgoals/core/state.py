# src/smartgoals/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .models import DailyStat, Goal
from .serialization import parse_daily_stats, parse_goals

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 7


@dataclass(frozen=True, slots=True)
class PlannerState:
    """
    Immutable snapshot of everything the core knows.

    Every store operation returns a new PlannerState; nothing in here is
    mutated in place. daily_stats is derived from goals and is replaced
    wholesale on each successful mutation.
    """

    goals: tuple[Goal, ...] = ()
    daily_stats: tuple[DailyStat, ...] = ()
    window_length: int = DEFAULT_WINDOW_DAYS

    def find_goal(self, goal_id: str) -> Goal | None:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        return None

    @property
    def task_count(self) -> int:
        return sum(len(g.tasks) for g in self.goals)


def load_initial_state(
    serialized_goals: Any = None,
    serialized_stats: Any = None,
    *,
    window_length: int = DEFAULT_WINDOW_DAYS,
) -> PlannerState:
    """
    Build the initial snapshot from whatever the key-value store returned.

    Both inputs may be None, a JSON string/bytes, or already-decoded records.
    Anything unusable degrades to an empty collection; this never raises.
    """
    goals = parse_goals(serialized_goals)
    stats = parse_daily_stats(serialized_stats)
    logger.info("Loaded state goals=%d daily_stats=%d", len(goals), len(stats))
    return PlannerState(
        goals=tuple(goals),
        daily_stats=tuple(stats),
        window_length=max(1, int(window_length)),
    )
