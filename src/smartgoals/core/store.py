# src/smartgoals/core/store.py

"""
Goal/task store operations.

Each operation takes a PlannerState and returns (new_state, success).
Validation failures (empty title, unknown id) are not errors: they return
the input state unchanged together with False.

On success, daily_stats on the new state is recomputed from scratch for
the window starting today (UTC).
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime

from .models import Category, Goal, Priority, Task, TaskStatus, Timeframe
from .planner import generate_plan
from .state import PlannerState
from .stats import daily_stats
from .status import advance
from .timeline import parse_date, today, utc_now

logger = logging.getLogger(__name__)

DEFAULT_GOAL_TITLE = "My Tasks"

Result = tuple[PlannerState, bool]


def _new_id(prefix: str, moment: datetime) -> str:
    return f"{prefix}-{int(moment.timestamp() * 1000)}-{uuid.uuid4().hex[:8]}"


def refresh_daily_stats(state: PlannerState, *, now: datetime | None = None) -> PlannerState:
    """Recompute the derived stats window without touching goals."""
    stats = daily_stats(state, today(now), state.window_length)
    return replace(state, daily_stats=stats)


def _commit(state: PlannerState, goals: tuple[Goal, ...], now: datetime) -> Result:
    return refresh_daily_stats(replace(state, goals=goals), now=now), True


def create_goal(
    state: PlannerState,
    title: str,
    category: Category | str,
    timeframe: Timeframe | str,
    *,
    now: datetime | None = None,
) -> Result:
    if not title or not title.strip():
        logger.debug("create_goal rejected: empty title")
        return state, False

    moment = now or utc_now()
    goal = Goal(
        id=_new_id("goal", moment),
        title=title,
        category=Category(category),
        timeframe=Timeframe(timeframe),
        created_at=moment,
        tasks=tuple(generate_plan(title, category, timeframe, now=moment)),
    )
    logger.debug("Goal created id=%s tasks=%d", goal.id, len(goal.tasks))
    return _commit(state, (*state.goals, goal), moment)


def create_quick_task(
    state: PlannerState,
    title: str,
    description: str,
    category: Category | str,
    priority: Priority | str,
    due_date: date | str,
    estimated_time: float,
    *,
    now: datetime | None = None,
) -> Result:
    """
    Add a single hand-written task.

    The task goes into the first goal in the collection, whatever it is.
    With no goals at all, a "My Tasks" goal is created to hold it.
    """
    if not title or not title.strip():
        logger.debug("create_quick_task rejected: empty title")
        return state, False

    moment = now or utc_now()
    task = Task(
        id=_new_id("task", moment),
        title=title,
        description=description or "",
        priority=Priority(priority),
        status=TaskStatus.TODO,
        estimated_time=float(estimated_time),
        timeframe=Timeframe.DAY,
        category=Category(category),
        due_date=parse_date(due_date),
        ai_generated=False,
    )

    if not state.goals:
        holder = Goal(
            id=_new_id("goal", moment),
            title=DEFAULT_GOAL_TITLE,
            category=task.category,
            timeframe=Timeframe.MONTH,
            created_at=moment,
            tasks=(task,),
        )
        logger.debug("Quick task %s created default goal %s", task.id, holder.id)
        return _commit(state, (holder,), moment)

    first = state.goals[0]
    updated = replace(first, tasks=(*first.tasks, task))
    logger.debug("Quick task %s appended to goal %s", task.id, first.id)
    return _commit(state, (updated, *state.goals[1:]), moment)


def _replace_goal_tasks(
    state: PlannerState,
    goal_id: str,
    task_id: str,
    edit: Callable[[tuple[Task, ...], int], tuple[Task, ...]],
) -> tuple[Goal, ...] | None:
    """
    Apply `edit(tasks, index)` to the tasks of one goal.
    Returns the new goals tuple, or None if the goal/task does not exist.
    """
    for g_idx, goal in enumerate(state.goals):
        if goal.id != goal_id:
            continue
        for t_idx, task in enumerate(goal.tasks):
            if task.id == task_id:
                new_goal = replace(goal, tasks=edit(goal.tasks, t_idx))
                return (*state.goals[:g_idx], new_goal, *state.goals[g_idx + 1 :])
        return None
    return None


def advance_task_status(
    state: PlannerState,
    goal_id: str,
    task_id: str,
    *,
    now: datetime | None = None,
) -> Result:
    moment = now or utc_now()

    def edit(tasks: tuple[Task, ...], idx: int) -> tuple[Task, ...]:
        return (*tasks[:idx], advance(tasks[idx], now=moment), *tasks[idx + 1 :])

    goals = _replace_goal_tasks(state, goal_id, task_id, edit)
    if goals is None:
        logger.debug("advance_task_status: not found goal=%s task=%s", goal_id, task_id)
        return state, False
    return _commit(state, goals, moment)


def delete_task(
    state: PlannerState,
    goal_id: str,
    task_id: str,
    *,
    now: datetime | None = None,
) -> Result:
    def edit(tasks: tuple[Task, ...], idx: int) -> tuple[Task, ...]:
        return (*tasks[:idx], *tasks[idx + 1 :])

    goals = _replace_goal_tasks(state, goal_id, task_id, edit)
    if goals is None:
        logger.debug("delete_task: not found goal=%s task=%s", goal_id, task_id)
        return state, False
    logger.debug("Task deleted goal=%s task=%s", goal_id, task_id)
    return _commit(state, goals, now or utc_now())


def delete_goal(
    state: PlannerState,
    goal_id: str,
    *,
    now: datetime | None = None,
) -> Result:
    remaining = tuple(g for g in state.goals if g.id != goal_id)
    if len(remaining) == len(state.goals):
        logger.debug("delete_goal: not found goal=%s", goal_id)
        return state, False
    logger.debug("Goal deleted id=%s", goal_id)
    return _commit(state, remaining, now or utc_now())
