# src/smartgoals/core/planner.py

"""
Plan generator.

Turns a goal into five ordered task drafts using a static template table
keyed by category. The only input-dependent part is the goal title, which
is interpolated into task titles/descriptions; pacing (timeframe, due date,
priority, effort) is derived from the step index alone.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta

from .models import Category, Priority, Task, TaskStatus, Timeframe
from .timeline import today, utc_now

logger = logging.getLogger(__name__)

PLAN_TEMPLATES: dict[Category, tuple[str, ...]] = {
    Category.WORK: (
        "Research and planning",
        "Build MVP",
        "Test with users",
        "Iterate and improve",
        "Launch",
    ),
    Category.STUDY: (
        "Create learning roadmap",
        "Study fundamentals",
        "Practice exercises",
        "Build project",
        "Review and test",
    ),
    Category.HEALTH: (
        "Set baseline metrics",
        "Create routine",
        "Track daily progress",
        "Adjust plan",
        "Celebrate milestones",
    ),
    Category.MONEY: (
        "Analyze current state",
        "Set budget",
        "Track expenses",
        "Optimize spending",
        "Review monthly",
    ),
    Category.PERSONAL: (
        "Define clear objective",
        "Break into steps",
        "Schedule time",
        "Execute consistently",
        "Reflect and adjust",
    ),
}

TIMEFRAME_ORDER: tuple[Timeframe, ...] = (
    Timeframe.YEAR,
    Timeframe.QUARTER,
    Timeframe.MONTH,
    Timeframe.WEEK,
    Timeframe.DAY,
)

# Days between consecutive steps for a given goal timeframe (week/day fall back to 2).
_DUE_SPACING_DAYS: dict[Timeframe, int] = {
    Timeframe.YEAR: 60,
    Timeframe.QUARTER: 20,
    Timeframe.MONTH: 7,
}


def step_timeframe(timeframe: Timeframe, index: int) -> Timeframe:
    # Zoom from coarse to fine, never past day-level.
    start = TIMEFRAME_ORDER.index(timeframe)
    return TIMEFRAME_ORDER[min(start + index % 3, len(TIMEFRAME_ORDER) - 1)]


def step_priority(index: int) -> Priority:
    if index == 0:
        return Priority.HIGH
    if index < 2:
        return Priority.MEDIUM
    return Priority.LOW


def due_spacing_days(timeframe: Timeframe) -> int:
    return _DUE_SPACING_DAYS.get(timeframe, 2)


def generate_plan(
    goal_title: str,
    category: Category | str,
    timeframe: Timeframe | str,
    *,
    now: datetime | None = None,
) -> list[Task]:
    """
    Decompose a goal into exactly five todo tasks.

    goal_title is not validated here (callers reject empty titles).
    Unknown category/timeframe values raise ValueError from the enum.
    """
    category = Category(category)
    timeframe = Timeframe(timeframe)
    moment = now or utc_now()
    start_day = today(moment)
    stamp = int(moment.timestamp() * 1000)
    spacing = due_spacing_days(timeframe)

    tasks: list[Task] = []
    for index, step in enumerate(PLAN_TEMPLATES[category]):
        tasks.append(
            Task(
                id=f"task-{stamp}-{index}-{uuid.uuid4().hex[:8]}",
                title=f"{goal_title}: {step}",
                description=f"AI-generated task for {goal_title}",
                priority=step_priority(index),
                status=TaskStatus.TODO,
                estimated_time=float(2 + index),
                timeframe=step_timeframe(timeframe, index),
                category=category,
                due_date=start_day + timedelta(days=index * spacing),
                ai_generated=True,
            )
        )

    logger.debug(
        "Generated plan title=%r category=%s timeframe=%s steps=%d",
        goal_title,
        category.value,
        timeframe.value,
        len(tasks),
    )
    return tasks
