# src/smartgoals/core/stats.py

"""
Statistics aggregator.

Pure read-side functions over a PlannerState. Nothing here is cached or
updated incrementally: each call rescans the current task collection.

Note on streak(): it counts days in the last computed daily_stats window
that have at least one completed task. Days do not need to be consecutive.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from .models import (
    NO_FILTER,
    Category,
    DailyStat,
    Goal,
    TaskFilter,
    TaskStatus,
    TaskView,
)
from .state import DEFAULT_WINDOW_DAYS, PlannerState
from .timeline import date_label, next_days, parse_date, today

PLANNING_TIPS: tuple[str, ...] = (
    "Break large tasks into 2-3 hour chunks",
    "Focus on 3 high-priority items per day",
    "Review and adjust your plan weekly",
    "Use categories to maintain balance",
)


@dataclass(frozen=True, slots=True)
class CategoryCount:
    completed: int
    total: int


@dataclass(frozen=True, slots=True)
class Progress:
    completed: int
    total: int

    @property
    def percent(self) -> float:
        return (self.completed / self.total) * 100 if self.total else 0.0


@dataclass(frozen=True, slots=True)
class GoalProgress(Progress):
    doing: int


@dataclass(frozen=True, slots=True)
class TimelineDay:
    date: date
    label: str
    tasks: tuple[TaskView, ...]

    @property
    def progress(self) -> Progress:
        done = sum(1 for v in self.tasks if v.task.status == TaskStatus.DONE)
        return Progress(completed=done, total=len(self.tasks))


@dataclass(frozen=True, slots=True)
class Insights:
    today_tasks: int
    completion_rate: int
    streak: int
    hours_completed: float
    tips: tuple[str, ...] = PLANNING_TIPS


def all_tasks(state: PlannerState) -> list[TaskView]:
    return [
        TaskView(task=task, goal_id=goal.id, goal_title=goal.title)
        for goal in state.goals
        for task in goal.tasks
    ]


def _completed(views: list[TaskView]) -> list[TaskView]:
    return [v for v in views if v.task.status == TaskStatus.DONE]


def tasks_on_date(
    state: PlannerState,
    day: date | str,
    filters: TaskFilter | None = None,
) -> list[TaskView]:
    """Tasks due exactly on `day`, narrowed by the category/priority filter."""
    target = parse_date(day)
    flt = filters or NO_FILTER
    return [v for v in all_tasks(state) if v.task.due_date == target and flt.matches(v.task)]


def daily_stats(
    state: PlannerState,
    window_start: date | str,
    window_length: int = DEFAULT_WINDOW_DAYS,
) -> tuple[DailyStat, ...]:
    views = all_tasks(state)
    out: list[DailyStat] = []
    for day in next_days(parse_date(window_start), window_length):
        day_views = [v for v in views if v.task.due_date == day]
        done = _completed(day_views)
        out.append(
            DailyStat(
                date=day,
                completed=len(done),
                total=len(day_views),
                hours_spent=sum(v.task.estimated_time for v in done),
            )
        )
    return tuple(out)


def completion_rate(state: PlannerState) -> float:
    views = all_tasks(state)
    if not views:
        return 0.0
    return len(_completed(views)) / len(views) * 100


def category_breakdown(state: PlannerState) -> dict[Category, CategoryCount]:
    views = all_tasks(state)
    out: dict[Category, CategoryCount] = {}
    for category in Category:
        in_cat = [v for v in views if v.task.category == category]
        out[category] = CategoryCount(completed=len(_completed(in_cat)), total=len(in_cat))
    return out


def streak(state: PlannerState) -> int:
    return sum(1 for s in state.daily_stats if s.completed > 0)


def total_hours_completed(state: PlannerState) -> float:
    return sum(v.task.estimated_time for v in _completed(all_tasks(state)))


def average_hours_per_completed(state: PlannerState) -> float:
    done = _completed(all_tasks(state))
    if not done:
        return 0.0
    return sum(v.task.estimated_time for v in done) / len(done)


def day_progress(
    state: PlannerState,
    day: date | str,
    filters: TaskFilter | None = None,
) -> Progress:
    views = tasks_on_date(state, day, filters)
    return Progress(completed=len(_completed(views)), total=len(views))


def goal_progress(goal: Goal) -> GoalProgress:
    return GoalProgress(
        completed=sum(1 for t in goal.tasks if t.status == TaskStatus.DONE),
        total=len(goal.tasks),
        doing=sum(1 for t in goal.tasks if t.status == TaskStatus.DOING),
    )


def timeline(
    state: PlannerState,
    start: date | str,
    days: int = DEFAULT_WINDOW_DAYS,
    filters: TaskFilter | None = None,
    *,
    reference: date | None = None,
) -> list[TimelineDay]:
    first = parse_date(start)
    ref = reference or first
    return [
        TimelineDay(
            date=day,
            label=date_label(day, reference=ref),
            tasks=tuple(tasks_on_date(state, day, filters)),
        )
        for day in next_days(first, days)
    ]


def insights(
    state: PlannerState,
    filters: TaskFilter | None = None,
    *,
    now: datetime | None = None,
) -> Insights:
    return Insights(
        today_tasks=len(tasks_on_date(state, today(now), filters)),
        completion_rate=round(completion_rate(state)),
        streak=streak(state),
        hours_completed=total_hours_completed(state),
    )
