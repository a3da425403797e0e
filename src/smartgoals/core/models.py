# src/smartgoals/core/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Literal

ALL: Literal["all"] = "all"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    The cycle order is fixed: todo -> doing -> done -> todo.
    See core/status.py for the only transition function.
    """

    TODO = "todo"
    DOING = "doing"
    DONE = "done"


class Category(StrEnum):
    WORK = "work"
    STUDY = "study"
    HEALTH = "health"
    MONEY = "money"
    PERSONAL = "personal"


class Timeframe(StrEnum):
    """Granularity label, ordered from coarse to fine."""

    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    priority: Priority
    status: TaskStatus
    estimated_time: float  # hours
    timeframe: Timeframe
    category: Category
    due_date: date
    ai_generated: bool
    completed_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Goal:
    id: str
    title: str
    category: Category
    timeframe: Timeframe
    created_at: datetime
    tasks: tuple[Task, ...] = ()


@dataclass(frozen=True, slots=True)
class DailyStat:
    """Derived per-day summary. Recomputed from tasks, never edited."""

    date: date
    completed: int
    total: int
    hours_spent: float


@dataclass(frozen=True, slots=True)
class TaskView:
    """A task as seen by the aggregator: annotated with its owning goal."""

    task: Task
    goal_id: str
    goal_title: str


@dataclass(frozen=True, slots=True)
class TaskFilter:
    category: Category | Literal["all"] = ALL
    priority: Priority | Literal["all"] = ALL

    def matches(self, task: Task) -> bool:
        if self.category != ALL and task.category != self.category:
            return False
        if self.priority != ALL and task.priority != self.priority:
            return False
        return True

    @classmethod
    def parse(cls, category: str = ALL, priority: str = ALL) -> TaskFilter:
        """Build a filter from raw strings; raises ValueError on unknown values."""
        cat: Category | Literal["all"] = ALL if category == ALL else Category(category)
        pri: Priority | Literal["all"] = ALL if priority == ALL else Priority(priority)
        return cls(category=cat, priority=pri)


NO_FILTER = TaskFilter()
