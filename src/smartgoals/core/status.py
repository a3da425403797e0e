# src/smartgoals/core/status.py

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from .models import Task, TaskStatus
from .timeline import utc_now

STATUS_CYCLE: tuple[TaskStatus, ...] = (TaskStatus.TODO, TaskStatus.DOING, TaskStatus.DONE)


def next_status(status: TaskStatus) -> TaskStatus:
    idx = STATUS_CYCLE.index(TaskStatus(status))
    return STATUS_CYCLE[(idx + 1) % len(STATUS_CYCLE)]


def advance(task: Task, *, now: datetime | None = None) -> Task:
    """
    Move a task one step along todo -> doing -> done -> todo.

    completed_at is stamped when entering done and cleared otherwise,
    so it is set iff status == done.
    """
    status = next_status(task.status)
    completed_at = (now or utc_now()) if status == TaskStatus.DONE else None
    return replace(task, status=status, completed_at=completed_at)
