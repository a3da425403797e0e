# src/smartgoals/core/serialization.py

"""
Plain-record codec for Goals, Tasks and DailyStats.

Wire shape uses camelCase keys (estimatedTime, dueDate, aiGenerated,
completedAt, createdAt, hoursSpent) and ISO strings for dates/timestamps.

Decoding is lenient: a payload that is not a list yields [], a record
that cannot be decoded is skipped with a warning.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .models import Category, DailyStat, Goal, Priority, Task, TaskStatus, Timeframe
from .timeline import format_date, parse_date

logger = logging.getLogger(__name__)


# ---- encoding ----


def _format_ts(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).isoformat().replace("+00:00", "Z")


def task_to_record(task: Task) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "priority": task.priority.value,
        "status": task.status.value,
        "estimatedTime": task.estimated_time,
        "timeframe": task.timeframe.value,
        "category": task.category.value,
        "dueDate": format_date(task.due_date),
        "aiGenerated": task.ai_generated,
    }
    if task.completed_at is not None:
        record["completedAt"] = _format_ts(task.completed_at)
    return record


def goal_to_record(goal: Goal) -> dict[str, Any]:
    return {
        "id": goal.id,
        "title": goal.title,
        "category": goal.category.value,
        "timeframe": goal.timeframe.value,
        "createdAt": _format_ts(goal.created_at),
        "tasks": [task_to_record(t) for t in goal.tasks],
    }


def daily_stat_to_record(stat: DailyStat) -> dict[str, Any]:
    return {
        "date": format_date(stat.date),
        "completed": stat.completed,
        "total": stat.total,
        "hoursSpent": stat.hours_spent,
    }


def dump_goals(goals) -> list[dict[str, Any]]:
    return [goal_to_record(g) for g in goals]


def dump_daily_stats(stats) -> list[dict[str, Any]]:
    return [daily_stat_to_record(s) for s in stats]


# ---- decoding ----


def _parse_ts(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"invalid timestamp: {raw!r}")
    ts = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _require_str(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"missing {key}")
    return value


def _hours(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"invalid hours: {raw!r}")
    return float(raw)


def task_from_record(record: Any) -> Task:
    if not isinstance(record, dict):
        raise ValueError("task record is not an object")

    status = TaskStatus(record.get("status"))
    completed_raw = record.get("completedAt")
    completed_at = _parse_ts(completed_raw) if completed_raw else None

    # Restore the done <-> completedAt pairing if a writer broke it.
    if status == TaskStatus.DONE and completed_at is None:
        raise ValueError("done task without completedAt")
    if status != TaskStatus.DONE:
        completed_at = None

    return Task(
        id=_require_str(record, "id"),
        title=str(record.get("title") or ""),
        description=str(record.get("description") or ""),
        priority=Priority(record.get("priority")),
        status=status,
        estimated_time=_hours(record.get("estimatedTime")),
        timeframe=Timeframe(record.get("timeframe")),
        category=Category(record.get("category")),
        due_date=parse_date(_require_str(record, "dueDate")),
        ai_generated=bool(record.get("aiGenerated", False)),
        completed_at=completed_at,
    )


def goal_from_record(record: Any) -> Goal:
    if not isinstance(record, dict):
        raise ValueError("goal record is not an object")

    raw_tasks = record.get("tasks") or []
    if not isinstance(raw_tasks, list):
        raise ValueError("goal tasks is not a list")

    goal_id = _require_str(record, "id")
    tasks: list[Task] = []
    for raw in raw_tasks:
        try:
            tasks.append(task_from_record(raw))
        except (ValueError, TypeError) as e:
            logger.warning("Skipping malformed task in goal=%s: %s", goal_id, e)

    return Goal(
        id=goal_id,
        title=str(record.get("title") or ""),
        category=Category(record.get("category")),
        timeframe=Timeframe(record.get("timeframe")),
        created_at=_parse_ts(record.get("createdAt")),
        tasks=tuple(tasks),
    )


def daily_stat_from_record(record: Any) -> DailyStat:
    if not isinstance(record, dict):
        raise ValueError("daily stat record is not an object")
    completed = record.get("completed")
    total = record.get("total")
    if not isinstance(completed, int) or not isinstance(total, int):
        raise ValueError("daily stat counts must be integers")
    return DailyStat(
        date=parse_date(_require_str(record, "date")),
        completed=completed,
        total=total,
        hours_spent=_hours(record.get("hoursSpent", 0)),
    )


def _decode_payload(payload: Any, what: str) -> list[Any]:
    if payload is None:
        return []
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8", errors="replace")
    if isinstance(payload, str):
        if not payload.strip():
            return []
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.warning("Ignoring unreadable %s payload: %s", what, e)
            return []
    if not isinstance(payload, list):
        logger.warning("Ignoring %s payload of type %s", what, type(payload).__name__)
        return []
    return payload


def parse_goals(payload: Any) -> list[Goal]:
    goals: list[Goal] = []
    for raw in _decode_payload(payload, "goals"):
        try:
            goals.append(goal_from_record(raw))
        except (ValueError, TypeError) as e:
            logger.warning("Skipping malformed goal record: %s", e)
    return goals


def parse_daily_stats(payload: Any) -> list[DailyStat]:
    stats: list[DailyStat] = []
    for raw in _decode_payload(payload, "daily_stats"):
        try:
            stats.append(daily_stat_from_record(raw))
        except (ValueError, TypeError) as e:
            logger.warning("Skipping malformed daily stat record: %s", e)
    return stats
