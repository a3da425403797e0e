# src/smartgoals/core/timeline.py

"""Calendar-date helpers shared by the planner, the aggregator and the console."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta


def utc_now() -> datetime:
    return datetime.now(UTC)


def today(now: datetime | None = None) -> date:
    """UTC calendar date of `now` (or of the current time)."""
    moment = now or utc_now()
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.date()


def parse_date(value: date | str) -> date:
    """Accept a date or an ISO YYYY-MM-DD string (a datetime string is cut at 'T')."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    day, _, _ = str(value).strip().partition("T")
    return date.fromisoformat(day)


def format_date(day: date) -> str:
    return day.isoformat()


def next_days(start: date, count: int) -> list[date]:
    """`count` consecutive calendar days starting at `start` (inclusive)."""
    return [start + timedelta(days=i) for i in range(max(0, count))]


def date_label(day: date, *, reference: date | None = None) -> str:
    """
    Human label for a day relative to `reference`:
    Today / Tomorrow / Yesterday, otherwise e.g. "Mon, Jan 1".
    """
    ref = reference or today()
    delta = (day - ref).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Tomorrow"
    if delta == -1:
        return "Yesterday"
    return f"{day:%a}, {day:%b} {day.day}"
