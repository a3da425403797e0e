# tests/test_planner.py

from __future__ import annotations

from datetime import date, timedelta

import pytest

from smartgoals.core.models import Category, Priority, TaskStatus, Timeframe
from smartgoals.core.planner import PLAN_TEMPLATES, generate_plan


def test_plan_has_five_todo_ai_tasks_with_increasing_effort(now) -> None:
    tasks = generate_plan("Get fit", Category.HEALTH, Timeframe.MONTH, now=now)

    assert len(tasks) == 5
    assert all(t.ai_generated for t in tasks)
    assert all(t.status == TaskStatus.TODO for t in tasks)
    assert all(t.completed_at is None for t in tasks)
    assert [t.estimated_time for t in tasks] == [2, 3, 4, 5, 6]
    assert all(t.category == Category.HEALTH for t in tasks)


def test_titles_and_descriptions_follow_category_template(now) -> None:
    tasks = generate_plan("Get fit", "health", "month", now=now)

    assert [t.title for t in tasks] == [f"Get fit: {s}" for s in PLAN_TEMPLATES[Category.HEALTH]]
    assert tasks[0].title == "Get fit: Set baseline metrics"
    assert {t.description for t in tasks} == {"AI-generated task for Get fit"}


def test_every_category_has_five_steps() -> None:
    assert set(PLAN_TEMPLATES) == set(Category)
    assert all(len(steps) == 5 for steps in PLAN_TEMPLATES.values())


def test_priorities_front_load_urgency(now) -> None:
    tasks = generate_plan("Ship it", Category.WORK, Timeframe.WEEK, now=now)
    assert [t.priority for t in tasks] == [
        Priority.HIGH,
        Priority.MEDIUM,
        Priority.LOW,
        Priority.LOW,
        Priority.LOW,
    ]


@pytest.mark.parametrize(
    ("timeframe", "expected"),
    [
        (Timeframe.YEAR, ["year", "quarter", "month", "year", "quarter"]),
        (Timeframe.MONTH, ["month", "week", "day", "month", "week"]),
        (Timeframe.WEEK, ["week", "day", "day", "week", "day"]),
        (Timeframe.DAY, ["day", "day", "day", "day", "day"]),
    ],
)
def test_step_timeframes_zoom_in_and_clamp_at_day(now, timeframe, expected) -> None:
    tasks = generate_plan("Learn Go", Category.STUDY, timeframe, now=now)
    assert [t.timeframe.value for t in tasks] == expected


@pytest.mark.parametrize(
    ("timeframe", "spacing"),
    [
        (Timeframe.YEAR, 60),
        (Timeframe.QUARTER, 20),
        (Timeframe.MONTH, 7),
        (Timeframe.WEEK, 2),
        (Timeframe.DAY, 2),
    ],
)
def test_due_dates_spread_over_horizon(now, timeframe, spacing) -> None:
    tasks = generate_plan("Save money", Category.MONEY, timeframe, now=now)
    start = date(2024, 1, 1)
    assert [t.due_date for t in tasks] == [start + timedelta(days=i * spacing) for i in range(5)]


def test_ids_unique_within_and_across_calls(now) -> None:
    first = generate_plan("Read more", Category.PERSONAL, Timeframe.MONTH, now=now)
    second = generate_plan("Read more", Category.PERSONAL, Timeframe.MONTH, now=now)

    ids = [t.id for t in first + second]
    assert len(set(ids)) == len(ids)


def test_out_of_domain_category_fails_fast(now) -> None:
    with pytest.raises(ValueError):
        generate_plan("Nope", "hobby", Timeframe.MONTH, now=now)
    with pytest.raises(ValueError):
        generate_plan("Nope", Category.WORK, "decade", now=now)
