# tests/test_stats.py

from __future__ import annotations

from datetime import date, timedelta

import pytest

from smartgoals.core import stats
from smartgoals.core.models import Category, Priority, TaskFilter, TaskStatus, Timeframe
from smartgoals.core.state import PlannerState
from smartgoals.core.store import advance_task_status, create_goal, create_quick_task

JAN_1 = date(2024, 1, 1)


def _complete(state, goal_id, task_id, now):
    for _ in range(2):
        state, ok = advance_task_status(state, goal_id, task_id, now=now)
        assert ok
    return state


@pytest.fixture()
def week_goal(empty_state, now) -> PlannerState:
    # "week" pacing: due Jan 1, 3, 5, 7, 9
    state, _ = create_goal(empty_state, "Get fit", Category.HEALTH, Timeframe.WEEK, now=now)
    return state


def test_empty_state_aggregates_are_zero(empty_state) -> None:
    assert stats.completion_rate(empty_state) == 0
    assert stats.total_hours_completed(empty_state) == 0
    assert stats.average_hours_per_completed(empty_state) == 0
    assert stats.streak(empty_state) == 0
    assert stats.all_tasks(empty_state) == []
    assert all(c.total == 0 for c in stats.category_breakdown(empty_state).values())


def test_all_tasks_annotates_owning_goal(week_goal) -> None:
    views = stats.all_tasks(week_goal)
    goal = week_goal.goals[0]
    assert len(views) == 5
    assert {v.goal_id for v in views} == {goal.id}
    assert {v.goal_title for v in views} == {"Get fit"}


def test_tasks_on_date_exact_match_and_filters(week_goal, now) -> None:
    state, _ = create_quick_task(week_goal, "Pay rent", "", "money", "high", JAN_1, 0.5, now=now)

    assert len(stats.tasks_on_date(state, JAN_1)) == 2
    assert len(stats.tasks_on_date(state, "2024-01-01")) == 2
    assert stats.tasks_on_date(state, date(2024, 1, 2)) == []

    only_money = stats.tasks_on_date(state, JAN_1, TaskFilter(category=Category.MONEY))
    assert [v.task.title for v in only_money] == ["Pay rent"]

    # Conjunctive: health AND low matches nothing on Jan 1 (the health task is high priority).
    both = TaskFilter(category=Category.HEALTH, priority=Priority.LOW)
    assert stats.tasks_on_date(state, JAN_1, both) == []

    assert len(stats.tasks_on_date(state, JAN_1, TaskFilter.parse("all", "high"))) == 2


def test_daily_stats_counts_completion_and_hours(week_goal, now) -> None:
    before = stats.daily_stats(week_goal, JAN_1, 7)
    assert [s.total for s in before] == [1, 0, 1, 0, 1, 0, 1]
    assert all(s.completed == 0 and s.hours_spent == 0 for s in before)

    goal = week_goal.goals[0]
    target = goal.tasks[1]  # due Jan 3, 3 hours
    state = _complete(week_goal, goal.id, target.id, now)

    after = stats.daily_stats(state, JAN_1, 7)
    assert after[2].date == target.due_date
    assert after[2].completed == before[2].completed + 1
    assert after[2].hours_spent == before[2].hours_spent + target.estimated_time
    assert [s.completed for i, s in enumerate(after) if i != 2] == [0] * 6

    # The store keeps the same window in state.daily_stats.
    assert state.daily_stats == after


def test_daily_stats_window_length(week_goal) -> None:
    window = stats.daily_stats(week_goal, "2024-01-05", 3)
    assert [s.date for s in window] == [date(2024, 1, 5), date(2024, 1, 6), date(2024, 1, 7)]
    assert [s.total for s in window] == [1, 0, 1]


def test_completion_rate_and_hours(week_goal, now) -> None:
    goal = week_goal.goals[0]
    state = _complete(week_goal, goal.id, goal.tasks[0].id, now)  # 2h
    state = _complete(state, goal.id, goal.tasks[3].id, now)  # 5h

    assert stats.completion_rate(state) == pytest.approx(40.0)
    assert stats.total_hours_completed(state) == 7
    assert stats.average_hours_per_completed(state) == pytest.approx(3.5)

    breakdown = stats.category_breakdown(state)
    assert breakdown[Category.HEALTH] == stats.CategoryCount(completed=2, total=5)


def test_in_progress_tasks_do_not_count_as_completed(week_goal, now) -> None:
    goal = week_goal.goals[0]
    state, _ = advance_task_status(week_goal, goal.id, goal.tasks[0].id, now=now)

    assert stats.completion_rate(state) == 0
    assert stats.daily_stats(state, JAN_1, 1)[0].completed == 0
    assert stats.goal_progress(state.goals[0]).doing == 1


def test_streak_counts_active_days_not_consecutive_runs(week_goal, now) -> None:
    goal = week_goal.goals[0]
    state = _complete(week_goal, goal.id, goal.tasks[0].id, now)  # Jan 1
    state = _complete(state, goal.id, goal.tasks[2].id, now)  # Jan 5

    # Jan 1 and Jan 5 are not adjacent; both still count.
    assert stats.streak(state) == 2


def test_streak_ignores_completions_outside_window(week_goal, now) -> None:
    goal = week_goal.goals[0]
    state = _complete(week_goal, goal.id, goal.tasks[4].id, now)  # Jan 9, outside Jan 1-7

    assert stats.streak(state) == 0
    assert stats.completion_rate(state) == pytest.approx(20.0)


def test_goal_and_day_progress(week_goal, now) -> None:
    goal = week_goal.goals[0]
    state = _complete(week_goal, goal.id, goal.tasks[0].id, now)

    progress = stats.goal_progress(state.goals[0])
    assert (progress.completed, progress.doing, progress.total) == (1, 0, 5)
    assert progress.percent == pytest.approx(20.0)

    day = stats.day_progress(state, JAN_1)
    assert (day.completed, day.total) == (1, 1)
    assert day.percent == 100

    empty_day = stats.day_progress(state, date(2024, 1, 2))
    assert empty_day.percent == 0


def test_timeline_buckets_and_labels(week_goal) -> None:
    days = stats.timeline(week_goal, JAN_1, 7, reference=JAN_1)

    assert [d.date for d in days] == [JAN_1 + timedelta(days=i) for i in range(7)]
    assert days[0].label == "Today"
    assert days[1].label == "Tomorrow"
    assert days[2].label == "Wed, Jan 3"
    assert [len(d.tasks) for d in days] == [1, 0, 1, 0, 1, 0, 1]


def test_insights_summary(week_goal, now) -> None:
    goal = week_goal.goals[0]
    state = _complete(week_goal, goal.id, goal.tasks[0].id, now)

    info = stats.insights(state, now=now)
    assert info.today_tasks == 1
    assert info.completion_rate == 20
    assert info.streak == 1
    assert info.hours_completed == 2
    assert len(info.tips) == 4


def test_done_task_counts_without_window_refresh(now) -> None:
    # daily_stats() is a pure function of the task collection.
    state, _ = create_quick_task(PlannerState(), "Buy milk", "", "personal", "low", JAN_1, 1, now=now)
    goal = state.goals[0]
    state = _complete(state, goal.id, goal.tasks[0].id, now)

    assert state.goals[0].tasks[0].status == TaskStatus.DONE
    assert stats.daily_stats(state, JAN_1, 1)[0].hours_spent == 1


def test_insights_today_count_applies_filters(week_goal, now) -> None:
    state, _ = create_quick_task(week_goal, "Pay rent", "", "money", "high", JAN_1, 1, now=now)

    assert stats.insights(state, now=now).today_tasks == 2
    money = TaskFilter(category=Category.MONEY)
    assert stats.insights(state, money, now=now).today_tasks == 1
    urgent = TaskFilter(priority=Priority.HIGH)
    assert stats.insights(state, urgent, now=now).today_tasks == 2
