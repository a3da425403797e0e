# tests/test_json_store.py

from __future__ import annotations

import json
from pathlib import Path

from smartgoals.core.ports import DAILY_STATS_KEY, GOALS_KEY
from smartgoals.core.serialization import dump_daily_stats, dump_goals
from smartgoals.core.state import load_initial_state
from smartgoals.core.store import create_goal
from smartgoals.storage.json_store import JsonFileStore


def test_set_get_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "state.json"
    store = JsonFileStore(path)
    assert store.get(GOALS_KEY) is None

    store.set(GOALS_KEY, [{"id": "g1"}])
    store.set(DAILY_STATS_KEY, [])

    reopened = JsonFileStore(path)
    assert reopened.get(GOALS_KEY) == [{"id": "g1"}]
    assert reopened.get(DAILY_STATS_KEY) == []
    assert json.loads(path.read_text("utf-8"))[GOALS_KEY] == [{"id": "g1"}]
    assert not path.with_suffix(".tmp").exists()


def test_corrupt_or_foreign_file_is_treated_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not valid json", "utf-8")
    assert JsonFileStore(path).get(GOALS_KEY) is None

    path.write_text("[1, 2, 3]", "utf-8")
    store = JsonFileStore(path)
    assert store.get(GOALS_KEY) is None

    # Writing replaces the bad content.
    store.set(GOALS_KEY, [])
    assert json.loads(path.read_text("utf-8")) == {GOALS_KEY: []}


def test_planner_state_survives_file_round_trip(tmp_path: Path, empty_state, now) -> None:
    state, _ = create_goal(empty_state, "Learn Rust", "study", "quarter", now=now)
    store = JsonFileStore(tmp_path / "state.json")
    store.set(GOALS_KEY, dump_goals(state.goals))
    store.set(DAILY_STATS_KEY, dump_daily_stats(state.daily_stats))

    reopened = JsonFileStore(tmp_path / "state.json")
    reloaded = load_initial_state(reopened.get(GOALS_KEY), reopened.get(DAILY_STATS_KEY))
    assert reloaded.goals == state.goals
    assert reloaded.daily_stats == state.daily_stats


def test_deeply_nested_file_is_treated_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("[" * 100_000 + "]" * 100_000, "utf-8")
    assert JsonFileStore(path).get(GOALS_KEY) is None
