# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from smartgoals.cli.bootstrap import AppSession, create_session
from smartgoals.config import Settings
from smartgoals.core.state import PlannerState

from .fakes import FakeKeyValueStore

# Monday; every time-dependent test runs against this instant.
NOW = datetime(2024, 1, 1, 9, 30, tzinfo=UTC)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def empty_state() -> PlannerState:
    return PlannerState()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test tmp dir (real config is never read)."""
    return Settings(
        app_name="smartgoals-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        store_path=tmp_path / "state.json",
        stats_window_days=7,
        quick_task_hours=1.5,
    )


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def session(settings: Settings, kv: FakeKeyValueStore) -> AppSession:
    """AppSession wired to an in-memory store and a frozen clock."""
    return create_session(settings=settings, store=kv, clock=lambda: NOW)
