# src/smartgoals/core/ports.py

"""
Ports (interfaces) used around the core.

The core never performs I/O. Callers persist snapshots through a
KeyValueStore after each successful mutation; the concrete store
(JSON file, in-memory fake in tests) is swappable.
"""

from __future__ import annotations

from typing import Any, Protocol

GOALS_KEY = "goals"
DAILY_STATS_KEY = "daily_stats"


class KeyValueStore(Protocol):
    """Opaque persistence: plain JSON-compatible values keyed by name."""

    def get(self, key: str) -> Any | None: ...
    def set(self, key: str, value: Any) -> None: ...
