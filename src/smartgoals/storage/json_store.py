# src/smartgoals/storage/json_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    Key-value store persisted as a single JSON object on disk.

    - reads are served from an in-memory copy loaded once at construction
    - every set() rewrites the whole file via tmp + os.replace
    - an unreadable/corrupt file is treated as empty (logged, not raised)
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] = self._load()
        logger.info("JsonFileStore ready path=%s keys=%d", self._path, len(self._data))

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError, RecursionError):
            logger.exception("Failed to read store %s; starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store %s does not hold an object; starting empty", self._path)
            return {}
        return data

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._flush()

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.debug("Store flushed path=%s keys=%d", self._path, len(self._data))
