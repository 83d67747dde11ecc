"""
Per-user storage for the client-side activity cache.

A snapshot is a plain dict ``{"activities": [...], "leaderboard": [...]}``
of JSON-safe values. Repositories only move snapshots around; the tracker
owns their meaning.
"""
from __future__ import annotations

import json
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]


def empty_snapshot() -> Snapshot:
    return {"activities": [], "leaderboard": []}


class ActivityRepository(Protocol):
    def load(self, user_id: str) -> Snapshot: ...

    def save(self, user_id: str, snapshot: Snapshot) -> None: ...

    def clear(self, user_id: str) -> None: ...


class InMemoryActivityRepository:
    def __init__(self):
        self._data: Dict[str, Snapshot] = {}

    def load(self, user_id: str) -> Snapshot:
        return deepcopy(self._data.get(str(user_id))) or empty_snapshot()

    def save(self, user_id: str, snapshot: Snapshot) -> None:
        self._data[str(user_id)] = deepcopy(snapshot)

    def clear(self, user_id: str) -> None:
        self._data.pop(str(user_id), None)


class JsonFileActivityRepository:
    """One ``burnmate-activities-<user_id>.json`` file per user."""

    def __init__(self, directory: Optional[os.PathLike] = None):
        self.directory = Path(directory or Path.home() / ".burnmate")

    def _path(self, user_id: str) -> Path:
        return self.directory / f"burnmate-activities-{user_id}.json"

    def load(self, user_id: str) -> Snapshot:
        path = self._path(user_id)
        if not path.exists():
            return empty_snapshot()
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (json.JSONDecodeError, UnicodeDecodeError):
            data = None
        if not isinstance(data, dict):
            logger.warning("Corrupt activity cache %s, starting empty", path)
            return empty_snapshot()
        snapshot = empty_snapshot()
        for key in snapshot:
            value = data.get(key)
            if isinstance(value, list):
                snapshot[key] = value
        return snapshot

    def save(self, user_id: str, snapshot: Snapshot) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(user_id)
        tmp = path.with_suffix(".json.tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(snapshot, fh, ensure_ascii=False, indent=2)
        os.replace(tmp, path)

    def clear(self, user_id: str) -> None:
        path = self._path(user_id)
        if path.exists():
            path.unlink()
