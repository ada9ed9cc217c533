"""Executor-local query result cache."""

from __future__ import annotations

from threading import RLock
from typing import Dict, List, Optional

from .base import CacheKey, Row


class LocalCache:
    """
    Result rows keyed by :class:`CacheKey`, scoped to one executor.
    """

    def __init__(self) -> None:
        self._store: Dict[CacheKey, List[Row]] = {}
        self._lock = RLock()

    def get(self, key: CacheKey) -> Optional[List[Row]]:
        with self._lock:
            rows = self._store.get(key)
            if rows is None:
                return None
            return [dict(row) for row in rows]

    def put(self, key: CacheKey, rows: List[Row]) -> None:
        with self._lock:
            self._store[key] = [dict(row) for row in rows]

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
