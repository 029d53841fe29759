"""Thread-safe in-memory cache of resolved icons."""

from __future__ import annotations

import threading

from iconkit.icon_set import IconRecord


class IconCache:
    """Memoizes IconRecords keyed by ``"{prefix}:{name}"``.

    One lock guards every operation.  Entries live until clear().
    """

    def __init__(self):
        self._store: dict[str, IconRecord] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(prefix: str, name: str) -> str:
        return f"{prefix}:{name}"

    def get(self, prefix: str, name: str) -> IconRecord | None:
        with self._lock:
            return self._store.get(self._key(prefix, name))

    def set(self, prefix: str, name: str, record: IconRecord) -> IconRecord:
        """Store an immutable snapshot of *record* and return it."""
        snapshot = IconRecord(body=record.body, width=record.width, height=record.height)
        with self._lock:
            self._store[self._key(prefix, name)] = snapshot
        return snapshot

    def clear(self) -> int:
        """Drop every entry. Returns how many were removed."""
        with self._lock:
            count = len(self._store)
            self._store.clear()
        return count

    def size(self) -> int:
        with self._lock:
            return len(self._store)
