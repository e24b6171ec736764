"""Result cache for loaded bindings.

Entries are stored once on success and never evicted; the cache lives as
long as the resolver that owns it.
"""

from __future__ import annotations

import threading
from typing import Any
from typing import NamedTuple


class CacheKey(NamedTuple):
    """Normalized module name plus the search origin it was requested from."""

    name: str
    origin: str


class BindingCache:
    """Thread-safe memo of loaded artifacts keyed by CacheKey.

    lock_for() hands out one lock per key so that concurrent callers asking
    for the same binding wait for a single search instead of repeating it.
    """

    def __init__(self):
        self._entries: dict[CacheKey, Any] = {}
        self._key_locks: dict[CacheKey, threading.Lock] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey, default: Any = None) -> Any:
        with self._lock:
            return self._entries.get(key, default)

    def set(self, key: CacheKey, value: Any) -> Any:
        """Store value unless the key is already cached.

        Returns:
            The cached value (the earlier one if another caller won)
        """
        with self._lock:
            return self._entries.setdefault(key, value)

    def lock_for(self, key: CacheKey) -> threading.Lock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"BindingCache({len(self)} entries)"
