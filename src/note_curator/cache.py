"""Scoped memo cache with TTL and size-bounded eviction.

A cache instance is owned by whoever runs a curation batch and is passed in
explicitly; nothing in this package keeps module-level cached state.
"""

from __future__ import annotations

import hashlib
import time
from collections import OrderedDict
from typing import Any, Callable, Hashable, Optional, Tuple

_MISSING = object()


def content_key(*parts: str) -> str:
    """Build a stable SHA-256 key from text parts."""
    h = hashlib.sha256()
    for part in parts:
        data = (part or "").encode("utf-8")
        # Length prefix keeps ("ab", "c") and ("a", "bc") apart.
        h.update(str(len(data)).encode("ascii"))
        h.update(b":")
        h.update(data)
    return h.hexdigest()


class TTLCache:
    """In-memory cache whose entries expire after ``ttl_seconds``.

    When more than ``max_entries`` are stored, expired entries are purged
    first and then the oldest inserted entries are evicted.
    """

    def __init__(
        self,
        max_entries: int = 1000,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[Hashable, Tuple[float, Any]]" = OrderedDict()

    @classmethod
    def from_config(cls, cfg: Optional[dict]) -> "TTLCache":
        cfg = cfg or {}
        return cls(
            max_entries=int(cfg.get("max_entries", 1000)),
            ttl_seconds=float(cfg.get("ttl_seconds", 300.0)),
        )

    def _expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at >= self.ttl_seconds

    def get(self, key: Hashable, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default
        stored_at, value = entry
        if self._expired(stored_at, self._clock()):
            del self._entries[key]
            return default
        return value

    def set(self, key: Hashable, value: Any) -> None:
        # Re-inserting moves the key to the newest position.
        self._entries.pop(key, None)
        self._entries[key] = (self._clock(), value)
        if len(self._entries) > self.max_entries:
            self.purge_expired()
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = compute()
            self.set(key, value)
        return value

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        stale = [k for k, (stored_at, _) in self._entries.items() if self._expired(stored_at, now)]
        for k in stale:
            del self._entries[k]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        return len(self._entries)
