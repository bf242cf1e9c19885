"""Figma REST - In-memory Cache.

Key/value store with per-entry TTL and LRU-bounded capacity.
Used by the HTTP client to avoid refetching the same GET endpoint.
"""
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar


V = TypeVar("V")


def _now_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class CacheEntry(Generic[V]):
    """A cached value and its bookkeeping timestamps (ms)."""
    value: V
    expires_at: Optional[float]
    last_accessed: float

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and self.expires_at <= now


class Cache(Generic[V]):
    """LRU cache with optional TTL.

    Entries are kept in an ordered map from least to most recently used,
    so the head of the map is always the eviction candidate. Expired
    entries are dropped lazily when they are looked at.
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        default_ttl_ms: Optional[float] = None,
        clock: Callable[[], float] = _now_ms
    ):
        """Create a cache.

        Args:
            max_size: Maximum number of entries (None for unbounded)
            default_ttl_ms: TTL applied when `set` gets none (None for no expiry)
            clock: Returns the current time in milliseconds
        """
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be a positive integer")
        if default_ttl_ms is not None and default_ttl_ms <= 0:
            raise ValueError("default_ttl_ms must be positive")

        self.max_size = max_size
        self.default_ttl_ms = default_ttl_ms
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry[V]]" = OrderedDict()

    def get(self, key: str) -> Optional[V]:
        """Return the value for key, or None if missing or expired."""
        entry = self._live_entry(key)
        if entry is None:
            return None

        entry.last_accessed = self._clock()
        self._entries.move_to_end(key)
        return entry.value

    def set(self, key: str, value: V, ttl_ms: Optional[float] = None) -> None:
        """Store a value.

        Args:
            key: Cache key
            value: Value to store (kept by reference)
            ttl_ms: Lifetime in ms, defaults to the cache's default TTL
        """
        now = self._clock()
        effective_ttl = ttl_ms if ttl_ms is not None else self.default_ttl_ms
        expires_at = now + effective_ttl if effective_ttl else None

        self._entries[key] = CacheEntry(value=value, expires_at=expires_at, last_accessed=now)
        self._entries.move_to_end(key)

        if self.max_size is not None and len(self._entries) > self.max_size:
            # Expired entries go first so a live one is not evicted for nothing
            self._purge_expired(now)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def has(self, key: str) -> bool:
        """Check whether a live entry exists. Does not refresh recency."""
        return self._live_entry(key) is not None

    def delete(self, key: str) -> bool:
        """Remove key. Returns True if a live entry was removed."""
        entry = self._entries.pop(key, None)
        return entry is not None and not entry.is_expired(self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        """Number of entries that have not expired."""
        self._purge_expired(self._clock())
        return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def _live_entry(self, key: str) -> Optional[CacheEntry[V]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]


def create_cache(
    max_size: Optional[int] = None,
    default_ttl_ms: Optional[float] = None,
    clock: Callable[[], float] = _now_ms
) -> Cache[Any]:
    """Create a new independent cache instance."""
    return Cache(max_size=max_size, default_ttl_ms=default_ttl_ms, clock=clock)
