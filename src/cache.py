"""In-memory cache of timestamped values."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, Optional, TypeVar
import threading

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    fetched_at: datetime


class TimedCache(Generic[T]):
    """Thread-safe cache keyed by symbol.

    Entries are never evicted on expiry: callers ask for a fresh entry with
    ``get_fresh`` and may still fall back to a stale one with ``get``.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], datetime] = utcnow):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: T, fetched_at: Optional[datetime] = None) -> CacheEntry[T]:
        """Store value stamped with ``fetched_at`` (now by default)."""
        entry = CacheEntry(value=value, fetched_at=fetched_at or self._clock())
        with self._lock:
            self._cache[key] = entry
        return entry

    def get(self, key: str) -> Optional[CacheEntry[T]]:
        """Return the entry whatever its age."""
        with self._lock:
            return self._cache.get(key)

    def get_fresh(self, key: str) -> Optional[CacheEntry[T]]:
        """Return the entry only while its age is below the TTL."""
        entry = self.get(key)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry

    def is_fresh(self, entry: CacheEntry[Any]) -> bool:
        age = (self._clock() - entry.fetched_at).total_seconds()
        return age < self.ttl_seconds

    def delete(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
