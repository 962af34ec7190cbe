"""
In-process query cache keyed by tuples, invalidated by key prefix.

Reads are stored under keys such as ``("posts", 20, 0)`` or ``("likes", post_id)``;
a mutation drops every key sharing a prefix, e.g. ``invalidate(("posts",))``
clears all feed pages at once.
"""

import logging
import time
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
QueryKey = Tuple[Any, ...]

_MISSING = object()


def make_key(key: Iterable[Any]) -> QueryKey:
    """Normalize a key to a tuple of hashable parts (ids are compared as strings)."""
    if isinstance(key, str):
        return (key,)
    return tuple(str(part) if not isinstance(part, (str, int, float, bool, type(None))) else part for part in key)


class QueryCache:
    def __init__(
        self,
        ttl_seconds: float = 30.0,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[QueryKey, Tuple[Any, float]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Iterable[Any]) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def get(self, key: Iterable[Any], default: Any = None) -> Any:
        key = make_key(key)
        entry = self._entries.get(key)
        if entry is None:
            return default
        value, expiry = entry
        if self._clock() >= expiry:
            del self._entries[key]
            return default
        return value

    def set(self, key: Iterable[Any], value: Any) -> None:
        key = make_key(key)
        self._entries.pop(key, None)
        if self.max_entries <= 0:
            return
        if len(self._entries) >= self.max_entries:
            self._evict()
        self._entries[key] = (value, self._clock() + self.ttl_seconds)

    def fetch(self, key: Iterable[Any], loader: Callable[[], T]) -> T:
        """Return the fresh cached value for ``key`` or load, store and return it."""
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            return value
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, prefix: Iterable[Any]) -> int:
        prefix = make_key(prefix)
        size = len(prefix)
        stale = [key for key in self._entries if key[:size] == prefix]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Invalidated %d cache entries for %s", len(stale), prefix)
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def _evict(self) -> None:
        now = self._clock()
        for key in [k for k, (_, expiry) in self._entries.items() if now >= expiry]:
            del self._entries[key]
        # dicts keep insertion order, so the first key is the oldest write
        while len(self._entries) >= self.max_entries:
            oldest: Optional[QueryKey] = next(iter(self._entries), None)
            if oldest is None:
                break
            del self._entries[oldest]
