"""In-memory LRU store with TTL support."""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Generic, TypeVar

V = TypeVar("V")


class MemoryCache(Generic[V]):
    """In-memory LRU store with per-entry TTL.

    Holds arbitrary Python values (the memoizer stores futures here), so
    unlike a Redis-style backend nothing is serialized. All methods are
    synchronous: there is no I/O, and under a single event loop every call
    completes without yielding.
    """

    def __init__(self, max_size: int = 100, ttl: float | None = None) -> None:
        """Initialize the store.

        Args:
            max_size: Maximum number of keys to store before evicting LRU.
            ttl: Default time-to-live in seconds. None = no expiry.
        """
        self._max_size = max_size
        self._ttl = ttl
        self._cache: OrderedDict[str, tuple[V, float | None]] = OrderedDict()
        # Format: {key: (value, expiry_timestamp_or_none)}

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return self.exists(key)

    def get(self, key: str) -> V | None:
        """Get a value from the cache.

        Args:
            key: Cache key.

        Returns:
            The cached value, or None if not found/expired.
        """
        if key not in self._cache:
            return None

        value, expiry = self._cache[key]

        if expiry is not None and time.monotonic() > expiry:
            del self._cache[key]
            return None

        # Move to end (LRU)
        self._cache.move_to_end(key)
        return value

    def set(self, key: str, value: V, ttl: float | None = None) -> str | None:
        """Set a value in the cache.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Time-to-live in seconds; falls back to the store default.

        Returns:
            The key evicted to make room, if any.
        """
        effective_ttl = self._ttl if ttl is None else ttl
        expiry = None if effective_ttl is None else time.monotonic() + effective_ttl

        # Remove if exists (to update position)
        if key in self._cache:
            del self._cache[key]

        self._cache[key] = (value, expiry)

        if len(self._cache) > self._max_size:
            evicted, _ = self._cache.popitem(last=False)
            return evicted
        return None

    def peek(self, key: str) -> V | None:
        """Return the stored value without touching LRU order or expiry."""
        entry = self._cache.get(key)
        return None if entry is None else entry[0]

    def touch(self, key: str, ttl: float | None = None) -> None:
        """Restart the TTL window of an existing entry without reordering it."""
        if key not in self._cache:
            return
        effective_ttl = self._ttl if ttl is None else ttl
        value, _ = self._cache[key]
        expiry = None if effective_ttl is None else time.monotonic() + effective_ttl
        self._cache[key] = (value, expiry)

    def delete(self, key: str) -> None:
        """Delete a key from the cache."""
        self._cache.pop(key, None)

    def exists(self, key: str) -> bool:
        """Check if a key exists and is not expired."""
        if key not in self._cache:
            return False

        _, expiry = self._cache[key]

        if expiry is not None and time.monotonic() > expiry:
            del self._cache[key]
            return False

        return True

    def flush(self) -> None:
        """Clear all keys from the cache."""
        self._cache.clear()
