"""Async memoization keyed by a string derived from the call arguments.

``make_lru_cache(fetch, key_fn)`` wraps an expensive coroutine function so
that concurrent callers asking for the same key share one in-flight
computation, resolved results are reused while fresh, and the least recently
used keys are dropped once capacity is exceeded.

Usage::

    estimate = make_lru_cache(
        engine_estimate,
        lambda account, addr: f"{account.id}|{addr}",
        max_size=100,
        ttl=300,
    )
    limits = await estimate(account, "tz1...")
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from tezos_bridge.cache.memory import MemoryCache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from tezos_bridge.metrics.collector import BridgeMetrics

logger = logging.getLogger(__name__)

R = TypeVar("R")


class MemoizedAsync(Generic[R]):
    """Callable wrapper returned by :func:`make_lru_cache`.

    Each entry holds a single future. A pending future is returned to every
    caller with the same key, which is what guarantees at most one in-flight
    computation per key. Failed or cancelled futures are evicted as soon as
    they settle, so a later call recomputes instead of replaying the error.
    """

    def __init__(
        self,
        fetch: Callable[..., Awaitable[R]],
        key_fn: Callable[..., str],
        *,
        max_size: int = 100,
        ttl: float | None = None,
        name: str = "",
        metrics: BridgeMetrics | None = None,
    ) -> None:
        self._fetch = fetch
        self._key_fn = key_fn
        self._ttl = ttl
        self._name = name or getattr(fetch, "__name__", "memoized")
        self._metrics = metrics
        # No default TTL on the store: pending entries must not expire.
        self._store: MemoryCache[asyncio.Future[R]] = MemoryCache(max_size=max_size)

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._store)

    async def __call__(self, *args: Any) -> R:
        key = self._key_fn(*args)
        future = self._store.get(key)
        if future is not None:
            logger.debug("cache hit %s key=%s", self._name, key)
            if self._metrics is not None:
                self._metrics.cache_hit(self._name)
        else:
            logger.debug("cache miss %s key=%s", self._name, key)
            if self._metrics is not None:
                self._metrics.cache_miss(self._name)
            future = self._start(key, args)
        # Shield so one caller giving up does not cancel the shared work.
        return await asyncio.shield(future)

    def reset(self, *args: Any) -> None:
        """Evict the entry for these arguments, if any."""
        self._store.delete(self._key_fn(*args))

    async def force(self, *args: Any) -> R:
        """Evict the entry for these arguments and recompute it."""
        self.reset(*args)
        return await self(*args)

    def clear(self) -> None:
        """Drop every entry."""
        self._store.flush()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _start(self, key: str, args: tuple[Any, ...]) -> asyncio.Future[R]:
        future: asyncio.Future[R] = asyncio.ensure_future(self._fetch(*args))
        # Stored before the first await so concurrent callers find it.
        evicted = self._store.set(key, future, ttl=None)
        if evicted is not None:
            logger.debug("cache evict %s key=%s", self._name, evicted)
        future.add_done_callback(lambda f: self._settled(key, f))
        return future

    def _settled(self, key: str, future: asyncio.Future[R]) -> None:
        if self._store.peek(key) is not future:
            # Replaced by force() or evicted meanwhile.
            if not future.cancelled():
                future.exception()
            return
        if future.cancelled() or future.exception() is not None:
            self._store.delete(key)
            return
        # Freshness window starts when the value is known.
        self._store.touch(key, ttl=self._ttl)


def make_lru_cache(
    fetch: Callable[..., Awaitable[R]],
    key_fn: Callable[..., str],
    *,
    max_size: int = 100,
    ttl: float | None = None,
    name: str = "",
    metrics: BridgeMetrics | None = None,
) -> MemoizedAsync[R]:
    """Memoize an async function behind an LRU store.

    Args:
        fetch: The expensive coroutine function.
        key_fn: Builds the cache key from the same arguments as *fetch*.
        max_size: Number of keys kept before evicting the least recently used.
        ttl: Seconds a resolved value stays fresh. None = until evicted.
        name: Label used in logs and metrics.
        metrics: Optional metrics sink for hit/miss counters.

    Returns:
        A :class:`MemoizedAsync` with the same call signature as *fetch*.
    """
    return MemoizedAsync(
        fetch, key_fn, max_size=max_size, ttl=ttl, name=name, metrics=metrics
    )
