"""Cache — LRU store and async memoization with in-flight dedup."""

from tezos_bridge.cache.memoize import MemoizedAsync, make_lru_cache
from tezos_bridge.cache.memory import MemoryCache

__all__ = ["MemoizedAsync", "MemoryCache", "make_lru_cache"]
