"""Metrics collector — Prometheus counters and histograms.

- ``tezos_bridge_cache_requests_total`` counter-vec (cache, result=hit|miss)
- ``tezos_bridge_prepare_transaction_histogram``
- ``tezos_bridge_transaction_status_histogram``
- ``tezos_bridge_sign_and_broadcast_histogram``
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Counter, Histogram

if TYPE_CHECKING:
    from collections.abc import Iterator


_PREFIX = "tezos_bridge"


class MetricsCollector:
    """Low-level Prometheus collector that owns the registry.

    Use :class:`BridgeMetrics` for the high-level tracking interface.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._registry

    def histogram(self, name: str, doc: str, labels: tuple[str, ...] = ()) -> Histogram:
        """Register and return a Histogram."""
        return Histogram(name, doc, labels, registry=self._registry)

    def counter(self, name: str, doc: str, labels: tuple[str, ...] = ()) -> Counter:
        """Register and return a Counter."""
        return Counter(name, doc, labels, registry=self._registry)


class BridgeMetrics:
    """High-level bridge metrics.

    All histograms track operation duration in seconds.
    """

    def __init__(self, collector: MetricsCollector | None = None) -> None:
        self._collector = collector or MetricsCollector()

        self._cache_requests = self._collector.counter(
            f"{_PREFIX}_cache_requests",
            "Memoized estimation lookups by cache and result",
            ("cache", "result"),
        )
        self._prepare = self._collector.histogram(
            f"{_PREFIX}_prepare_transaction_histogram",
            "Duration of transaction preparation",
        )
        self._status = self._collector.histogram(
            f"{_PREFIX}_transaction_status_histogram",
            "Duration of transaction status evaluation",
        )
        self._broadcast = self._collector.histogram(
            f"{_PREFIX}_sign_and_broadcast_histogram",
            "Duration of sign-and-broadcast calls",
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying Prometheus registry."""
        return self._collector.registry

    # -- Cache counters --

    def cache_hit(self, cache: str) -> None:
        self._cache_requests.labels(cache=cache, result="hit").inc()

    def cache_miss(self, cache: str) -> None:
        self._cache_requests.labels(cache=cache, result="miss").inc()

    # -- Operation trackers (context managers) --

    @contextmanager
    def track_prepare(self) -> Iterator[None]:
        """Track the duration of a prepare_transaction call."""
        start = time.monotonic()
        try:
            yield
        finally:
            self._prepare.observe(time.monotonic() - start)

    @contextmanager
    def track_status(self) -> Iterator[None]:
        """Track the duration of a get_transaction_status call."""
        start = time.monotonic()
        try:
            yield
        finally:
            self._status.observe(time.monotonic() - start)

    @contextmanager
    def track_broadcast(self) -> Iterator[None]:
        """Track the duration of a sign_and_broadcast call."""
        start = time.monotonic()
        try:
            yield
        finally:
            self._broadcast.observe(time.monotonic() - start)
