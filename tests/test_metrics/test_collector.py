"""Tests for the bridge metrics collector."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from tezos_bridge.bridge.account_bridge import TezosAccountBridge
from tezos_bridge.metrics.collector import BridgeMetrics, MetricsCollector


@pytest.fixture
def metrics() -> BridgeMetrics:
    return BridgeMetrics(MetricsCollector(CollectorRegistry()))


class TestBridgeMetrics:
    def test_cache_counters(self, metrics: BridgeMetrics) -> None:
        metrics.cache_miss("calculate_fees")
        metrics.cache_hit("calculate_fees")
        metrics.cache_hit("calculate_fees")

        def sample(result: str) -> float | None:
            return metrics.registry.get_sample_value(
                "tezos_bridge_cache_requests_total",
                {"cache": "calculate_fees", "result": result},
            )

        assert sample("hit") == 2.0
        assert sample("miss") == 1.0

    def test_track_records_on_error(self, metrics: BridgeMetrics) -> None:
        with pytest.raises(RuntimeError), metrics.track_status():
            raise RuntimeError

        count = metrics.registry.get_sample_value(
            "tezos_bridge_transaction_status_histogram_count"
        )
        assert count == 1.0

    def test_separate_registries(self) -> None:
        # Two instances must not collide on metric names.
        BridgeMetrics()
        BridgeMetrics()


class TestBridgeInstrumentation:
    async def test_prepare_and_caches_observed(
        self, engine, account, recipient, cache_config, metrics
    ) -> None:
        bridge = TezosAccountBridge(engine, cache_config=cache_config, metrics=metrics)
        t = bridge.update_transaction(bridge.create_transaction(), {"recipient": recipient})

        t = await bridge.prepare_transaction(account, t)
        await bridge.prepare_transaction(account, t)

        registry = metrics.registry
        assert registry.get_sample_value(
            "tezos_bridge_prepare_transaction_histogram_count"
        ) == 2.0
        assert registry.get_sample_value(
            "tezos_bridge_cache_requests_total",
            {"cache": "estimate_gas_limit_and_storage", "result": "miss"},
        ) == 1.0

    async def test_broadcast_observed(
        self, engine, account, recipient, cache_config, metrics
    ) -> None:
        bridge = TezosAccountBridge(engine, cache_config=cache_config, metrics=metrics)
        t = bridge.update_transaction(bridge.create_transaction(), {"recipient": recipient})
        await bridge.sign_and_broadcast(account, t, "nano")

        assert metrics.registry.get_sample_value(
            "tezos_bridge_sign_and_broadcast_histogram_count"
        ) == 1.0
