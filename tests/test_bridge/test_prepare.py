"""Tests for the preparation pipeline."""

from __future__ import annotations

from decimal import Decimal

import pytest

from tezos_bridge.bridge.account_bridge import TezosAccountBridge
from tezos_bridge.errors import EngineError
from tezos_bridge.models.transaction import NetworkInfo


@pytest.fixture
def bridge(engine, cache_config) -> TezosAccountBridge:
    return TezosAccountBridge(engine, cache_config=cache_config)


class TestPrepareResolution:
    async def test_fetches_network_info_and_default_fee(self, bridge, engine, account) -> None:
        t = await bridge.prepare_transaction(account, bridge.create_transaction())

        assert t.network_info == engine.network_info
        assert t.fees == Decimal(1420)
        assert engine.calls["network_info"] == 1

    async def test_no_recipient_no_estimation(self, bridge, engine, account) -> None:
        t = await bridge.prepare_transaction(account, bridge.create_transaction())
        assert t.gas_limit is None
        assert t.storage_limit is None
        assert engine.calls["gas_limit"] == 0

    async def test_estimates_gas_and_storage(self, bridge, engine, account, recipient) -> None:
        draft = bridge.update_transaction(bridge.create_transaction(), {"recipient": recipient})
        t = await bridge.prepare_transaction(account, draft)

        assert t.gas_limit == Decimal(10600)
        assert t.storage_limit == Decimal(257)

    async def test_explicit_fee_kept(self, bridge, account) -> None:
        draft = bridge.update_transaction(bridge.create_transaction(), {"fees": Decimal(9999)})
        t = await bridge.prepare_transaction(account, draft)
        assert t.fees == Decimal(9999)

    async def test_existing_network_info_not_refetched(self, bridge, engine, account) -> None:
        info = NetworkInfo(family="tezos", fees=Decimal(7))
        draft = bridge.update_transaction(bridge.create_transaction(), {"network_info": info})
        t = await bridge.prepare_transaction(account, draft)
        assert engine.calls["network_info"] == 0
        assert t.fees == Decimal(7)

    async def test_explicit_limits_skip_estimation(
        self, bridge, engine, account, recipient
    ) -> None:
        draft = bridge.update_transaction(
            bridge.create_transaction(),
            {"recipient": recipient, "gas_limit": Decimal(1), "storage_limit": Decimal(2)},
        )
        t = await bridge.prepare_transaction(account, draft)
        assert (t.gas_limit, t.storage_limit) == (Decimal(1), Decimal(2))
        assert engine.calls["gas_limit"] == 0

    async def test_one_missing_limit_triggers_estimation(
        self, bridge, engine, account, recipient
    ) -> None:
        draft = bridge.update_transaction(
            bridge.create_transaction(), {"recipient": recipient, "gas_limit": Decimal(1)}
        )
        t = await bridge.prepare_transaction(account, draft)
        assert t.gas_limit == Decimal(10600)
        assert t.storage_limit == Decimal(257)


class TestPrepareFailures:
    async def test_wrong_family_is_fatal(self, bridge, engine, account) -> None:
        engine.network_info = NetworkInfo(family="ethereum", fees=Decimal(1))
        with pytest.raises(AssertionError, match="tezos network info expected"):
            await bridge.prepare_transaction(account, bridge.create_transaction())

    async def test_network_info_failure_propagates(self, bridge, engine, account) -> None:
        async def unreachable(_account):
            msg = "node unreachable"
            raise EngineError(msg)

        engine.get_account_network_info = unreachable
        with pytest.raises(EngineError):
            await bridge.prepare_transaction(account, bridge.create_transaction())

    async def test_invalid_recipient_leaves_limits_unset(self, bridge, engine, account) -> None:
        draft = bridge.update_transaction(bridge.create_transaction(), {"recipient": "garbage"})
        t = await bridge.prepare_transaction(account, draft)

        assert t.gas_limit is None
        assert t.storage_limit is None
        assert t.fees == Decimal(1420)
        assert engine.calls["gas_limit"] == 0

    async def test_estimation_failure_is_swallowed(
        self, bridge, engine, account, recipient
    ) -> None:
        engine.estimate_error = EngineError("cannot resolve")
        draft = bridge.update_transaction(bridge.create_transaction(), {"recipient": recipient})
        t = await bridge.prepare_transaction(account, draft)

        assert t.gas_limit is None
        assert t.storage_limit is None
        assert t.network_info is not None


class TestPrepareFixedPoint:
    async def test_converges_within_two_calls(self, bridge, account, recipient) -> None:
        draft = bridge.update_transaction(
            bridge.create_transaction(), {"recipient": recipient, "amount": Decimal(100)}
        )
        first = await bridge.prepare_transaction(account, draft)
        second = await bridge.prepare_transaction(account, first)

        assert first is not draft
        assert second is first

    async def test_idempotent_on_fixed_point(self, bridge, account, recipient) -> None:
        draft = bridge.update_transaction(bridge.create_transaction(), {"recipient": recipient})
        fixed = await bridge.prepare_transaction(account, draft)

        for _ in range(3):
            again = await bridge.prepare_transaction(account, fixed)
            assert again == fixed
            assert again is fixed

    async def test_reestimation_hits_cache(self, bridge, engine, account, recipient) -> None:
        draft = bridge.update_transaction(bridge.create_transaction(), {"recipient": recipient})
        await bridge.prepare_transaction(account, draft)
        await bridge.prepare_transaction(account, draft)
        assert engine.calls["gas_limit"] == 1


class TestPrepareSubAccount:
    async def test_recipient_defaults_to_fresh_address(self, bridge, account) -> None:
        draft = bridge.update_transaction(
            bridge.create_transaction(), {"sub_account_id": "js:2:tezos:main+token"}
        )
        t = await bridge.prepare_transaction(account, draft)
        assert t.recipient == account.fresh_address

    async def test_explicit_recipient_kept(self, bridge, account, recipient) -> None:
        draft = bridge.update_transaction(
            bridge.create_transaction(),
            {"sub_account_id": "js:2:tezos:main+token", "recipient": recipient},
        )
        t = await bridge.prepare_transaction(account, draft)
        assert t.recipient == recipient

    async def test_sub_account_reaches_fixed_point(self, bridge, account) -> None:
        t = bridge.update_transaction(
            bridge.create_transaction(), {"sub_account_id": "js:2:tezos:main+token"}
        )
        for _ in range(3):
            t = await bridge.prepare_transaction(account, t)
        assert await bridge.prepare_transaction(account, t) is t
        assert t.gas_limit == Decimal(10600)
