"""Memoized network estimations: gas/storage per recipient and transaction fees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tezos_bridge.cache.memoize import MemoizedAsync, make_lru_cache

if TYPE_CHECKING:
    from decimal import Decimal

    from tezos_bridge.config.settings import CacheConfig
    from tezos_bridge.engine.protocol import ChainEngine
    from tezos_bridge.metrics.collector import BridgeMetrics
    from tezos_bridge.models.account import Account
    from tezos_bridge.models.transaction import Transaction
    from tezos_bridge.validation.recipient import RecipientValidator


@dataclass(frozen=True)
class GasAndStorage:
    """Gas limit and storage cost to deliver to one address."""

    gas_limit: Decimal
    storage: Decimal


# ---------------------------------------------------------------------------
# Cache keys
# ---------------------------------------------------------------------------


def gas_storage_cache_key(account: Account, address: str) -> str:
    return f"{account.id}|{address}"


def _opt(value: Decimal | None) -> str:
    return "" if value is None else str(value)


def fee_cache_key(account: Account, transaction: Transaction) -> str:
    """Key over every draft field that changes the priced fee."""
    return "_".join(
        (
            account.id,
            str(transaction.amount),
            transaction.recipient,
            _opt(transaction.gas_limit),
            _opt(transaction.fees),
            _opt(transaction.storage_limit),
        )
    )


# ---------------------------------------------------------------------------
# Estimators
# ---------------------------------------------------------------------------


def build_gas_storage_estimator(
    engine: ChainEngine,
    cache_config: CacheConfig,
    *,
    metrics: BridgeMetrics | None = None,
) -> MemoizedAsync[GasAndStorage]:
    """Memoized ``(account, address) -> GasAndStorage``.

    The address must already be validated. Engine errors (e.g. an address
    the node cannot resolve) propagate to the caller.
    """

    async def estimate(account: Account, address: str) -> GasAndStorage:
        gas_limit = await engine.estimate_gas_limit(account, address)
        storage = await engine.get_storage(account, address)
        return GasAndStorage(gas_limit=gas_limit, storage=storage)

    return make_lru_cache(
        estimate,
        gas_storage_cache_key,
        max_size=cache_config.max_size,
        ttl=cache_config.ttl_seconds,
        name="estimate_gas_limit_and_storage",
        metrics=metrics,
    )


def build_fee_calculator(
    engine: ChainEngine,
    validator: RecipientValidator,
    cache_config: CacheConfig,
    *,
    metrics: BridgeMetrics | None = None,
) -> MemoizedAsync[Decimal]:
    """Memoized ``(account, transaction) -> fees``.

    Validates the recipient first and raises its error instead of pricing
    a transaction that cannot be sent.
    """

    async def calculate(account: Account, transaction: Transaction) -> Decimal:
        validation = await validator.validate(account.currency, transaction.recipient)
        if validation.recipient_error is not None:
            raise validation.recipient_error
        return await engine.get_fees_for_transaction(account, transaction)

    return make_lru_cache(
        calculate,
        fee_cache_key,
        max_size=cache_config.max_size,
        ttl=cache_config.ttl_seconds,
        name="calculate_fees",
        metrics=metrics,
    )
