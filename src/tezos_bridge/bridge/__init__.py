"""Account bridge — prepare drafts, evaluate status, sign and broadcast."""

from tezos_bridge.bridge.account_bridge import TezosAccountBridge
from tezos_bridge.bridge.estimation import (
    GasAndStorage,
    build_fee_calculator,
    build_gas_storage_estimator,
    fee_cache_key,
    gas_storage_cache_key,
)
from tezos_bridge.bridge.operation import build_operation

__all__ = [
    "GasAndStorage",
    "TezosAccountBridge",
    "build_fee_calculator",
    "build_gas_storage_estimator",
    "build_operation",
    "fee_cache_key",
    "gas_storage_cache_key",
]
