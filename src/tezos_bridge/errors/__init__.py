"""Error types for the Tezos bridge."""

from tezos_bridge.errors.bridge_errors import BridgeError
from tezos_bridge.errors.definitions import (
    ContractRecipientWarning,
    FeeNotLoaded,
    FeeTooHigh,
    InvalidAddress,
    NotEnoughBalance,
    RecipientRequired,
)
from tezos_bridge.errors.engine_errors import EngineError

__all__ = [
    "BridgeError",
    "ContractRecipientWarning",
    "EngineError",
    "FeeNotLoaded",
    "FeeTooHigh",
    "InvalidAddress",
    "NotEnoughBalance",
    "RecipientRequired",
]
