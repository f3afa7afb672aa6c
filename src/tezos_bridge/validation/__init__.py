"""Recipient validation."""

from tezos_bridge.validation.recipient import (
    RecipientValidation,
    RecipientValidator,
    TezosRecipientValidator,
)

__all__ = ["RecipientValidation", "RecipientValidator", "TezosRecipientValidator"]
