"""Signed transaction handle and resulting operation record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class SignedTransaction:
    """What the engine returns after building and signing a draft.

    Attributes:
        signed_hex: Raw signed operation bytes (hex).
        sender: Source address.
        receiver: Destination address.
        fees: Fees set on the built operation.
        gas_limit: Gas limit set on the built operation.
    """

    signed_hex: str
    sender: str
    receiver: str
    fees: Decimal
    gas_limit: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SignedTransaction:
        return cls(
            signed_hex=data.get("signedHex", data.get("signed_hex", "")),
            sender=data.get("sender", ""),
            receiver=data.get("receiver", ""),
            fees=Decimal(str(data.get("fees", 0))),
            gas_limit=Decimal(str(data.get("gasLimit", data.get("gas_limit", 0)))),
        )


@dataclass(frozen=True)
class BroadcastResult:
    """Opaque handle of a signed (and possibly submitted) transaction."""

    signed: SignedTransaction
    tx_hash: str


@dataclass(frozen=True)
class Operation:
    """Historical operation record created after a broadcast."""

    id: str
    hash: str
    type: str
    value: Decimal
    fee: Decimal
    senders: list[str]
    recipients: list[str]
    account_id: str
    date: datetime
    block_hash: str | None = None
    block_height: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "hash": self.hash,
            "type": self.type,
            "value": str(self.value),
            "fee": str(self.fee),
            "senders": list(self.senders),
            "recipients": list(self.recipients),
            "account_id": self.account_id,
            "date": self.date.isoformat(),
            "block_hash": self.block_hash,
            "block_height": self.block_height,
            "extra": dict(self.extra),
        }
