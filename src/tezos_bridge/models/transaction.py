"""Draft transaction model and its lifecycle.

A draft is an immutable value. ``update_transaction`` returns a new draft
with the patched fields; it never mutates its input, so callers can detect
"nothing changed" by identity (``prepared is draft``).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from tezos_bridge import FAMILY


@dataclass(frozen=True)
class NetworkInfo:
    """Chain-level parameters fetched from the network.

    Attributes:
        family: Family tag; must equal ``tezos`` for this bridge.
        fees: Default fee in mutez.
    """

    family: str
    fees: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkInfo:
        return cls(family=data.get("family", ""), fees=Decimal(str(data["fees"])))

    def to_dict(self) -> dict[str, Any]:
        return {"family": self.family, "fees": str(self.fees)}


@dataclass(frozen=True)
class Transaction:
    """Draft transaction prior to signing.

    ``amount`` is authoritative only when ``use_all_amount`` is false; in
    all-balance mode the sent amount is derived from balance minus fees.
    """

    family: str = FAMILY
    mode: str = "send"
    amount: Decimal = Decimal(0)
    fees: Decimal | None = None
    gas_limit: Decimal | None = None
    storage_limit: Decimal | None = None
    recipient: str = ""
    network_info: NetworkInfo | None = None
    sub_account_id: str | None = None
    use_all_amount: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize with decimals as canonical strings."""
        return {
            "family": self.family,
            "mode": self.mode,
            "amount": str(self.amount),
            "fees": _opt_str(self.fees),
            "gas_limit": _opt_str(self.gas_limit),
            "storage_limit": _opt_str(self.storage_limit),
            "recipient": self.recipient,
            "network_info": self.network_info.to_dict() if self.network_info else None,
            "sub_account_id": self.sub_account_id,
            "use_all_amount": self.use_all_amount,
        }


def _opt_str(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def create_transaction() -> Transaction:
    """Return an empty draft: zero amount, nothing resolved yet."""
    return Transaction()


def update_transaction(transaction: Transaction, patch: dict[str, Any]) -> Transaction:
    """Return a copy of *transaction* with every field in *patch* replaced.

    Fields absent from *patch* are kept. An empty patch returns the same
    object.

    Raises:
        TypeError: If *patch* names a field the draft does not have.
    """
    if not patch:
        return transaction
    return dataclasses.replace(transaction, **patch)
