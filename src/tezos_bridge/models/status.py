"""Transaction status report."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from tezos_bridge.errors.bridge_errors import BridgeError  # noqa: TC001


@dataclass
class TransactionStatus:
    """Validation result and derived totals for a draft.

    Recomputed on every call; never persisted.

    Attributes:
        errors: Blocking problems by field (``fees``, ``amount``,
            ``transaction``, ``recipient``).
        warnings: Advisory problems by field (``feeTooHigh``, ``recipient``).
        estimated_fees: Priced fee, or zero when unknown.
        amount: Amount that will actually be sent.
        total_spent: Amount leaving the account, fees included.
        recipient_is_read_only: True when sending into a sub-account.
    """

    errors: dict[str, BridgeError] = field(default_factory=dict)
    warnings: dict[str, BridgeError] = field(default_factory=dict)
    estimated_fees: Decimal = Decimal(0)
    amount: Decimal = Decimal(0)
    total_spent: Decimal = Decimal(0)
    recipient_is_read_only: bool = False

    @property
    def can_submit(self) -> bool:
        """True when nothing blocks signing."""
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": {k: v.to_dict() for k, v in self.errors.items()},
            "warnings": {k: v.to_dict() for k, v in self.warnings.items()},
            "estimated_fees": str(self.estimated_fees),
            "amount": str(self.amount),
            "total_spent": str(self.total_spent),
            "recipient_is_read_only": self.recipient_is_read_only,
        }
