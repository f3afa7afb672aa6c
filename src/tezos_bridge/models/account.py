"""Account snapshot models.

The wallet owns accounts; this package only reads them. Balances are in the
currency's smallest unit (mutez for Tezos).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from tezos_bridge import FAMILY


@dataclass(frozen=True)
class Currency:
    """Crypto currency descriptor.

    Attributes:
        id: Currency identifier (``tezos``).
        family: Chain family tag used to pick a bridge.
        ticker: Display ticker.
        magnitude: Decimal places of the display unit.
    """

    id: str = "tezos"
    family: str = FAMILY
    ticker: str = "XTZ"
    magnitude: int = 6

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Currency:
        return cls(
            id=data.get("id", "tezos"),
            family=data.get("family", FAMILY),
            ticker=data.get("ticker", "XTZ"),
            magnitude=int(data.get("magnitude", 6)),
        )


@dataclass(frozen=True)
class SubAccount:
    """A logical sub-ledger (e.g. a token balance) of a parent account."""

    id: str
    balance: Decimal = Decimal(0)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubAccount:
        return cls(id=data["id"], balance=Decimal(str(data.get("balance", 0))))


@dataclass(frozen=True)
class Account:
    """Read-only account snapshot.

    Attributes:
        id: Wallet-unique account identifier.
        balance: Spendable native balance.
        currency: Currency of the account.
        fresh_address: Address used as default recipient for internal sends.
        sub_accounts: Token sub-accounts sharing this account's keys.
    """

    id: str
    balance: Decimal
    fresh_address: str
    currency: Currency = field(default_factory=Currency)
    sub_accounts: tuple[SubAccount, ...] = ()

    def find_sub_account(self, sub_account_id: str | None) -> SubAccount | None:
        """Return the sub-account with this id, or None."""
        if not sub_account_id:
            return None
        for sub in self.sub_accounts:
            if sub.id == sub_account_id:
                return sub
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        """Create an Account from a JSON-like dict."""
        return cls(
            id=data["id"],
            balance=Decimal(str(data.get("balance", 0))),
            fresh_address=data.get("freshAddress", data.get("fresh_address", "")),
            currency=Currency.from_dict(data.get("currency") or {}),
            sub_accounts=tuple(
                SubAccount.from_dict(s)
                for s in data.get("subAccounts", data.get("sub_accounts")) or ()
            ),
        )
