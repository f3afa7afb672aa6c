"""Interface the bridge expects from a chain engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from decimal import Decimal

    from tezos_bridge.models.account import Account
    from tezos_bridge.models.operation import SignedTransaction
    from tezos_bridge.models.transaction import NetworkInfo, Transaction


class ChainEngine(Protocol):
    """Builds, prices, signs and submits Tezos operations.

    Implementations raise :class:`~tezos_bridge.errors.NotEnoughBalance`
    from ``get_fees_for_transaction`` when the account cannot cover the
    transaction, and any other :class:`~tezos_bridge.errors.BridgeError`
    for the rest.
    """

    async def get_account_network_info(self, account: Account) -> NetworkInfo: ...

    async def estimate_gas_limit(self, account: Account, address: str) -> Decimal: ...

    async def get_storage(self, account: Account, address: str) -> Decimal: ...

    async def get_fees_for_transaction(
        self, account: Account, transaction: Transaction
    ) -> Decimal: ...

    async def sign_transaction(
        self, account: Account, transaction: Transaction, device_id: str
    ) -> SignedTransaction: ...

    async def broadcast_raw_transaction(self, account: Account, signed_hex: str) -> str: ...
