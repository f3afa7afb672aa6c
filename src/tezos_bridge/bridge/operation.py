"""Map a broadcast result into an outgoing operation record."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from tezos_bridge.models.operation import Operation

if TYPE_CHECKING:
    from tezos_bridge.models.account import Account
    from tezos_bridge.models.operation import BroadcastResult
    from tezos_bridge.models.transaction import Transaction


def build_operation(
    account: Account,
    transaction: Transaction,
    result: BroadcastResult,
) -> Operation:
    """Build the ``OUT`` operation for a signed (and possibly broadcast) draft.

    The fee is read as the built operation's fees times its gas limit.
    """
    signed = result.signed
    fee = signed.fees * signed.gas_limit
    # FIXME sub-account operations are recorded like native sends
    account_id = transaction.sub_account_id or account.id
    value = account.balance if transaction.use_all_amount else transaction.amount + fee

    return Operation(
        id=f"{account_id}-{result.tx_hash}-OUT",
        hash=result.tx_hash,
        type="OUT",
        value=value,
        fee=fee,
        senders=[signed.sender],
        recipients=[signed.receiver],
        account_id=account_id,
        date=datetime.now(UTC),
    )
