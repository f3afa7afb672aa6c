"""Domain models — accounts, drafts, status reports, operations."""

from tezos_bridge.models.account import Account, Currency, SubAccount
from tezos_bridge.models.operation import BroadcastResult, Operation, SignedTransaction
from tezos_bridge.models.status import TransactionStatus
from tezos_bridge.models.transaction import (
    NetworkInfo,
    Transaction,
    create_transaction,
    update_transaction,
)

__all__ = [
    "Account",
    "BroadcastResult",
    "Currency",
    "NetworkInfo",
    "Operation",
    "SignedTransaction",
    "SubAccount",
    "Transaction",
    "TransactionStatus",
    "create_transaction",
    "update_transaction",
]
