"""V1 transaction endpoints.

Draft lifecycle, preparation, status and sign-and-broadcast. The wallet
sends the account snapshot with each request; nothing is persisted here.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from tezos_bridge.api.dependencies import get_bridge
from tezos_bridge.api.v1.schemas import (
    AccountTransactionRequest,
    BroadcastRequest,
    OperationResponse,
    TransactionSchema,
    TransactionStatusResponse,
    UpdateTransactionRequest,
)
from tezos_bridge.bridge.account_bridge import TezosAccountBridge  # noqa: TC001
from tezos_bridge.bridge.operation import build_operation

router = APIRouter(tags=["transaction"])


@router.post("/transactions", status_code=201)
async def create_transaction(
    bridge: Annotated[TezosAccountBridge, Depends(get_bridge)],
) -> dict:
    """Create an empty draft."""
    draft = bridge.create_transaction()
    return TransactionSchema.from_model(draft).model_dump(mode="json")


@router.post("/transactions/update")
async def update_transaction(
    bridge: Annotated[TezosAccountBridge, Depends(get_bridge)],
    body: UpdateTransactionRequest,
) -> dict:
    """Apply a partial patch to a draft."""
    draft = bridge.update_transaction(body.transaction.to_model(), body.patch.to_patch())
    return TransactionSchema.from_model(draft).model_dump(mode="json")


@router.post("/transactions/prepare")
async def prepare_transaction(
    bridge: Annotated[TezosAccountBridge, Depends(get_bridge)],
    body: AccountTransactionRequest,
) -> dict:
    """Enrich a draft with network info, gas/storage, fees and recipient."""
    draft = body.transaction.to_model()
    prepared = await bridge.prepare_transaction(body.account.to_model(), draft)
    return {
        "transaction": TransactionSchema.from_model(prepared).model_dump(mode="json"),
        "changed": prepared is not draft,
    }


@router.post("/transactions/status")
async def transaction_status(
    bridge: Annotated[TezosAccountBridge, Depends(get_bridge)],
    body: AccountTransactionRequest,
) -> dict:
    """Validate a draft and compute its totals."""
    status = await bridge.get_transaction_status(
        body.account.to_model(), body.transaction.to_model()
    )
    return TransactionStatusResponse.from_model(status).model_dump(mode="json")


@router.post("/transactions/broadcast")
async def sign_and_broadcast(
    bridge: Annotated[TezosAccountBridge, Depends(get_bridge)],
    body: BroadcastRequest,
) -> dict:
    """Sign on the given device, broadcast, and return the operation record."""
    account = body.account.to_model()
    draft = body.transaction.to_model()
    result = await bridge.sign_and_broadcast(account, draft, body.device_id)
    operation = build_operation(account, draft, result)
    return OperationResponse.from_model(operation).model_dump(mode="json")
