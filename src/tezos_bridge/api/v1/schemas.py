"""V1 API request/response Pydantic schemas.

These are the *API-layer* schemas: thin wrappers that define the HTTP
contract. Route code maps between them and the frozen domain dataclasses in
:mod:`tezos_bridge.models`. Amounts travel as decimal strings.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - Pydantic needs this at runtime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, field_validator

from tezos_bridge import FAMILY
from tezos_bridge.models.account import Account, Currency, SubAccount
from tezos_bridge.models.transaction import NetworkInfo, Transaction

if TYPE_CHECKING:
    from tezos_bridge.models.operation import Operation
    from tezos_bridge.models.status import TransactionStatus

# ---------------------------------------------------------------------------
# Common
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error body: ``{"code": "...", "message": "..."}``."""

    code: str
    message: str


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------


class CurrencySchema(BaseModel):
    id: str = "tezos"
    family: str = FAMILY
    ticker: str = "XTZ"
    magnitude: int = 6


class SubAccountSchema(BaseModel):
    id: str
    balance: Decimal = Decimal(0)


class AccountSchema(BaseModel):
    """Account snapshot sent by the wallet with every request."""

    id: str
    balance: Decimal = Field(ge=0)
    fresh_address: str
    currency: CurrencySchema = Field(default_factory=CurrencySchema)
    sub_accounts: list[SubAccountSchema] = Field(default_factory=list)

    def to_model(self) -> Account:
        return Account(
            id=self.id,
            balance=self.balance,
            fresh_address=self.fresh_address,
            currency=Currency(**self.currency.model_dump()),
            sub_accounts=tuple(SubAccount(id=s.id, balance=s.balance) for s in self.sub_accounts),
        )


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------


class NetworkInfoSchema(BaseModel):
    family: str
    fees: Decimal

    def to_model(self) -> NetworkInfo:
        return NetworkInfo(family=self.family, fees=self.fees)


class TransactionSchema(BaseModel):
    """Draft transaction as exchanged over HTTP."""

    family: str = FAMILY
    mode: str = "send"
    amount: Decimal = Decimal(0)
    fees: Decimal | None = None
    gas_limit: Decimal | None = None
    storage_limit: Decimal | None = None
    recipient: str = ""
    network_info: NetworkInfoSchema | None = None
    sub_account_id: str | None = None
    use_all_amount: bool = False

    def to_model(self) -> Transaction:
        data = self.model_dump(exclude={"network_info"})
        network_info = self.network_info.to_model() if self.network_info else None
        return Transaction(network_info=network_info, **data)

    @classmethod
    def from_model(cls, t: Transaction) -> TransactionSchema:
        return cls(
            family=t.family,
            mode=t.mode,
            amount=t.amount,
            fees=t.fees,
            gas_limit=t.gas_limit,
            storage_limit=t.storage_limit,
            recipient=t.recipient,
            network_info=(
                NetworkInfoSchema(family=t.network_info.family, fees=t.network_info.fees)
                if t.network_info
                else None
            ),
            sub_account_id=t.sub_account_id,
            use_all_amount=t.use_all_amount,
        )


class TransactionPatch(BaseModel):
    """Partial draft; only fields sent by the client are applied."""

    mode: str | None = None
    amount: Decimal | None = None
    fees: Decimal | None = None
    gas_limit: Decimal | None = None
    storage_limit: Decimal | None = None
    recipient: str | None = None
    network_info: NetworkInfoSchema | None = None
    sub_account_id: str | None = None
    use_all_amount: bool | None = None

    @field_validator("mode", "amount", "recipient", "use_all_amount")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        """These draft fields can be changed but never cleared."""
        if value is None:
            msg = "may be omitted but not null"
            raise ValueError(msg)
        return value

    def to_patch(self) -> dict[str, Any]:
        patch = self.model_dump(exclude_unset=True, exclude={"network_info"})
        if "network_info" in self.model_fields_set:
            patch["network_info"] = self.network_info.to_model() if self.network_info else None
        return patch


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class UpdateTransactionRequest(BaseModel):
    """POST /api/v1/transactions/update"""

    transaction: TransactionSchema
    patch: TransactionPatch


class AccountTransactionRequest(BaseModel):
    """POST /api/v1/transactions/prepare and /status"""

    account: AccountSchema
    transaction: TransactionSchema


class BroadcastRequest(AccountTransactionRequest):
    """POST /api/v1/transactions/broadcast"""

    device_id: str


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class TransactionStatusResponse(BaseModel):
    errors: dict[str, ErrorResponse]
    warnings: dict[str, ErrorResponse]
    estimated_fees: Decimal
    amount: Decimal
    total_spent: Decimal
    recipient_is_read_only: bool

    @classmethod
    def from_model(cls, status: TransactionStatus) -> TransactionStatusResponse:
        return cls(
            errors={k: ErrorResponse(**v.to_dict()) for k, v in status.errors.items()},
            warnings={k: ErrorResponse(**v.to_dict()) for k, v in status.warnings.items()},
            estimated_fees=status.estimated_fees,
            amount=status.amount,
            total_spent=status.total_spent,
            recipient_is_read_only=status.recipient_is_read_only,
        )


class OperationResponse(BaseModel):
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
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_model(cls, op: Operation) -> OperationResponse:
        return cls(
            id=op.id,
            hash=op.hash,
            type=op.type,
            value=op.value,
            fee=op.fee,
            senders=list(op.senders),
            recipients=list(op.recipients),
            account_id=op.account_id,
            date=op.date,
            block_hash=op.block_hash,
            block_height=op.block_height,
            extra=dict(op.extra),
        )
