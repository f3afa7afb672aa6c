"""Tezos account bridge — draft lifecycle, preparation, status, broadcast.

Typical caller loop::

    bridge = TezosAccountBridge(engine)
    t = bridge.create_transaction()
    t = bridge.update_transaction(t, {"recipient": addr, "amount": Decimal(10)})
    while (prepared := await bridge.prepare_transaction(account, t)) is not t:
        t = prepared
    status = await bridge.get_transaction_status(account, t)
    if not status.errors:
        result = await bridge.sign_and_broadcast(account, t, device_id)
"""

from __future__ import annotations

import logging
from contextlib import nullcontext
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from tezos_bridge import FAMILY
from tezos_bridge.bridge.estimation import build_fee_calculator, build_gas_storage_estimator
from tezos_bridge.config.settings import CacheConfig, EngineConfig
from tezos_bridge.errors.bridge_errors import BridgeError
from tezos_bridge.errors.definitions import FeeNotLoaded, FeeTooHigh, NotEnoughBalance
from tezos_bridge.models.operation import BroadcastResult
from tezos_bridge.models.status import TransactionStatus
from tezos_bridge.models.transaction import (
    Transaction,
    create_transaction,
    update_transaction,
)
from tezos_bridge.validation.recipient import TezosRecipientValidator

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

    from tezos_bridge.engine.protocol import ChainEngine
    from tezos_bridge.metrics.collector import BridgeMetrics
    from tezos_bridge.models.account import Account
    from tezos_bridge.validation.recipient import RecipientValidator

logger = logging.getLogger(__name__)

# Fee above 1/10 of the sent amount triggers the FeeTooHigh warning.
_FEE_TOO_HIGH_FACTOR = 10


class TezosAccountBridge:
    """Prepares Tezos drafts and reports whether they can be signed.

    Owns the memoized estimators; share one bridge between callers so that
    concurrent preparations of the same draft hit the engine once.
    """

    def __init__(
        self,
        engine: ChainEngine,
        *,
        validator: RecipientValidator | None = None,
        cache_config: CacheConfig | None = None,
        engine_config: EngineConfig | None = None,
        metrics: BridgeMetrics | None = None,
    ) -> None:
        """Initialize the bridge.

        Args:
            engine: Chain engine used for estimation, signing and broadcast.
            validator: Recipient validator; defaults to the Tezos one.
            cache_config: Capacity and TTL of the estimation caches.
            engine_config: Broadcast switches (``disable_broadcast``).
            metrics: Optional Prometheus metrics sink.
        """
        cache_config = cache_config or CacheConfig()
        self._engine = engine
        self._engine_config = engine_config or EngineConfig()
        self._metrics = metrics
        self._validator = validator or TezosRecipientValidator(cache_config, metrics=metrics)
        self.estimate_gas_limit_and_storage = build_gas_storage_estimator(
            engine, cache_config, metrics=metrics
        )
        self.calculate_fees = build_fee_calculator(
            engine, self._validator, cache_config, metrics=metrics
        )

    # ------------------------------------------------------------------
    # Draft lifecycle
    # ------------------------------------------------------------------

    @staticmethod
    def create_transaction() -> Transaction:
        return create_transaction()

    @staticmethod
    def update_transaction(transaction: Transaction, patch: dict[str, Any]) -> Transaction:
        return update_transaction(transaction, patch)

    @staticmethod
    def get_capabilities() -> dict[str, bool]:
        return {"can_sync": False, "can_send": True}

    # ------------------------------------------------------------------
    # Preparation
    # ------------------------------------------------------------------

    async def prepare_transaction(self, account: Account, transaction: Transaction) -> Transaction:
        """Fill in network info, gas/storage, fees and the default recipient.

        Returns *transaction* itself when nothing changed, so callers can
        stop re-preparing once ``prepare_transaction(a, t) is t``.

        Raises:
            AssertionError: If the engine returns network info for another family.
        """
        with self._track("prepare"):
            t = transaction
            network_info = t.network_info
            if network_info is None:
                network_info = await self._engine.get_account_network_info(account)
                if network_info.family != FAMILY:
                    msg = f"{FAMILY} network info expected, got {network_info.family!r}"
                    raise AssertionError(msg)

            gas_limit = t.gas_limit
            storage_limit = t.storage_limit
            if (gas_limit is None or storage_limit is None) and t.recipient:
                validation = await self._validator.validate(account.currency, t.recipient)
                if validation.recipient_error is None:
                    try:
                        estimate = await self.estimate_gas_limit_and_storage(account, t.recipient)
                    except Exception:  # noqa: BLE001
                        logger.warning(
                            "gas/storage estimation failed for %s -> %s",
                            account.id,
                            t.recipient,
                            exc_info=True,
                        )
                    else:
                        gas_limit = estimate.gas_limit
                        storage_limit = estimate.storage

            fees = t.fees if t.fees is not None else network_info.fees

            recipient = t.recipient
            # FIXME sub-account sends are approximated as a transfer to self
            if t.sub_account_id and not t.recipient:
                recipient = account.fresh_address

            if (
                t.network_info != network_info
                or t.gas_limit != gas_limit
                or t.storage_limit != storage_limit
                or t.fees != fees
                or t.recipient != recipient
            ):
                return update_transaction(
                    t,
                    {
                        "network_info": network_info,
                        "gas_limit": gas_limit,
                        "storage_limit": storage_limit,
                        "fees": fees,
                        "recipient": recipient,
                    },
                )
            return t

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    async def get_transaction_status(
        self, account: Account, transaction: Transaction
    ) -> TransactionStatus:
        """Validate a draft and compute its totals.

        Never raises for user or engine problems; they land in ``errors``
        and ``warnings``.
        """
        with self._track("status"):
            t = transaction
            status = TransactionStatus(recipient_is_read_only=bool(t.sub_account_id))
            balance = self._spendable_balance(account, t)

            estimated_fees = Decimal(0)
            if t.fees is None:
                status.errors["fees"] = FeeNotLoaded()
            else:
                try:
                    estimated_fees = await self.calculate_fees(account, t)
                except NotEnoughBalance as exc:
                    # FIXME imprecise: the fee failure is blamed on the amount
                    status.errors["amount"] = exc
                except Exception as exc:  # noqa: BLE001
                    logger.info("fee calculation failed for %s: %s", account.id, exc)
                    status.errors["transaction"] = _as_report_error(exc)

            if t.use_all_amount:
                status.total_spent = balance
                status.amount = balance - estimated_fees
            else:
                status.total_spent = t.amount + estimated_fees
                status.amount = t.amount
            status.estimated_fees = estimated_fees

            if status.amount > 0 and estimated_fees * _FEE_TOO_HIGH_FACTOR > status.amount:
                status.warnings["feeTooHigh"] = FeeTooHigh()

            validation = await self._validator.validate(account.currency, t.recipient)
            if validation.recipient_error is not None:
                status.errors["recipient"] = validation.recipient_error
            if validation.recipient_warning is not None:
                status.warnings["recipient"] = validation.recipient_warning

            return status

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    async def sign_and_broadcast(
        self, account: Account, transaction: Transaction, device_id: str
    ) -> BroadcastResult:
        """Sign on *device_id* and submit through the engine.

        Engine errors propagate unchanged. With ``disable_broadcast`` the
        operation is signed but not submitted and the hash is empty.
        """
        with self._track("broadcast"):
            signed = await self._engine.sign_transaction(account, transaction, device_id)
            if self._engine_config.disable_broadcast:
                logger.warning("broadcast disabled; %s not submitted", account.id)
                tx_hash = ""
            else:
                tx_hash = await self._engine.broadcast_raw_transaction(account, signed.signed_hex)
            return BroadcastResult(signed=signed, tx_hash=tx_hash)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _spendable_balance(account: Account, transaction: Transaction) -> Decimal:
        sub = account.find_sub_account(transaction.sub_account_id)
        return sub.balance if sub is not None else account.balance

    def _track(self, operation: str) -> AbstractContextManager[None]:
        if self._metrics is None:
            return nullcontext()
        trackers = {
            "prepare": self._metrics.track_prepare,
            "status": self._metrics.track_status,
            "broadcast": self._metrics.track_broadcast,
        }
        return trackers[operation]()


def _as_report_error(exc: Exception) -> BridgeError:
    """Errors in a report must render; wrap foreign exceptions."""
    if isinstance(exc, BridgeError):
        return exc
    return BridgeError(str(exc) or type(exc).__name__, code=type(exc).__name__)
