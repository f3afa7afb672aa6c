"""Recipient validation — hard errors vs. soft warnings.

A validator never raises for a merely invalid address; it classifies the
address into a :class:`RecipientValidation` instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from tezos_bridge import FAMILY
from tezos_bridge.cache.memoize import make_lru_cache
from tezos_bridge.errors.definitions import (
    ContractRecipientWarning,
    InvalidAddress,
    RecipientRequired,
)
from tezos_bridge.validation.address import decode_address

if TYPE_CHECKING:
    from tezos_bridge.config.settings import CacheConfig
    from tezos_bridge.errors.bridge_errors import BridgeError
    from tezos_bridge.metrics.collector import BridgeMetrics
    from tezos_bridge.models.account import Currency


@dataclass(frozen=True)
class RecipientValidation:
    """Outcome of validating a recipient address."""

    recipient_error: BridgeError | None = None
    recipient_warning: BridgeError | None = None

    @property
    def is_valid(self) -> bool:
        return self.recipient_error is None


class RecipientValidator(Protocol):
    """Anything that can classify a recipient for a currency."""

    async def validate(self, currency: Currency, address: str) -> RecipientValidation: ...


def _classify(currency: Currency, address: str) -> RecipientValidation:
    if not address:
        return RecipientValidation(recipient_error=RecipientRequired())
    if currency.family != FAMILY:
        return RecipientValidation(
            recipient_error=InvalidAddress(f"{address} is not a valid {currency.id} address")
        )
    try:
        kind, _ = decode_address(address)
    except ValueError:
        return RecipientValidation(
            recipient_error=InvalidAddress(f"{address} is not a valid {currency.id} address")
        )
    if kind == "KT1":
        return RecipientValidation(recipient_warning=ContractRecipientWarning())
    return RecipientValidation()


class TezosRecipientValidator:
    """Default validator for Tezos addresses, memoized per currency, family and address."""

    def __init__(
        self,
        cache_config: CacheConfig | None = None,
        *,
        metrics: BridgeMetrics | None = None,
    ) -> None:
        max_size = cache_config.max_size if cache_config else 100
        ttl = cache_config.ttl_seconds if cache_config else None
        self._validate = make_lru_cache(
            self._run,
            lambda currency, address: f"{currency.id}_{currency.family}_{address}",
            max_size=max_size,
            ttl=ttl,
            name="validate_recipient",
            metrics=metrics,
        )

    async def validate(self, currency: Currency, address: str) -> RecipientValidation:
        """Classify *address* for *currency*.

        Returns:
            A validation with a ``RecipientRequired`` or ``InvalidAddress``
            error, a ``ContractRecipientWarning`` for ``KT1`` contracts, or
            neither.
        """
        return await self._validate(currency, address)

    @staticmethod
    async def _run(currency: Currency, address: str) -> RecipientValidation:  # noqa: RUF029
        return _classify(currency, address)
