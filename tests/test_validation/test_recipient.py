"""Tests for recipient validation."""

from __future__ import annotations

from tezos_bridge.config.settings import CacheConfig
from tezos_bridge.errors import ContractRecipientWarning, InvalidAddress, RecipientRequired
from tezos_bridge.models.account import Currency
from tezos_bridge.validation.recipient import RecipientValidation, TezosRecipientValidator

TEZOS = Currency()


class TestTezosRecipientValidator:
    async def test_empty_recipient_is_required(self) -> None:
        result = await TezosRecipientValidator().validate(TEZOS, "")
        assert isinstance(result.recipient_error, RecipientRequired)
        assert result.recipient_warning is None
        assert not result.is_valid

    async def test_invalid_address(self) -> None:
        result = await TezosRecipientValidator().validate(TEZOS, "not-an-address")
        assert isinstance(result.recipient_error, InvalidAddress)

    async def test_valid_implicit_account(self, recipient: str) -> None:
        result = await TezosRecipientValidator().validate(TEZOS, recipient)
        assert result == RecipientValidation()
        assert result.is_valid

    async def test_contract_is_a_warning(self, contract_address: str) -> None:
        result = await TezosRecipientValidator().validate(TEZOS, contract_address)
        assert result.recipient_error is None
        assert isinstance(result.recipient_warning, ContractRecipientWarning)

    async def test_other_family_is_invalid(self, recipient: str) -> None:
        bitcoin = Currency(id="bitcoin", family="bitcoin", ticker="BTC", magnitude=8)
        result = await TezosRecipientValidator().validate(bitcoin, recipient)
        assert isinstance(result.recipient_error, InvalidAddress)

    async def test_results_are_memoized(self, recipient: str) -> None:
        validator = TezosRecipientValidator(CacheConfig(max_size=10))
        first = await validator.validate(TEZOS, recipient)
        second = await validator.validate(TEZOS, recipient)
        assert first is second

    async def test_memo_distinguishes_family(self, recipient: str) -> None:
        validator = TezosRecipientValidator(CacheConfig(max_size=10))
        mislabeled = Currency(id="tezos", family="ethereum")

        assert (await validator.validate(TEZOS, recipient)).is_valid
        result = await validator.validate(mislabeled, recipient)
        assert isinstance(result.recipient_error, InvalidAddress)
