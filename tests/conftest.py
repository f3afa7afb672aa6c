"""Shared test fixtures for the tezos-bridge test suite."""

from __future__ import annotations

import asyncio
from collections import Counter
from decimal import Decimal

import pytest

from tezos_bridge.config.settings import AppConfig, CacheConfig, EngineConfig
from tezos_bridge.models.account import Account, SubAccount
from tezos_bridge.models.operation import SignedTransaction
from tezos_bridge.models.transaction import NetworkInfo
from tezos_bridge.validation.address import encode_address

SENDER = encode_address("tz1", bytes(range(20)))
RECIPIENT = encode_address("tz1", bytes(range(20, 40)))
OTHER_RECIPIENT = encode_address("tz2", bytes(range(40, 60)))
CONTRACT = encode_address("KT1", bytes(range(60, 80)))


class FakeEngine:
    """In-memory ChainEngine that counts calls and can be told to fail."""

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()
        self.network_info = NetworkInfo(family="tezos", fees=Decimal(1420))
        self.gas_limit = Decimal(10600)
        self.storage = Decimal(257)
        self.fees = Decimal(1500)
        self.fees_error: Exception | None = None
        self.estimate_error: Exception | None = None
        self.broadcast_error: Exception | None = None
        self.tx_hash = "opHash123"
        self.signed: SignedTransaction | None = None
        self.delay = 0.0

    async def _pause(self) -> None:
        # Yield so concurrent callers interleave.
        await asyncio.sleep(self.delay)

    async def get_account_network_info(self, account):
        self.calls["network_info"] += 1
        await self._pause()
        return self.network_info

    async def estimate_gas_limit(self, account, address):
        self.calls["gas_limit"] += 1
        await self._pause()
        if self.estimate_error is not None:
            raise self.estimate_error
        return self.gas_limit

    async def get_storage(self, account, address):
        self.calls["storage"] += 1
        await self._pause()
        return self.storage

    async def get_fees_for_transaction(self, account, transaction):
        self.calls["fees"] += 1
        await self._pause()
        if self.fees_error is not None:
            raise self.fees_error
        return self.fees

    async def sign_transaction(self, account, transaction, device_id):
        self.calls["sign"] += 1
        await self._pause()
        return self.signed or SignedTransaction(
            signed_hex="deadbeef",
            sender=account.fresh_address,
            receiver=transaction.recipient,
            fees=transaction.fees or Decimal(0),
            gas_limit=transaction.gas_limit or Decimal(0),
        )

    async def broadcast_raw_transaction(self, account, signed_hex):
        self.calls["broadcast"] += 1
        await self._pause()
        if self.broadcast_error is not None:
            raise self.broadcast_error
        return self.tx_hash


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def account() -> Account:
    return Account(
        id="js:2:tezos:main",
        balance=Decimal(1_000_000),
        fresh_address=SENDER,
        sub_accounts=(SubAccount(id="js:2:tezos:main+token", balance=Decimal(5000)),),
    )


@pytest.fixture
def cache_config() -> CacheConfig:
    return CacheConfig(max_size=100, ttl_seconds=None)


@pytest.fixture
def app_config() -> AppConfig:
    """Provide a test AppConfig with safe defaults."""
    return AppConfig(
        debug=True,
        engine=EngineConfig(url="http://engine.test"),
        cache=CacheConfig(max_size=50, ttl_seconds=None),
    )


@pytest.fixture
def recipient() -> str:
    return RECIPIENT


@pytest.fixture
def other_recipient() -> str:
    return OTHER_RECIPIENT


@pytest.fixture
def contract_address() -> str:
    return CONTRACT


@pytest.fixture
def app(app_config, engine):
    """FastAPI app wired to the in-memory engine."""
    from tezos_bridge.api.app import create_app

    return create_app(config=app_config, engine=engine)


@pytest.fixture
def test_client(app):
    """Synchronous test client; runs the app lifespan."""
    from fastapi.testclient import TestClient

    with TestClient(app) as client:
        yield client


@pytest.fixture
def account_payload(account) -> dict:
    """JSON body form of the ``account`` fixture."""
    return {
        "id": account.id,
        "balance": str(account.balance),
        "fresh_address": account.fresh_address,
        "sub_accounts": [{"id": s.id, "balance": str(s.balance)} for s in account.sub_accounts],
    }
