"""HTTP client for the chain-engine daemon.

Provides an async HTTP client for the engine's v1 JSON API:
- GET  /v1/accounts/{id}/network-info: default fees
- GET  /v1/accounts/{id}/gas-limit?address=: estimated gas limit
- GET  /v1/accounts/{id}/storage?address=: storage cost
- POST /v1/accounts/{id}/fees: price a draft transaction
- POST /v1/accounts/{id}/sign: build and sign on a device
- POST /v1/accounts/{id}/broadcast: submit a signed operation
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

import httpx

from tezos_bridge.errors.definitions import NotEnoughBalance
from tezos_bridge.errors.engine_errors import EngineError
from tezos_bridge.models.operation import SignedTransaction
from tezos_bridge.models.transaction import NetworkInfo

if TYPE_CHECKING:
    from tezos_bridge.config.settings import EngineConfig
    from tezos_bridge.models.account import Account
    from tezos_bridge.models.transaction import Transaction


class EngineClient:
    """Async HTTP implementation of :class:`~tezos_bridge.engine.ChainEngine`.

    Usage::

        engine = EngineClient(config.engine)
        await engine.connect()
        try:
            info = await engine.get_account_network_info(account)
        finally:
            await engine.close()
    """

    def __init__(self, config: EngineConfig) -> None:
        """Initialize the engine client.

        Args:
            config: Engine configuration (url, token, timeout).
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"

        self._client = httpx.AsyncClient(
            base_url=self._config.url.rstrip("/"),
            headers=headers,
            timeout=self._config.timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is active."""
        return self._client is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_account_network_info(self, account: Account) -> NetworkInfo:
        """Fetch chain parameters for the account's network.

        Raises:
            EngineError: If the engine or the chain is unreachable.
        """
        data = await self._request("GET", f"/v1/accounts/{account.id}/network-info")
        return NetworkInfo.from_dict(data)

    async def estimate_gas_limit(self, account: Account, address: str) -> Decimal:
        """Estimate the gas needed to send to *address*."""
        data = await self._request(
            "GET", f"/v1/accounts/{account.id}/gas-limit", params={"address": address}
        )
        return Decimal(str(data["gasLimit"]))

    async def get_storage(self, account: Account, address: str) -> Decimal:
        """Storage cost of delivering to *address* (e.g. allocating it)."""
        data = await self._request(
            "GET", f"/v1/accounts/{account.id}/storage", params={"address": address}
        )
        return Decimal(str(data["storage"]))

    async def get_fees_for_transaction(
        self, account: Account, transaction: Transaction
    ) -> Decimal:
        """Price a draft.

        Raises:
            NotEnoughBalance: If the account cannot cover the transaction.
            EngineError: On any other failure.
        """
        data = await self._request(
            "POST",
            f"/v1/accounts/{account.id}/fees",
            json={"transaction": transaction.to_dict()},
        )
        return Decimal(str(data["fees"]))

    async def sign_transaction(
        self, account: Account, transaction: Transaction, device_id: str
    ) -> SignedTransaction:
        """Build the operation and have the device sign it."""
        data = await self._request(
            "POST",
            f"/v1/accounts/{account.id}/sign",
            json={"transaction": transaction.to_dict(), "deviceId": device_id},
        )
        return SignedTransaction.from_dict(data)

    async def broadcast_raw_transaction(self, account: Account, signed_hex: str) -> str:
        """Submit a signed operation and return its hash."""
        data = await self._request(
            "POST",
            f"/v1/accounts/{account.id}/broadcast",
            json={"signedHex": signed_hex},
        )
        return str(data["hash"])

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Return the HTTP client, raising if not connected."""
        if self._client is None:
            msg = "Engine client not connected. Call connect() first."
            raise EngineError(msg, status_code=500)
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        client = self._ensure_connected()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise EngineError(f"Engine request {method} {path} failed: {exc}") from exc

        if response.status_code == 200:
            return response.json()

        self._raise_for_status(response, path)
        return {}  # unreachable

    @staticmethod
    def _raise_for_status(response: httpx.Response, path: str) -> None:
        """Map engine error bodies onto bridge errors."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or response.text or f"HTTP {response.status_code}"

        if body.get("code") == "NotEnoughBalance":
            raise NotEnoughBalance(message)

        raise EngineError(
            f"Engine error on {path}: {message}",
            status_code=response.status_code if response.status_code >= 400 else 502,
        )
