"""FastAPI dependency injection helpers.

Usage in a route::

    @router.post("/transactions/prepare")
    async def prepare(bridge: Annotated[TezosAccountBridge, Depends(get_bridge)]) -> ...:
        ...
"""

from __future__ import annotations

from fastapi import Request

from tezos_bridge.bridge.account_bridge import TezosAccountBridge  # noqa: TC001
from tezos_bridge.errors.engine_errors import EngineError


def get_bridge(request: Request) -> TezosAccountBridge:
    """Retrieve the bridge from ``app.state``.

    The bridge is stored on ``app.state.bridge`` during lifespan startup.

    Raises:
        EngineError: 503 if the bridge is not initialized.
    """
    bridge: TezosAccountBridge | None = getattr(request.app.state, "bridge", None)
    if bridge is None:
        msg = "Bridge not initialized"
        raise EngineError(msg, status_code=503)
    return bridge
