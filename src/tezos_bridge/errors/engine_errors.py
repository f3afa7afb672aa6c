"""Chain-engine transport and API errors."""

from __future__ import annotations

from tezos_bridge.errors.bridge_errors import BridgeError


class EngineError(BridgeError):
    """Error from the external chain engine."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message, status_code=status_code, code="engine-error")
