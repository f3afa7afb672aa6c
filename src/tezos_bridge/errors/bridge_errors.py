"""BridgeError — base exception class for all tezos-bridge errors."""

from __future__ import annotations


class BridgeError(Exception):
    """Base error for all bridge operations.

    Instances are also used as *values*: the status evaluator stores them in
    the report's ``errors`` / ``warnings`` maps instead of raising them.

    Attributes:
        message: Human-readable error description.
        status_code: Suggested HTTP status code.
        code: Machine-readable error code string.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        code: str = "bridge-error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def to_dict(self) -> dict[str, str]:
        """Serialize to the ``{code, message}`` shape used by the API."""
        return {"code": self.code, "message": self.message}
