"""Named errors and warnings surfaced in transaction status reports."""

from __future__ import annotations

from tezos_bridge.errors.bridge_errors import BridgeError

# -- Fees ------------------------------------------------------------------


class FeeNotLoaded(BridgeError):
    """The draft has no fee yet; it has not been prepared."""

    def __init__(self, message: str = "fees are not loaded") -> None:
        super().__init__(message, status_code=422, code="FeeNotLoaded")


class FeeTooHigh(BridgeError):
    """Advisory: the fee is more than 10% of the amount being sent."""

    def __init__(self, message: str = "fee is more than 10% of the amount") -> None:
        super().__init__(message, status_code=422, code="FeeTooHigh")


# -- Balance ---------------------------------------------------------------


class NotEnoughBalance(BridgeError):
    """The account cannot cover amount plus fees."""

    def __init__(self, message: str = "not enough balance") -> None:
        super().__init__(message, status_code=422, code="NotEnoughBalance")


# -- Recipient -------------------------------------------------------------


class RecipientRequired(BridgeError):
    """No recipient address was given."""

    def __init__(self, message: str = "recipient is required") -> None:
        super().__init__(message, status_code=400, code="RecipientRequired")


class InvalidAddress(BridgeError):
    """The recipient is not a valid address for the currency."""

    def __init__(self, message: str = "invalid recipient address") -> None:
        super().__init__(message, status_code=400, code="InvalidAddress")


class ContractRecipientWarning(BridgeError):
    """Advisory: the recipient is an originated (``KT1``) contract."""

    def __init__(self, message: str = "recipient is a smart contract") -> None:
        super().__init__(message, status_code=200, code="ContractRecipientWarning")
