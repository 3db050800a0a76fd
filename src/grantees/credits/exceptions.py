"""Credit ledger errors.

Each error carries the HTTP status the routers answer with.
"""

from __future__ import annotations

from typing import Any


class CreditError(Exception):
    """Base class for ledger failures."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def context(self) -> dict[str, Any]:
        """Extra fields included in the error response."""
        return {}


class ProfileNotFoundError(CreditError):
    status_code = 404

    def __init__(self, message: str = "Profile not found") -> None:
        super().__init__(message)


class InsufficientCreditsError(CreditError):
    """Raised when the balance cannot cover the requested spend."""

    status_code = 402

    def __init__(self, required: int, available: int) -> None:
        super().__init__("Insufficient credits")
        self.required = required
        self.available = available

    def context(self) -> dict[str, Any]:
        return {"required": self.required, "available": self.available}


class InvalidPackageError(CreditError):
    def __init__(self, message: str = "Invalid package") -> None:
        super().__init__(message)


class InvalidWalletAddressError(CreditError):
    def __init__(self, message: str = "Invalid wallet address") -> None:
        super().__init__(message)


class MissingTransactionHashError(CreditError):
    def __init__(self, message: str = "tx_hash is required") -> None:
        super().__init__(message)


class DuplicateTransactionError(CreditError):
    """The tx_hash has already been credited."""

    status_code = 409

    def __init__(self, message: str = "Transaction already processed") -> None:
        super().__init__(message)


class PaymentVerificationError(CreditError):
    """The on-chain transaction does not pay for the package."""

    status_code = 402

    def __init__(self, reason: str) -> None:
        super().__init__("Payment not confirmed")
        self.reason = reason

    def context(self) -> dict[str, Any]:
        return {"reason": self.reason}


class PaymentProviderError(CreditError):
    """The chain RPC could not be reached or answered with an error."""

    status_code = 502

    def __init__(self, message: str = "Payment verification unavailable") -> None:
        super().__init__(message)
