"""
Domain exceptions for the storefront API.

Every error a service raises derives from StorefrontError and carries the
HTTP status the envelope should report. Routers never build error
responses themselves; the handlers in app.api.errors do it.
"""


class StorefrontError(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error message
        details: Optional dict with additional context, returned as envelope data
    """

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class ValidationError(StorefrontError):
    """Missing or malformed input."""

    status_code = 400


class AuthError(StorefrontError):
    """Missing, invalid or expired credential."""

    status_code = 401


class ForbiddenError(StorefrontError):
    """Authenticated but not allowed (inactive account, foreign record)."""

    status_code = 403


class NotFoundError(StorefrontError):
    """Identifier does not resolve to a live record."""

    status_code = 404


class ConcurrencyConflict(StorefrontError):
    """A compare-and-set update lost the race against another writer."""

    status_code = 409


class ServerError(StorefrontError):
    """Unexpected failure, e.g. the persistence layer is unavailable."""

    status_code = 500


class InsufficientBalanceError(ValidationError):
    """Raised when a redemption exceeds the current reward balance."""

    def __init__(self, user_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient reward balance. Available: {available} points",
            details={"requested": requested, "available": available},
        )
        self.user_id = user_id
        self.requested = requested
        self.available = available


class LoginRequiredError(AuthError):
    """401 for session-gated shopper actions; clients redirect to the login page."""

    redirect_to = "/login"

    def __init__(self, message: str = "Unauthorized. Please log in."):
        super().__init__(message)
