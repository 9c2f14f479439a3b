"""Domain errors raised by services and rendered by FastAPI as ``{"detail": ...}``."""

from fastapi import HTTPException


class MarketplaceError(HTTPException):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500
    default_detail = "Internal Server Error"

    def __init__(self, detail: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class InputValidationError(MarketplaceError):
    """Missing or invalid request field; the message names the field."""

    status_code = 400
    default_detail = "Invalid request"


class InvalidCredentialsError(MarketplaceError):
    status_code = 401
    default_detail = "Invalid credentials"


class NotAuthenticatedError(MarketplaceError):
    status_code = 401
    default_detail = "Authentication required"


class PermissionDeniedError(MarketplaceError):
    status_code = 403
    default_detail = "You do not have permission to perform this action"


class AccountSuspendedError(MarketplaceError):
    status_code = 403
    default_detail = "Your account is suspended. Please contact support."


class NotFoundError(MarketplaceError):
    status_code = 404
    default_detail = "Not found"


class OtpInvalidOrExpiredError(MarketplaceError):
    """Single failure class for missing, wrong and expired codes."""

    status_code = 400
    default_detail = "Invalid or expired OTP"

    def __init__(self) -> None:
        super().__init__(self.default_detail)


class ConfigurationError(MarketplaceError):
    """Server misconfiguration. The client only ever sees a generic message."""

    status_code = 500
    default_detail = "Server configuration error"

    def __init__(self, reason: str) -> None:
        super().__init__(self.default_detail)
        self.reason = reason
