"""Error handling data models."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes."""

    MISSING_CODE = "MISSING_CODE"
    TOKEN_EXCHANGE_ERROR = "TOKEN_EXCHANGE_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    PROFILE_FETCH_ERROR = "PROFILE_FETCH_ERROR"
    INVALID_STATE = "INVALID_STATE"


# Custom exception classes
class StrategyError(Exception):
    """Base exception for strategy and client errors."""

    def __init__(self, code: ErrorCode, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class TokenExchangeError(StrategyError):
    """The token endpoint answered with an OAuth2 error payload."""

    def __init__(self, error: str, description: str | None = None) -> None:
        self.error = error
        self.description = description
        super().__init__(
            ErrorCode.TOKEN_EXCHANGE_ERROR,
            f"{error}: {description}" if description else error,
            {"error": error, "error_description": description},
        )


class TransportError(StrategyError):
    """A provider endpoint could not be reached."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(ErrorCode.TRANSPORT_ERROR, reason)


class UnauthorizedError(StrategyError):
    """The profile endpoint rejected the access token."""

    def __init__(self, message: str = "unauthorized") -> None:
        super().__init__(ErrorCode.UNAUTHORIZED, message)


class ProfileFetchError(StrategyError):
    """The profile endpoint answered with an unexpected status or body."""

    def __init__(self, status_code: int, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            ErrorCode.PROFILE_FETCH_ERROR,
            f"Profile request failed with status {status_code}",
            {"status_code": status_code, "body": body},
        )


class StrategyStateError(StrategyError):
    """A result was requested before a successful callback."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_STATE, message)
