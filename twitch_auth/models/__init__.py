"""Data models for the Twitch strategy."""

from twitch_auth.models.auth import (
    Auth,
    AuthErrorDetail,
    Credentials,
    Extra,
    Failure,
    Info,
    OAuthConfig,
    StrategyOptions,
    Token,
)
from twitch_auth.models.errors import (
    ErrorCode,
    ProfileFetchError,
    StrategyError,
    StrategyStateError,
    TokenExchangeError,
    TransportError,
    UnauthorizedError,
)

__all__ = [
    "Auth",
    "AuthErrorDetail",
    "Credentials",
    "ErrorCode",
    "Extra",
    "Failure",
    "Info",
    "OAuthConfig",
    "ProfileFetchError",
    "StrategyError",
    "StrategyOptions",
    "StrategyStateError",
    "Token",
    "TokenExchangeError",
    "TransportError",
    "UnauthorizedError",
]
