import time
from typing import Any
from urllib.parse import urljoin

from pydantic import BaseModel, ConfigDict, Field, SecretStr, model_validator

TWITCH_SITE = "https://dev.twitch.tv"
TWITCH_AUTHORIZE_URL = "https://api.twitch.tv/kraken/oauth2/authorize"
TWITCH_TOKEN_URL = "https://api.twitch.tv/kraken/oauth2/token"
TWITCH_PROFILE_URL = "https://api.twitch.tv/kraken/user"

# Keys lifted out of the token response; everything else stays in other_params.
_TOKEN_FIELDS = ("access_token", "refresh_token", "expires_at", "token_type")


class OAuthConfig(BaseModel):
    """OAuth client configuration for the Twitch provider."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: SecretStr
    site: str = TWITCH_SITE
    authorize_url: str = TWITCH_AUTHORIZE_URL
    token_url: str = TWITCH_TOKEN_URL
    profile_url: str = TWITCH_PROFILE_URL
    redirect_uri: str | None = None

    @model_validator(mode="before")
    @classmethod
    def resolve_endpoints(cls, data: Any) -> Any:
        """Resolve relative endpoint paths against the site URL."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        base = (data.get("site") or TWITCH_SITE).rstrip("/") + "/"
        for name in ("authorize_url", "token_url", "profile_url"):
            value = data.get(name)
            if value and not value.startswith(("http://", "https://")):
                data[name] = urljoin(base, value.lstrip("/"))
        return data


class StrategyOptions(BaseModel):
    """Per-provider options for the strategy."""

    model_config = ConfigDict(frozen=True)

    uid_field: str = Field(default="login", description="Profile field used as the uid")
    default_scope: str = Field(
        default="user_read channel_read", description="Scope requested when none is given"
    )
    callback_url: str | None = Field(None, description="Overrides the derived callback URL")


class Token(BaseModel):
    """
    Token returned by the token endpoint.

    Only lives for the duration of a callback; it is never persisted.
    """

    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = None
    token_type: str | None = None
    other_params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_response(cls, payload: dict[str, Any]) -> "Token":
        """Builds a Token from a raw token endpoint response."""
        data = dict(payload)
        fields = {key: data.pop(key, None) for key in _TOKEN_FIELDS}

        expires_in = data.pop("expires_in", None)
        if fields["expires_at"] is None and expires_in is not None:
            fields["expires_at"] = int(time.time()) + int(expires_in)
        elif fields["expires_at"] is not None:
            fields["expires_at"] = int(fields["expires_at"])

        return cls(**fields, other_params=data)


class Credentials(BaseModel):
    token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = None
    token_type: str | None = None
    expires: bool = False
    scopes: Any = None


class Info(BaseModel):
    """User information normalized from the provider profile."""

    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    email: str | None = None
    location: str | None = None
    description: str | None = None
    image: str | None = None
    phone: str | None = None
    urls: dict[str, Any] = Field(default_factory=dict)


class Extra(BaseModel):
    raw_info: dict[str, Any] = Field(default_factory=dict)


class Auth(BaseModel):
    """
    Canonical authentication result handed to the host application.
    """

    provider: str
    strategy: str
    uid: str | None
    info: Info
    credentials: Credentials
    extra: Extra


class AuthErrorDetail(BaseModel):
    kind: str = Field(..., description="Machine readable error key")
    message: str | None = Field(None, description="Human-readable error message")


class Failure(BaseModel):
    """Failure outcome of a callback phase."""

    provider: str
    strategy: str
    errors: list[AuthErrorDetail]
