"""Configuration management using environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from twitch_auth.models.auth import (
    TWITCH_AUTHORIZE_URL,
    TWITCH_PROFILE_URL,
    TWITCH_SITE,
    TWITCH_TOKEN_URL,
    OAuthConfig,
    StrategyOptions,
)


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server bind address")
    server_port: int = Field(default=4000, description="Server port", ge=1, le=65535)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: str = Field(default="development", description="Environment name")

    # Twitch OAuth client
    twitch_client_id: str = Field(..., description="Twitch application client ID")
    twitch_client_secret: SecretStr = Field(..., description="Twitch application client secret")
    twitch_site: str = Field(default=TWITCH_SITE, description="Provider site URL")
    twitch_authorize_url: str = Field(
        default=TWITCH_AUTHORIZE_URL, description="Authorization endpoint (absolute or site-relative)"
    )
    twitch_token_url: str = Field(
        default=TWITCH_TOKEN_URL, description="Token endpoint (absolute or site-relative)"
    )
    twitch_profile_url: str = Field(
        default=TWITCH_PROFILE_URL, description="Profile endpoint (absolute or site-relative)"
    )
    twitch_redirect_uri: str | None = Field(
        None, description="Fixed redirect URI; derived from the callback route when unset"
    )
    http_timeout: float = Field(
        default=10.0, description="Timeout in seconds for provider requests", gt=0
    )

    # Strategy options
    uid_field: str = Field(default="login", description="Profile field used as the user id")
    default_scope: str = Field(
        default="user_read channel_read",
        description="Space-delimited scope requested when the request carries none",
    )

    @property
    def oauth_config(self) -> OAuthConfig:
        """Returns the immutable client configuration."""
        return OAuthConfig(
            client_id=self.twitch_client_id,
            client_secret=self.twitch_client_secret,
            site=self.twitch_site,
            authorize_url=self.twitch_authorize_url,
            token_url=self.twitch_token_url,
            profile_url=self.twitch_profile_url,
            redirect_uri=self.twitch_redirect_uri,
        )

    @property
    def strategy_options(self) -> StrategyOptions:
        """Returns the strategy options."""
        return StrategyOptions(
            uid_field=self.uid_field,
            default_scope=self.default_scope,
            callback_url=self.twitch_redirect_uri,
        )


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config()  # type: ignore
