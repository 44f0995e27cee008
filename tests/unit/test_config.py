"""Unit tests for the configuration module."""

import pytest
from pydantic import ValidationError

from twitch_auth.config import Config, get_config


@pytest.fixture(autouse=True)
def clear_config_cache() -> None:
    """Clear the config cache before and after each test."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the Config class loads default values correctly."""
    for name in ("ENVIRONMENT", "LOG_LEVEL", "UID_FIELD", "DEFAULT_SCOPE", "TWITCH_REDIRECT_URI"):
        monkeypatch.delenv(name, raising=False)
    config = Config(
        twitch_client_id="id",
        twitch_client_secret="secret",
        _env_file=None,  # Disable .env file loading for isolated test
    )
    assert config.server_host == "0.0.0.0"
    assert config.server_port == 4000
    assert config.log_level == "INFO"
    assert config.environment == "development"
    assert config.uid_field == "login"
    assert config.default_scope == "user_read channel_read"
    assert config.http_timeout == 10.0
    assert config.twitch_token_url == "https://api.twitch.tv/kraken/oauth2/token"


def test_config_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that environment variables override default values."""
    monkeypatch.setenv("TWITCH_CLIENT_ID", "env-id")
    monkeypatch.setenv("TWITCH_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("TWITCH_REDIRECT_URI", "https://app.example.com/auth/twitch/callback")
    monkeypatch.setenv("UID_FIELD", "email")
    monkeypatch.setenv("DEFAULT_SCOPE", "user_read")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SERVER_PORT", "9000")

    config = get_config()

    assert config.twitch_client_id == "env-id"
    assert config.twitch_client_secret.get_secret_value() == "env-secret"
    assert config.server_port == 9000
    assert config.log_level == "DEBUG"

    oauth_config = config.oauth_config
    assert oauth_config.client_id == "env-id"
    assert oauth_config.redirect_uri == "https://app.example.com/auth/twitch/callback"

    options = config.strategy_options
    assert options.uid_field == "email"
    assert options.default_scope == "user_read"
    assert options.callback_url == "https://app.example.com/auth/twitch/callback"


def test_config_missing_required_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that validation fails if the client credentials are missing."""
    monkeypatch.delenv("TWITCH_CLIENT_ID", raising=False)
    monkeypatch.delenv("TWITCH_CLIENT_SECRET", raising=False)
    with pytest.raises(ValidationError) as excinfo:
        Config(_env_file=None)
    error_fields = {error["loc"][0] for error in excinfo.value.errors()}
    assert error_fields == {"twitch_client_id", "twitch_client_secret"}


def test_get_config_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the get_config function caches its result."""
    monkeypatch.setenv("TWITCH_CLIENT_ID", "first")

    config1 = get_config()
    monkeypatch.setenv("TWITCH_CLIENT_ID", "second")
    config2 = get_config()
    assert config1 is config2
    assert config2.twitch_client_id == "first"

    get_config.cache_clear()
    config3 = get_config()
    assert config3.twitch_client_id == "second"


def test_get_strategy_is_built_from_config(mocker) -> None:
    """The process-wide strategy receives the configured client and options."""
    from twitch_auth.handlers.auth import get_strategy
    from twitch_auth.strategy.twitch import TwitchStrategy

    config = Config(
        twitch_client_id="wired-id",
        twitch_client_secret="wired-secret",
        uid_field="email",
        http_timeout=3.0,
        _env_file=None,
    )
    mocker.patch("twitch_auth.handlers.auth.get_config", return_value=config)
    get_strategy.cache_clear()
    try:
        strategy = get_strategy()
    finally:
        get_strategy.cache_clear()

    assert isinstance(strategy, TwitchStrategy)
    assert strategy.options.uid_field == "email"
    assert strategy.client.config.client_id == "wired-id"
    assert strategy.client.client_kwargs["timeout"] == 3.0
