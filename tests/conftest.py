import os
from collections.abc import Callable, Mapping
from typing import Any

import httpx
import pytest

from twitch_auth.clients.twitch import TwitchOAuthClient
from twitch_auth.models.auth import Auth, Failure, OAuthConfig, StrategyOptions
from twitch_auth.strategy.base import Connection
from twitch_auth.strategy.twitch import TwitchStrategy

TOKEN_URL = "https://api.twitch.tv/kraken/oauth2/token"
PROFILE_URL = "https://api.twitch.tv/kraken/user"
CALLBACK_URL = "http://localhost:4000/auth/twitch/callback"


def pytest_configure(config):
    """
    Loads .env and sets dummy credentials required to build the configuration.
    """
    from dotenv import load_dotenv

    load_dotenv()
    os.environ.setdefault("TWITCH_CLIENT_ID", "test-client-id")
    os.environ.setdefault("TWITCH_CLIENT_SECRET", "test-client-secret")


class FakeConnection(Connection):
    """In-memory connection used to drive strategies without a web framework."""

    def __init__(self, params: Mapping[str, str] | None = None, callback_url: str = CALLBACK_URL):
        super().__init__()
        self._params = dict(params or {})
        self._callback_url = callback_url
        self.redirected_to: str | None = None
        self.result: Auth | Failure | None = None

    @property
    def params(self) -> Mapping[str, str]:
        return self._params

    @property
    def callback_url(self) -> str:
        return self._callback_url

    def redirect(self, url: str) -> None:
        self.redirected_to = url

    def set_result(self, result: Auth | Failure) -> None:
        self.result = result


class ProviderStub:
    """
    Simulates the Twitch token and profile endpoints behind an httpx.MockTransport.
    """

    def __init__(
        self,
        token_status: int = 200,
        token_body: Any = None,
        profile_status: int = 200,
        profile_body: Any = None,
        raise_on: str | None = None,
    ) -> None:
        self.token_status = token_status
        self.token_body = (
            token_body
            if token_body is not None
            else {
                "access_token": "access-123",
                "refresh_token": "refresh-456",
                "expires_in": 3600,
                "token_type": "bearer",
                "scope": ["user_read", "channel_read"],
            }
        )
        self.profile_status = profile_status
        self.profile_body = (
            profile_body
            if profile_body is not None
            else {"login": "bob", "name": "Bob", "email": "bob@x.com"}
        )
        self.raise_on = raise_on
        self.requests: list[httpx.Request] = []

    def _respond(self, status: int, body: Any) -> httpx.Response:
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=str(body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_on and request.url.path.endswith(self.raise_on):
            raise httpx.ConnectError("connection refused", request=request)
        if str(request.url) == TOKEN_URL:
            return self._respond(self.token_status, self.token_body)
        if str(request.url) == PROFILE_URL:
            return self._respond(self.profile_status, self.profile_body)
        return httpx.Response(404, json={"error": "not_found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def form(self, index: int = 0) -> dict[str, str]:
        """Decodes the form body of a recorded request."""
        return dict(httpx.QueryParams(self.requests[index].content.decode()))


@pytest.fixture
def oauth_config() -> OAuthConfig:
    return OAuthConfig(client_id="test-client-id", client_secret="super-secret")


@pytest.fixture
def make_client(oauth_config: OAuthConfig) -> Callable[[ProviderStub], TwitchOAuthClient]:
    def _make(stub: ProviderStub) -> TwitchOAuthClient:
        return TwitchOAuthClient(
            oauth_config, default_scope="user_read channel_read", transport=stub.transport
        )

    return _make


@pytest.fixture
def make_strategy(make_client) -> Callable[..., TwitchStrategy]:
    def _make(stub: ProviderStub, **options: Any) -> TwitchStrategy:
        return TwitchStrategy(make_client(stub), StrategyOptions(**options))

    return _make
