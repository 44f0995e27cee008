"""
OAuth2 client for Twitch.

The token exchange and URL building are delegated to Authlib; the HTTP
transport is httpx.
"""

from typing import Any

import httpx
from authlib.integrations.base_client import OAuthError
from authlib.integrations.httpx_client import AsyncOAuth2Client
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri

from twitch_auth.clients.base import BaseOAuth2Client
from twitch_auth.models.auth import OAuthConfig, Token
from twitch_auth.models.errors import (
    ProfileFetchError,
    TokenExchangeError,
    TransportError,
    UnauthorizedError,
)
from twitch_auth.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0
TOKEN_REQUEST_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/x-www-form-urlencoded;charset=UTF-8",
}


class TwitchOAuthClient(BaseOAuth2Client):
    """
    Authorization-code client for the Twitch API.

    Extra keyword arguments (``timeout``, ``transport``, ...) are merged over
    the defaults and handed to the underlying httpx client.
    """

    def __init__(self, config: OAuthConfig, default_scope: str | None = None, **client_kwargs: Any) -> None:
        super().__init__(config)
        self.default_scope = default_scope
        self.client_kwargs: dict[str, Any] = {"timeout": DEFAULT_TIMEOUT, **client_kwargs}

    def _session(self) -> AsyncOAuth2Client:
        """Creates a short-lived Authlib session for a single operation."""
        return AsyncOAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret.get_secret_value(),
            token_endpoint_auth_method="client_secret_post",
            **self.client_kwargs,
        )

    def build_authorize_url(
        self, redirect_uri: str, scope: str | None = None, state: str | None = None
    ) -> str:
        # prepare_grant_uri only adds state when one is given; the session
        # helper would generate a random one.
        return prepare_grant_uri(
            self.config.authorize_url,
            self.config.client_id,
            "code",
            redirect_uri=redirect_uri,
            scope=scope or self.default_scope,
            state=state,
        )

    async def exchange_code_for_token(self, code: str, redirect_uri: str) -> Token:
        logger.info("twitch_token_exchange_started", token_url=self.config.token_url)
        try:
            async with self._session() as session:
                payload = await session.fetch_token(
                    self.config.token_url,
                    grant_type="authorization_code",
                    code=code,
                    redirect_uri=redirect_uri,
                    headers=dict(TOKEN_REQUEST_HEADERS),
                )
        except OAuthError as e:
            logger.warning("twitch_token_exchange_rejected", error=e.error)
            raise TokenExchangeError(e.error, e.description) from e
        except httpx.HTTPError as e:
            logger.error("twitch_token_exchange_failed", error=str(e))
            raise TransportError(str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.error("twitch_token_exchange_invalid_response", error=str(e))
            raise TransportError(f"Invalid token response: {e}") from e

        return Token.from_response(dict(payload))

    async def fetch_profile(self, token: Token) -> dict[str, Any]:
        headers = {
            "Accept": "application/json",
            "Authorization": f"OAuth {token.access_token}",
        }
        try:
            async with self._session() as session:
                # The token is sent in Twitch's "OAuth" scheme, not as a Bearer token.
                response = await session.request(
                    "GET", self.config.profile_url, headers=headers, withhold_token=True
                )
        except httpx.HTTPError as e:
            logger.error("twitch_profile_fetch_failed", error=str(e))
            raise TransportError(str(e) or type(e).__name__) from e

        if response.status_code == 401:
            logger.warning("twitch_profile_unauthorized")
            raise UnauthorizedError()

        if not 200 <= response.status_code < 400:
            logger.warning("twitch_profile_unexpected_status", status_code=response.status_code)
            raise ProfileFetchError(response.status_code, response.text)

        try:
            profile = response.json()
        except ValueError as e:
            raise ProfileFetchError(response.status_code, response.text) from e
        if not isinstance(profile, dict):
            raise ProfileFetchError(response.status_code, profile)

        logger.info("twitch_profile_fetched", status_code=response.status_code)
        return profile
