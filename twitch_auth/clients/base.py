from abc import ABC, abstractmethod
from typing import Any

from twitch_auth.models.auth import OAuthConfig, Token


class BaseOAuth2Client(ABC):
    """
    Abstract Base Class for OAuth2 authorization-code clients.

    A strategy only talks to its provider through this interface, so a
    different client implementation can be swapped in without touching
    the strategy's field mapping.
    """

    def __init__(self, config: OAuthConfig) -> None:
        self.config = config

    @abstractmethod
    def build_authorize_url(
        self, redirect_uri: str, scope: str | None = None, state: str | None = None
    ) -> str:
        """
        Builds the provider authorize URL the browser is redirected to.

        Args:
            redirect_uri: Callback URL registered with the provider.
            scope: Space-delimited scope string.
            state: Opaque value echoed back by the provider, if given.

        Returns:
            The fully qualified authorize URL. Never contains the client secret.
        """
        raise NotImplementedError

    @abstractmethod
    async def exchange_code_for_token(self, code: str, redirect_uri: str) -> Token:
        """
        Exchanges an authorization code for a token.

        Raises:
            TokenExchangeError: The provider returned an OAuth2 error payload.
            TransportError: The token endpoint could not be reached.
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch_profile(self, token: Token) -> dict[str, Any]:
        """
        Fetches the authenticated user's profile.

        Raises:
            UnauthorizedError: The provider answered 401.
            TransportError: The profile endpoint could not be reached.
            ProfileFetchError: Any other unsuccessful response.
        """
        raise NotImplementedError
