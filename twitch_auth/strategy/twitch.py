"""
Twitch authentication strategy.

Setup::

    TWITCH_CLIENT_ID=...        # from your Twitch developer application
    TWITCH_CLIENT_SECRET=...

The request phase accepts ``scope`` and ``state`` query parameters, e.g.
``/auth/twitch?scope=user_read channel_read``; ``state`` is returned by
Twitch unchanged. The uid defaults to the profile's ``login`` field and can
be changed with ``UID_FIELD`` (for example ``email``).
"""

from typing import Any

from twitch_auth.models.auth import Credentials, Extra, Info, Token
from twitch_auth.models.errors import (
    ProfileFetchError,
    StrategyStateError,
    TokenExchangeError,
    TransportError,
    UnauthorizedError,
)
from twitch_auth.strategy.base import BaseStrategy, Connection, error
from twitch_auth.utils.logging import get_logger

logger = get_logger(__name__)

TOKEN_KEY = "twitch_token"
USER_KEY = "twitch_user"


class TwitchStrategy(BaseStrategy):
    """Maps Twitch's OAuth2 flow and user object onto the canonical auth result."""

    provider = "twitch"

    def handle_request(self, conn: Connection) -> None:
        scope = conn.get_param("scope") or self.options.default_scope
        state = conn.get_param("state")

        url = self.client.build_authorize_url(
            redirect_uri=self.callback_url(conn), scope=scope, state=state
        )
        conn.redirect(url)

    async def handle_callback(self, conn: Connection) -> None:
        code = conn.get_param("code")
        if code is None:
            if conn.get_param("error"):
                logger.info("twitch_callback_provider_error", error=conn.get_param("error"))
            conn.set_errors([error("missing_code", "No code received")])
            return

        try:
            token = await self.client.exchange_code_for_token(code, self.callback_url(conn))
        except TokenExchangeError as e:
            conn.set_errors([error(e.error, e.description)])
            return
        except TransportError as e:
            conn.set_errors([error("OAuth2", e.reason)])
            return

        if token.access_token is None:
            conn.set_errors(
                [
                    error(
                        token.other_params.get("error") or "missing_access_token",
                        token.other_params.get("error_description"),
                    )
                ]
            )
            return

        await self._fetch_user(conn, token)

    def handle_cleanup(self, conn: Connection) -> None:
        conn.put_private(USER_KEY, None)
        conn.put_private(TOKEN_KEY, None)

    async def _fetch_user(self, conn: Connection, token: Token) -> None:
        conn.put_private(TOKEN_KEY, token)
        try:
            user = await self.client.fetch_profile(token)
        except UnauthorizedError:
            conn.set_errors([error("token", "unauthorized")])
        except TransportError as e:
            conn.set_errors([error("OAuth2", e.reason)])
        except ProfileFetchError as e:
            conn.set_errors([error("profile", e.message)])
        else:
            conn.put_private(USER_KEY, user)

    def _token(self, conn: Connection) -> Token:
        token = conn.get_private(TOKEN_KEY)
        if token is None:
            raise StrategyStateError("No Twitch token on this connection")
        return token

    def _user(self, conn: Connection) -> dict[str, Any]:
        user = conn.get_private(USER_KEY)
        if user is None:
            raise StrategyStateError("No Twitch user on this connection")
        return user

    def uid(self, conn: Connection) -> str | None:
        """Reads the configured ``uid_field`` (default ``login``) from the Twitch user."""
        value = self._user(conn).get(self.options.uid_field)
        return None if value is None else str(value)

    def credentials(self, conn: Connection) -> Credentials:
        token = self._token(conn)
        return Credentials(
            token=token.access_token,
            refresh_token=token.refresh_token,
            expires_at=token.expires_at,
            token_type=token.token_type,
            expires=token.expires_at is not None,
            scopes=token.other_params.get("scope"),
        )

    def info(self, conn: Connection) -> Info:
        user = self._user(conn)
        return Info(
            name=user.get("name"),  # display name
            email=user.get("email"),
            description=user.get("bio"),
            image=user.get("logo"),
            urls={"self": user.get("self")},
        )

    def extra(self, conn: Connection) -> Extra:
        user = self._user(conn)
        return Extra(
            raw_info={
                "token": self._token(conn),
                "user": user,
                "is_partnered": user.get("partnered"),
            }
        )
