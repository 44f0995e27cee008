"""
Two-phase OAuth2 strategy lifecycle.

A strategy runs against a :class:`Connection`, the host framework's view of
the current request. The request phase redirects the browser to the provider;
the callback phase exchanges the code, fetches the profile and produces either
an :class:`~twitch_auth.models.auth.Auth` or a
:class:`~twitch_auth.models.auth.Failure`.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from twitch_auth.clients.base import BaseOAuth2Client
from twitch_auth.models.auth import (
    Auth,
    AuthErrorDetail,
    Credentials,
    Extra,
    Failure,
    Info,
    StrategyOptions,
)
from twitch_auth.models.errors import StrategyStateError
from twitch_auth.utils.logging import get_logger

logger = get_logger(__name__)


class Connection(ABC):
    """
    Host framework contract for a single request.

    ``private`` is per-request scratch space for the strategy; it must never
    be shared between requests.
    """

    def __init__(self) -> None:
        self.private: dict[str, Any] = {}
        self.errors: list[AuthErrorDetail] = []

    @property
    @abstractmethod
    def params(self) -> Mapping[str, str]:
        """Request parameters."""
        raise NotImplementedError

    @property
    @abstractmethod
    def callback_url(self) -> str:
        """Absolute URL of the strategy's callback route."""
        raise NotImplementedError

    @abstractmethod
    def redirect(self, url: str) -> None:
        """Sends the browser to ``url``."""
        raise NotImplementedError

    @abstractmethod
    def set_result(self, result: Auth | Failure) -> None:
        """Hands the outcome of the callback phase to the host application."""
        raise NotImplementedError

    def get_param(self, name: str) -> str | None:
        value = self.params.get(name)
        return value if value else None

    def put_private(self, key: str, value: Any) -> None:
        self.private[key] = value

    def get_private(self, key: str) -> Any:
        return self.private.get(key)

    def set_errors(self, errors: list[AuthErrorDetail]) -> None:
        self.errors = list(errors)

    @property
    def failed(self) -> bool:
        return bool(self.errors)


def error(kind: str, message: str | None) -> AuthErrorDetail:
    """Builds a single failure entry."""
    return AuthErrorDetail(kind=kind, message=message)


class BaseStrategy(ABC):
    """
    Abstract Base Class for provider strategies.

    Subclasses implement the provider-specific callback handling and field
    mapping; the lifecycle (phases, result assembly, cleanup) lives here.
    """

    provider: str = ""

    def __init__(self, client: BaseOAuth2Client, options: StrategyOptions | None = None) -> None:
        self.client = client
        self.options = options or StrategyOptions()

    @property
    def name(self) -> str:
        return type(self).__name__

    def callback_url(self, conn: Connection) -> str:
        return self.options.callback_url or conn.callback_url

    @abstractmethod
    def handle_request(self, conn: Connection) -> None:
        """Request phase: redirect the browser to the provider."""
        raise NotImplementedError

    @abstractmethod
    async def handle_callback(self, conn: Connection) -> None:
        """Callback phase: populate ``conn.private`` or set errors on ``conn``."""
        raise NotImplementedError

    @abstractmethod
    def handle_cleanup(self, conn: Connection) -> None:
        """Drops per-request provider data from ``conn.private``."""
        raise NotImplementedError

    @abstractmethod
    def uid(self, conn: Connection) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def credentials(self, conn: Connection) -> Credentials:
        raise NotImplementedError

    @abstractmethod
    def info(self, conn: Connection) -> Info:
        raise NotImplementedError

    @abstractmethod
    def extra(self, conn: Connection) -> Extra:
        raise NotImplementedError

    def run_request(self, conn: Connection) -> None:
        logger.info("strategy_request_phase", provider=self.provider)
        self.handle_request(conn)

    async def run_callback(self, conn: Connection) -> Auth | Failure:
        """
        Runs the callback phase and hands the result to the connection.

        Provider data gathered during the callback is cleared before this
        returns, whatever the outcome.
        """
        try:
            await self.handle_callback(conn)
            result: Auth | Failure
            if conn.failed:
                result = self.failure(conn)
                logger.warning(
                    "strategy_callback_failed",
                    provider=self.provider,
                    kinds=[e.kind for e in result.errors],
                )
            else:
                result = self.auth(conn)
                logger.info("strategy_callback_succeeded", provider=self.provider)
        finally:
            self.handle_cleanup(conn)

        conn.set_result(result)
        return result

    def auth(self, conn: Connection) -> Auth:
        if conn.failed:
            raise StrategyStateError("Cannot build an auth result for a failed callback")
        return Auth(
            provider=self.provider,
            strategy=self.name,
            uid=self.uid(conn),
            info=self.info(conn),
            credentials=self.credentials(conn),
            extra=self.extra(conn),
        )

    def failure(self, conn: Connection) -> Failure:
        return Failure(provider=self.provider, strategy=self.name, errors=conn.errors)
