"""
Twitch authentication routes.

``GET /auth/twitch`` starts the flow and ``GET /auth/twitch/callback``
finishes it. The outcome is attached to ``request.state`` and to
``auth_result_var`` for the host application.
"""

from collections.abc import Mapping
from functools import lru_cache

from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse, RedirectResponse, Response

from twitch_auth.clients.twitch import TwitchOAuthClient
from twitch_auth.config import get_config
from twitch_auth.models.auth import Auth, Failure
from twitch_auth.strategy.base import BaseStrategy, Connection
from twitch_auth.strategy.twitch import TwitchStrategy
from twitch_auth.utils.context import auth_result_var
from twitch_auth.utils.logging import get_logger

router = APIRouter(prefix="/auth")
logger = get_logger(__name__)

CALLBACK_ROUTE_NAME = "twitch_callback"


class StarletteConnection(Connection):
    """Connection backed by a Starlette request."""

    def __init__(self, request: Request) -> None:
        super().__init__()
        self.request = request
        self.response: Response | None = None

    @property
    def params(self) -> Mapping[str, str]:
        return self.request.query_params

    @property
    def callback_url(self) -> str:
        return str(self.request.url_for(CALLBACK_ROUTE_NAME))

    def redirect(self, url: str) -> None:
        self.response = RedirectResponse(url, status_code=302)

    def set_result(self, result: Auth | Failure) -> None:
        if isinstance(result, Auth):
            self.request.state.ueberauth_auth = result
        else:
            self.request.state.auth_failure = result
        auth_result_var.set(result)


@lru_cache
def get_strategy() -> BaseStrategy:
    """Builds the process-wide strategy from configuration."""
    config = get_config()
    client = TwitchOAuthClient(
        config.oauth_config,
        default_scope=config.default_scope,
        timeout=config.http_timeout,
    )
    return TwitchStrategy(client, config.strategy_options)


def _build_failure_response_json(failure: Failure, status_code: int = 401) -> JSONResponse:
    """Builds an OAuth 2.0 style error JSONResponse from a failure."""
    first = failure.errors[0]
    content = {
        "error": first.kind,
        "error_description": first.message,
        "errors": [e.model_dump() for e in failure.errors],
    }
    return JSONResponse(content=content, status_code=status_code)


@router.get("/twitch")
async def request_phase(
    request: Request, strategy: BaseStrategy = Depends(get_strategy)
) -> Response:
    """Redirects the browser to the Twitch authorize page."""
    conn = StarletteConnection(request)
    strategy.run_request(conn)
    if conn.response is None:
        # A strategy must always redirect in the request phase
        raise RuntimeError(f"{strategy.name} did not redirect in the request phase")
    return conn.response


@router.get("/twitch/callback", name=CALLBACK_ROUTE_NAME)
async def callback_phase(
    request: Request, strategy: BaseStrategy = Depends(get_strategy)
) -> JSONResponse:
    """Completes the flow and reports the authenticated user."""
    conn = StarletteConnection(request)
    result = await strategy.run_callback(conn)

    if isinstance(result, Failure):
        return _build_failure_response_json(result)

    return JSONResponse(
        {
            "uid": result.uid,
            "provider": result.provider,
            "info": result.info.model_dump(mode="json"),
        }
    )
