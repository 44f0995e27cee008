"""
Host ASGI application.

Serves the Twitch authentication routes and a health endpoint.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from twitch_auth import __version__
from twitch_auth.config import get_config
from twitch_auth.handlers.auth import get_strategy
from twitch_auth.handlers.auth import router as auth_router
from twitch_auth.handlers.health import health_check
from twitch_auth.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan (startup and shutdown)."""
    logger.info("Starting Twitch auth server", version=__version__)
    config = get_config()
    logger.info(
        "Configuration loaded",
        environment=config.environment,
        log_level=config.log_level,
        authorize_url=config.oauth_config.authorize_url,
    )
    app.state.strategy = get_strategy()
    yield
    logger.info("Shutting down Twitch auth server")


app = FastAPI(
    title="Twitch OAuth2 Strategy",
    description="Authenticates users through Twitch's OAuth2 authorization-code flow.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(auth_router)
logger.info("Mounted Twitch auth routes at /auth/twitch")


@app.get("/health")
async def health(request: Request) -> JSONResponse:
    """Health check endpoint."""
    strategy = getattr(request.app.state, "strategy", None)
    providers = [strategy.provider] if strategy is not None else []
    return await health_check(providers)
