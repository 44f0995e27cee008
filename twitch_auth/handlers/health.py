"""Health check endpoint handler."""

from datetime import UTC, datetime

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from twitch_auth import __version__


class HealthCheckResponse(BaseModel):
    """
    Response model for the health check endpoint.
    """

    status: str = Field(..., description="Status of the server")
    version: str = Field(..., description="Version of the server")
    timestamp: datetime = Field(..., description="Current server timestamp in ISO 8601 format")
    providers: list[str] = Field(default_factory=list, description="Configured auth providers")


async def health_check(providers: list[str]) -> JSONResponse:
    """
    Handles the health check request.
    Returns a JSON response with the server's health status.
    """
    response_model = HealthCheckResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(UTC),
        providers=providers,
    )

    return JSONResponse(content=response_model.model_dump(mode="json"))
