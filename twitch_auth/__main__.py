"""Entry point for running the Twitch auth server."""

import uvicorn

from twitch_auth.config import get_config
from twitch_auth.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    """Entry point for running the server."""
    config = get_config()
    configure_logging(config.log_level)

    logger.info("Starting server on port %s", config.server_port)

    uvicorn.run(
        "twitch_auth.server:app",
        host=config.server_host,
        port=config.server_port,
        log_config=None,  # Use our custom structlog configuration
        access_log=False,
    )


if __name__ == "__main__":
    main()
