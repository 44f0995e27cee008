"""Logging configuration for the Twitch strategy."""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

# Event keys whose values must never reach a log sink.
SENSITIVE_KEYS = frozenset(
    {"access_token", "refresh_token", "client_secret", "code", "authorization"}
)


def redact_sensitive(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Masks credential values that were bound to a log event."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def _renderer(log_level: str) -> Any:
    if log_level == "DEBUG":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog on top of the standard library logging.
    Call once at application startup.
    """
    log_level = log_level.upper()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_sensitive,
            _renderer(log_level),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Records emitted by uvicorn/httpx through stdlib logging get the same rendering
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_renderer(log_level),
        foreign_pre_chain=[structlog.contextvars.merge_contextvars, structlog.stdlib.add_log_level],
        fmt="%(message)s",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str) -> Any:
    """Get a configured structlog logger."""
    return structlog.get_logger(name)
