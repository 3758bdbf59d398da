"""Structured logging setup."""

import logging
import sys

import structlog

from jwtkit.core.settings import JWTSettings

PACKAGE_LOGGER = "jwtkit"


def configure_logging(log_level: str | None = None) -> None:
    """Route jwtkit events through structlog to stdlib logging as JSON.

    Without an explicit level, ``JWT_LOG_LEVEL`` is read through
    `JWTSettings`.
    """
    if log_level is None:
        log_level = JWTSettings().log_level
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
