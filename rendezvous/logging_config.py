"""Structured logging setup."""
import logging
import sys

import structlog

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(log_level: str = "info") -> None:
    """Route structlog through stdlib logging with JSON output.

    Args:
        log_level: One of "debug", "info", "warn", "error"

    Raises:
        ValueError: If log_level is not recognized
    """
    try:
        level = _LEVELS[log_level.lower()]
    except KeyError:
        raise ValueError(f"Invalid log level: {log_level}") from None

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
