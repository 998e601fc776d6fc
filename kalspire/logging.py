"""
Logging setup for the storefront client.

Usage:
    from kalspire.logging import get_logger
    logger = get_logger(__name__)

The first import attaches a stdout handler to the root logger unless the host
application already configured one. Call `configure_logging` to change the
level or format later.
"""

import logging
import os
import sys
from functools import cache
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Loggers of libraries underneath the Redis slot
NOISY_LOGGERS = ("httpx", "httpcore", "upstash_redis")

_handler: Optional[logging.Handler] = None


def _level_from_env() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: Optional[int] = None, simple: Optional[bool] = None) -> None:
    """
    Install or update the storefront log handler.

    Args:
        level: Logging level, defaults to LOG_LEVEL from the environment
        simple: Drop timestamps (LOG_FORMAT=simple in the environment)
    """
    global _handler

    level = level if level is not None else _level_from_env()
    if simple is None:
        simple = os.environ.get("LOG_FORMAT", "").lower() == "simple"

    logging.getLogger("kalspire").setLevel(level)

    root = logging.getLogger()
    if _handler is None:
        if root.handlers:
            # Someone else owns logging output
            return
        _handler = logging.StreamHandler(sys.stdout)
        root.addHandler(_handler)

    _handler.setLevel(level)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if simple else LOG_FORMAT))
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    """Get a logger by name (typically __name__)."""
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: Optional[str]) -> str:
    """
    Make an id safe to log: control characters escaped, first 8 chars kept.

    Returns:
        Sanitized ID string or "N/A" if empty
    """
    if not id_value:
        return "N/A"
    safe_value = (
        str(id_value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    return safe_value[:8]


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
]
