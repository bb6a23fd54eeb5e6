"""
Logging setup for RocketCart.

Usage:
    from rocketcart.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Product added")
    logger.error("Failed to persist cart", exc_info=True)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_level() -> int:
    """Get log level from environment or default to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    """Attach a stdout handler to the root logger unless one is already set."""
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(_get_log_level())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_get_log_level())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # Request lines from the shop API client are noise at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with the given name (typically __name__)."""
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value) -> str:
    """
    Make a caller-supplied identifier safe to log.

    Control characters are escaped (CWE-117) and the value is truncated
    to 16 characters.

    Args:
        id_value: Identifier to sanitize (can be None)

    Returns:
        Sanitized string or "N/A" if empty
    """
    if id_value is None or id_value == "":
        return "N/A"
    safe_value = (
        str(id_value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    return safe_value[:16]


__all__ = ["LOG_FORMAT", "get_logger", "sanitize_id_for_logging"]
