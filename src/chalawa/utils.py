"""
Chalawa - Utility functions.

Logging setup for applications embedding the library, and display helpers
for keys and fingerprints.
"""

import logging
from typing import Optional

from .constants import DEFAULT_LOG_LEVEL, LOG_DATE_FORMAT, LOG_FORMAT

PACKAGE_LOGGER = "chalawa"


def setup_logging(config=None, level: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``chalawa`` logger from the ``[logging]`` config section.

    The root logger is left untouched. Calling this again replaces the
    handler installed by the previous call.

    Args:
        config: Config instance (optional)
        level: Explicit level name, overrides the config value

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    if level is None:
        level = config.get("logging", "level", DEFAULT_LOG_LEVEL) if config else DEFAULT_LOG_LEVEL
    console = config.get("logging", "console_logging", True) if config else True

    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_chalawa_handler", False):
            logger.removeHandler(handler)

    if console:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        handler._chalawa_handler = True
        logger.addHandler(handler)

    return logger


def truncate_string(s: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate a string to a maximum length.

    Args:
        s: String to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated string
    """
    if len(s) <= max_length:
        return s
    return s[: max_length - len(suffix)] + suffix


def format_fingerprint(fingerprint: str) -> str:
    """
    Format a fingerprint for display with spaces every 4 characters.

    Args:
        fingerprint: Hex fingerprint string

    Returns:
        Formatted fingerprint
    """
    return " ".join(fingerprint[i : i + 4] for i in range(0, len(fingerprint), 4))
