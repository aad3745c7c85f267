"""Colored console logging for MotionBlocks.

Messages go through a standard library logger named ``motionblocks`` so hosts
can attach their own handlers, while the module-level helpers keep the short
``log.info(f"...", log.GREEN)`` call style used across the package.

Examples:
    >>> from motionblocks.utils.logging import log
    >>> log.info("Evaluating track intro", log.BLUE)
"""

import logging
import os
import sys

BOLD = "\033[1m"
UNDERLINE = "\033[4m"
ITALIC = "\033[3m"

RED = "\033[31m"
ORANGE = "\033[38;5;208m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
BLUE = "\033[34m"
PURPLE = "\033[35m"

RESET_COLOR = "\033[0m"

LOGGER_NAME = "motionblocks"
LEVEL_ENV_VAR = "MOTIONBLOCKS_LOG_LEVEL"

_logger = logging.getLogger(LOGGER_NAME)


def _configure(logger: logging.Logger) -> logging.Logger:
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    level = logging.getLevelName(os.environ.get(LEVEL_ENV_VAR, "INFO").upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    return logger


_configure(_logger)


def get_logger() -> logging.Logger:
    """Return the shared ``motionblocks`` logger."""
    return _logger


def set_level(level: str | int) -> None:
    """Change the verbosity of the shared logger (e.g. ``"DEBUG"``)."""
    _logger.setLevel(level.upper() if isinstance(level, str) else level)


def _paint(message: str, color: str | None) -> str:
    if not color:
        return message
    return f"{color}{message}{RESET_COLOR}"


def debug(message: str, color: str | None = None) -> None:
    _logger.debug(_paint(message, color))


def info(message: str, color: str | None = None) -> None:
    _logger.info(_paint(message, color))


def warning(message: str, color: str | None = YELLOW) -> None:
    _logger.warning(_paint(message, color))


def error(message: str, color: str | None = RED) -> None:
    _logger.error(_paint(message, color))
