"""
Logging setup for Android Toolbox Manager.

Everything goes to stderr: stdout is the MCP stdio transport.
"""
import logging
import os
import sys

from colorlog import ColoredFormatter

from core.config import LOG_LEVEL_ENV

ROOT_LOGGER = "android_toolbox"

_FORMAT = "%(log_color)s[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_COLORS = {
    'DEBUG':    'cyan',
    'INFO':     'green',
    'WARNING':  'yellow',
    'ERROR':    'red',
    'CRITICAL': 'bold_red',
}


def configure_logging(level=None) -> logging.Logger:
    """
    Install a single colored stderr handler on the project logger.

    Args:
        level: Level name or number. Defaults to $ANDROID_TOOLBOX_LOG_LEVEL, then INFO.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    # Reconfiguring replaces the handler instead of stacking another
    while logger.handlers:
        logger.handlers.pop()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredFormatter(_FORMAT, datefmt=_DATEFMT, log_colors=_COLORS))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the project logger, e.g. get_logger(__name__)."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
