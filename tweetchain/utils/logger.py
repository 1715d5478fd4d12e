"""
Logging helpers shared by the service, the routers and the CLI.
"""

import logging
import sys

from tweetchain.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """
    Get a logger with a single stream handler attached.

    Args:
        name: Logger name, usually ``__name__``
        level: Level name; defaults to ``settings.LOG_LEVEL``

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Repeated imports must not stack handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
