"""Logging setup for the game server."""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def setup_logging(level: int | str = "INFO", format_string: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Configure the root logger with a single console handler.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO')
        format_string: Log record format

    Returns:
        The configured root logger
    """
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)

    # uvicorn installs its own access logger
    logging.getLogger("uvicorn.access").setLevel("WARNING")

    return logger
