"""Utility functions for pg_search_scope."""

import sys

from loguru import logger


def setup_logging(log_level: str = "INFO") -> None:
    """Send loguru output to stderr at the given level.

    The library itself only emits debug records and never configures sinks;
    applications and the CLI call this once at startup.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name} - {message}",
        colorize=True,
    )
