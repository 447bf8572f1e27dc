"""Loguru sink setup shared by the CLI and the HTTP app."""

import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Route voxroute logs to stderr at *level*."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )
    logger.enable("voxroute")
