"""Structured logging configuration for applications using the client."""

import logging
import sys

from spotify_web_api.constants import SERVICE_NAME
from spotify_web_api.logging.formatter import JSONLogFormatter
from spotify_web_api.settings import get_settings


def configure_logging(level: str | int | None = None, service: str = SERVICE_NAME) -> None:
    """Set up structured JSON logging on the root logger.

    ``level`` defaults to ``LOG_LEVEL`` from the client settings.
    """
    if level is None:
        level = get_settings().LOG_LEVEL
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    root.addHandler(handler)
