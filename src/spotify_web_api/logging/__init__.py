"""Structured logging: JSON formatter and setup."""

from spotify_web_api.logging.formatter import JSONLogFormatter
from spotify_web_api.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "configure_logging"]
