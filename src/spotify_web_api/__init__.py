"""Async client for the Spotify Web API."""

from spotify_web_api.client import SpotifyWebApi
from spotify_web_api.exceptions import (
    SpotifyApiError,
    SpotifyClientError,
    SpotifyTransportError,
)
from spotify_web_api.models import TunableTrackAttributes
from spotify_web_api.settings import ClientSettings, get_settings

__all__ = [
    "ClientSettings",
    "SpotifyApiError",
    "SpotifyClientError",
    "SpotifyTransportError",
    "SpotifyWebApi",
    "TunableTrackAttributes",
    "get_settings",
]
