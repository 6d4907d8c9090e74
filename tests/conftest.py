"""Shared fixtures for Spotify Web API client tests."""

import pytest

from spotify_web_api.client import SpotifyWebApi
from spotify_web_api.settings import get_settings


@pytest.fixture
def client() -> SpotifyWebApi:
    """Client bearing a fixed test token."""
    return SpotifyWebApi("test-token")


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()
