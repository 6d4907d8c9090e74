"""Client settings loaded from environment variables."""

import functools

from pydantic_settings import BaseSettings

from spotify_web_api.constants import DEFAULT_REQUEST_TIMEOUT, SPOTIFY_API_BASE


class ClientSettings(BaseSettings):
    """Spotify Web API client configuration."""

    SPOTIFY_ACCESS_TOKEN: str = ""
    SPOTIFY_API_BASE: str = SPOTIFY_API_BASE
    SPOTIFY_REQUEST_TIMEOUT: float = DEFAULT_REQUEST_TIMEOUT  # seconds

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": ""}


@functools.lru_cache(maxsize=1)
def get_settings() -> ClientSettings:
    """Return cached client settings singleton."""
    return ClientSettings()
