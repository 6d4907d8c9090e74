"""Spotify Web API client exceptions."""

from typing import Any


class SpotifyClientError(Exception):
    """Base exception for Spotify client errors."""


class SpotifyApiError(SpotifyClientError):
    """Spotify answered with a non-2xx status.

    ``error`` is the ``error`` object from the response envelope exactly as the
    API sent it, e.g. ``{"status": 404, "message": "not found"}``.
    """

    def __init__(self, status_code: int, error: dict[str, Any]) -> None:
        self.status_code = status_code
        self.error = error
        super().__init__(f"Spotify API error: HTTP {status_code}" + (f": {self.message}" if self.message else ""))

    @property
    def status(self) -> int:
        status = self.error.get("status")
        return status if isinstance(status, int) else self.status_code

    @property
    def message(self) -> str:
        return str(self.error.get("message") or "")

    @property
    def reason(self) -> str | None:
        return self.error.get("reason")


class SpotifyTransportError(SpotifyClientError):
    """The request never produced a usable response (network failure or undecodable body)."""
