"""Spotify Web API async client: one method per endpoint."""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import httpx

from spotify_web_api.constants import (
    DEFAULT_INCLUDE_GROUPS,
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SEARCH_TYPES,
    DEFAULT_TIME_RANGE,
    FOLLOW_TYPES,
    REPEAT_STATES,
    SPOTIFY_API_BASE,
    TIME_RANGES,
    TOP_ITEM_TYPES,
)
from spotify_web_api.exceptions import SpotifyApiError, SpotifyTransportError
from spotify_web_api.models import TunableTrackAttributes
from spotify_web_api.params import (
    as_list,
    drop_none,
    flatten_bounds,
    format_timestamp,
    join_values,
    require_choice,
)
from spotify_web_api.settings import ClientSettings, get_settings

logger = logging.getLogger(__name__)

Bounds = TunableTrackAttributes | Mapping[str, Any] | None
Values = str | Iterable[Any] | None


class SpotifyWebApi:
    """Async Spotify Web API client.

    Holds one access token for its lifetime and sends every call as a single
    independent request. Nothing is retried or cached: a non-2xx response is
    raised as ``SpotifyApiError`` carrying Spotify's ``error`` object, a network
    failure as ``SpotifyTransportError``.

    Pass ``http_client`` to reuse a connection pool across calls; the caller
    stays responsible for closing it. Otherwise each call opens and closes its
    own ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        access_token: str | None = None,
        *,
        base_url: str = SPOTIFY_API_BASE,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._access_token = access_token or None
        self._base_url = base_url.rstrip("/")
        self._request_timeout = request_timeout
        self._http_client = http_client
        if self._access_token is None:
            logger.warning("No Spotify access token provided; requests will be rejected with 401")

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None, **kwargs: Any) -> "SpotifyWebApi":
        """Build a client from ``ClientSettings`` (environment by default)."""
        settings = settings or get_settings()
        return cls(
            settings.SPOTIFY_ACCESS_TOKEN,
            base_url=settings.SPOTIFY_API_BASE,
            request_timeout=settings.SPOTIFY_REQUEST_TIMEOUT,
            **kwargs,
        )

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def base_url(self) -> str:
        return self._base_url

    # -------------------------------------------------------------------
    # Request dispatch
    # -------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        ``None``-valued params and body keys are dropped. Returns ``None`` when
        the response has no body (204 from most player commands).
        """
        url = f"{self._base_url}{path}"
        query = drop_none(params)
        body = drop_none(json_body)
        headers = {"Authorization": f"Bearer {self._access_token}"}
        logger.debug("Spotify %s %s", method, path, extra={"method": method, "path": path})

        try:
            if self._http_client is not None:
                response = await self._http_client.request(method, url, params=query, json=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._request_timeout) as client:
                    response = await client.request(method, url, params=query, json=body, headers=headers)
        except httpx.TransportError as exc:
            logger.warning(
                "Spotify %s %s failed: %s", method, path, exc, extra={"method": method, "path": path}
            )
            raise SpotifyTransportError(f"Spotify request {method} {path} failed: {exc}") from exc

        if response.is_success:
            return self._decode(response)

        error = self._extract_error(response)
        logger.warning(
            "Spotify %s %s returned HTTP %d: %s",
            method,
            path,
            response.status_code,
            error.get("message", ""),
            extra={"method": method, "path": path, "status_code": response.status_code},
        )
        raise SpotifyApiError(status_code=response.status_code, error=error)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise SpotifyTransportError(
                f"Spotify returned an undecodable body (HTTP {response.status_code})"
            ) from exc

    @staticmethod
    def _extract_error(response: httpx.Response) -> dict[str, Any]:
        """Pull the ``error`` object out of a failed response.

        Any ``error`` object is returned exactly as sent. Authentication errors
        (``{"error": "invalid_client", "error_description": ...}``) and bodies
        without an envelope are reshaped into ``{"status", "message"}``.
        """
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            if isinstance(body.get("error"), dict):
                return body["error"]
            if isinstance(body.get("error"), str):
                return {
                    "status": response.status_code,
                    "message": body.get("error_description") or body["error"],
                }

        return {
            "status": response.status_code,
            "message": response.text[:200] if response.text else response.reason_phrase,
        }

    # -------------------------------------------------------------------
    # Browse
    # -------------------------------------------------------------------

    async def get_categories(
        self,
        country: str | None = None,
        locale: str | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> Any:
        """GET /browse/categories."""
        return await self._request(
            "GET",
            "/browse/categories",
            params={"country": country, "locale": locale, "limit": limit, "offset": offset},
        )

    async def get_category(self, category_id: str, country: str | None = None, locale: str | None = None) -> Any:
        """GET /browse/categories/{id}."""
        return await self._request(
            "GET",
            f"/browse/categories/{category_id}",
            params={"country": country, "locale": locale},
        )

    async def get_category_playlists(
        self,
        category_id: str,
        country: str | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> Any:
        """GET /browse/categories/{id}/playlists."""
        return await self._request(
            "GET",
            f"/browse/categories/{category_id}/playlists",
            params={"country": country, "limit": limit, "offset": offset},
        )

    async def get_recommendations(
        self,
        seed_artists: Values = None,
        seed_genres: Values = None,
        seed_tracks: Values = None,
        limit: int = DEFAULT_LIMIT,
        market: str | None = None,
        min_: Bounds = None,
        max_: Bounds = None,
        target_: Bounds = None,
    ) -> Any:
        """GET /recommendations.

        ``min_``, ``max_`` and ``target_`` map tunable attribute names to
        values, e.g. ``min_={"popularity": 10}`` sends ``min_popularity=10``.
        Unknown attribute names raise ``pydantic.ValidationError`` before the
        request is made.
        """
        params: dict[str, Any] = {
            "seed_artists": join_values(seed_artists),
            "seed_genres": join_values(seed_genres),
            "seed_tracks": join_values(seed_tracks),
            "limit": limit,
            "market": market,
        }
        params.update(flatten_bounds("min_", min_))
        params.update(flatten_bounds("max_", max_))
        params.update(flatten_bounds("target_", target_))
        return await self._request("GET", "/recommendations", params=params)

    async def get_recommendation_genres(self) -> Any:
        """GET /recommendations/available-genre-seeds."""
        return await self._request("GET", "/recommendations/available-genre-seeds")

    async def get_new_releases(
        self,
        country: str | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> Any:
        """GET /browse/new-releases."""
        return await self._request(
            "GET",
            "/browse/new-releases",
            params={"country": country, "limit": limit, "offset": offset},
        )

    async def get_featured_playlists(
        self,
        country: str | None = None,
        locale: str | None = None,
        timestamp: datetime | str | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> Any:
        """GET /browse/featured-playlists."""
        return await self._request(
            "GET",
            "/browse/featured-playlists",
            params={
                "country": country,
                "locale": locale,
                "timestamp": format_timestamp(timestamp),
                "limit": limit,
                "offset": offset,
            },
        )

    # -------------------------------------------------------------------
    # Artists
    # -------------------------------------------------------------------

    async def get_artists(self, ids: Values = None) -> Any:
        """GET /artists?ids=..."""
        return await self._request("GET", "/artists", params={"ids": join_values(ids)})

    async def get_artist(self, artist_id: str) -> Any:
        """GET /artists/{id}."""
        return await self._request("GET", f"/artists/{artist_id}")

    async def get_artist_albums(
        self,
        artist_id: str,
        include_groups: Values = DEFAULT_INCLUDE_GROUPS,
        market: str | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> Any:
        """GET /artists/{id}/albums."""
        return await self._request(
            "GET",
            f"/artists/{artist_id}/albums",
            params={
                "include_groups": join_values(include_groups),
                "market": market,
                "limit": limit,
                "offset": offset,
            },
        )

    async def get_artist_top_tracks(self, artist_id: str, market: str | None = None) -> Any:
        """GET /artists/{id}/top-tracks."""
        return await self._request("GET", f"/artists/{artist_id}/top-tracks", params={"market": market})

    async def get_related_artists(self, artist_id: str) -> Any:
        """GET /artists/{id}/related-artists."""
        return await self._request("GET", f"/artists/{artist_id}/related-artists")

    # -------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------

    async def search_item(
        self,
        q: str,
        search_type: Values = DEFAULT_SEARCH_TYPES,
        market: str | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
        include_external: str | None = None,
    ) -> Any:
        """GET /search.

        ``q`` is sent as given; httpx percent-encodes it once in the query string.
        """
        return await self._request(
            "GET",
            "/search",
            params={
                "q": q,
                "type": join_values(search_type),
                "market": market,
                "limit": limit,
                "offset": offset,
                "include_external": include_external,
            },
        )

    # -------------------------------------------------------------------
    # Player
    # -------------------------------------------------------------------

    async def get_playback_state(self, market: str | None = None, additional_types: Values = None) -> Any:
        """GET /me/player. ``None`` when nothing is playing."""
        return await self._request(
            "GET",
            "/me/player",
            params={"market": market, "additional_types": join_values(additional_types)},
        )

    async def transfer_playback(self, device_ids: str | Iterable[str], play: bool | None = None) -> Any:
        """PUT /me/player."""
        return await self._request(
            "PUT",
            "/me/player",
            json_body={"device_ids": as_list(device_ids), "play": play},
        )

    async def get_available_devices(self) -> Any:
        """GET /me/player/devices."""
        return await self._request("GET", "/me/player/devices")

    async def get_currently_playing(self, market: str | None = None, additional_types: Values = None) -> Any:
        """GET /me/player/currently-playing."""
        return await self._request(
            "GET",
            "/me/player/currently-playing",
            params={"market": market, "additional_types": join_values(additional_types)},
        )

    async def start_playback(
        self,
        device_id: str | None = None,
        context_uri: str | None = None,
        uris: str | Iterable[str] | None = None,
        offset: Mapping[str, Any] | None = None,
        position_ms: int | None = None,
    ) -> Any:
        """PUT /me/player/play. Starts a new context or resumes current playback.

        ``offset`` is either ``{"position": 5}`` or ``{"uri": "spotify:track:..."}``.
        """
        return await self._request(
            "PUT",
            "/me/player/play",
            params={"device_id": device_id},
            json_body={
                "context_uri": context_uri,
                "uris": as_list(uris),
                "offset": dict(offset) if offset is not None else None,
                "position_ms": position_ms,
            },
        )

    async def pause_playback(self, device_id: str | None = None) -> Any:
        """PUT /me/player/pause."""
        return await self._request("PUT", "/me/player/pause", params={"device_id": device_id})

    async def skip_to_next(self, device_id: str | None = None) -> Any:
        """POST /me/player/next."""
        return await self._request("POST", "/me/player/next", params={"device_id": device_id})

    async def skip_to_previous(self, device_id: str | None = None) -> Any:
        """POST /me/player/previous."""
        return await self._request("POST", "/me/player/previous", params={"device_id": device_id})

    async def seek_to_position(self, position_ms: int, device_id: str | None = None) -> Any:
        """PUT /me/player/seek."""
        return await self._request(
            "PUT",
            "/me/player/seek",
            params={"position_ms": position_ms, "device_id": device_id},
        )

    async def set_repeat_mode(self, state: str, device_id: str | None = None) -> Any:
        """PUT /me/player/repeat. ``state`` is ``track``, ``context`` or ``off``."""
        require_choice("state", state, REPEAT_STATES)
        return await self._request(
            "PUT",
            "/me/player/repeat",
            params={"state": state, "device_id": device_id},
        )

    async def set_volume(self, volume_percent: int, device_id: str | None = None) -> Any:
        """PUT /me/player/volume."""
        return await self._request(
            "PUT",
            "/me/player/volume",
            params={"volume_percent": volume_percent, "device_id": device_id},
        )

    async def toggle_shuffle(self, state: bool, device_id: str | None = None) -> Any:
        """PUT /me/player/shuffle."""
        return await self._request(
            "PUT",
            "/me/player/shuffle",
            params={"state": state, "device_id": device_id},
        )

    async def get_recently_played(
        self,
        limit: int = DEFAULT_LIMIT,
        after: int | None = None,
        before: int | None = None,
    ) -> Any:
        """GET /me/player/recently-played. ``after``/``before`` are Unix ms cursors."""
        if after is not None and before is not None:
            raise ValueError("Only one of after or before may be given")
        return await self._request(
            "GET",
            "/me/player/recently-played",
            params={"limit": limit, "after": after, "before": before},
        )

    async def get_queue(self) -> Any:
        """GET /me/player/queue."""
        return await self._request("GET", "/me/player/queue")

    async def add_to_queue(self, uri: str, device_id: str | None = None) -> Any:
        """POST /me/player/queue."""
        return await self._request(
            "POST",
            "/me/player/queue",
            params={"uri": uri, "device_id": device_id},
        )

    # -------------------------------------------------------------------
    # User profile
    # -------------------------------------------------------------------

    async def get_current_user_profile(self) -> Any:
        """GET /me."""
        return await self._request("GET", "/me")

    async def get_user_top_items(
        self,
        item_type: str,
        time_range: str = DEFAULT_TIME_RANGE,
        limit: int = DEFAULT_LIMIT,
        offset: int = DEFAULT_OFFSET,
    ) -> Any:
        """GET /me/top/{type}. ``item_type`` is ``artists`` or ``tracks``."""
        require_choice("item_type", item_type, TOP_ITEM_TYPES)
        require_choice("time_range", time_range, TIME_RANGES)
        return await self._request(
            "GET",
            f"/me/top/{item_type}",
            params={"time_range": time_range, "limit": limit, "offset": offset},
        )

    async def get_user_profile(self, user_id: str) -> Any:
        """GET /users/{id}."""
        return await self._request("GET", f"/users/{user_id}")

    # -------------------------------------------------------------------
    # Follow
    # -------------------------------------------------------------------

    async def follow_playlist(self, playlist_id: str, public: bool = True) -> Any:
        """PUT /playlists/{id}/followers."""
        return await self._request(
            "PUT",
            f"/playlists/{playlist_id}/followers",
            json_body={"public": public},
        )

    async def unfollow_playlist(self, playlist_id: str) -> Any:
        """DELETE /playlists/{id}/followers."""
        return await self._request("DELETE", f"/playlists/{playlist_id}/followers")

    async def get_followed_artists(self, after: str | None = None, limit: int = DEFAULT_LIMIT) -> Any:
        """GET /me/following?type=artist. ``after`` is the last artist ID seen."""
        return await self._request(
            "GET",
            "/me/following",
            params={"type": "artist", "after": after, "limit": limit},
        )

    async def follow_artists_or_users(self, follow_type: str, ids: Values) -> Any:
        """PUT /me/following. ``follow_type`` is ``artist`` or ``user``."""
        require_choice("follow_type", follow_type, FOLLOW_TYPES)
        return await self._request(
            "PUT",
            "/me/following",
            params={"type": follow_type, "ids": join_values(ids)},
        )

    async def unfollow_artists_or_users(self, follow_type: str, ids: Values) -> Any:
        """DELETE /me/following."""
        require_choice("follow_type", follow_type, FOLLOW_TYPES)
        return await self._request(
            "DELETE",
            "/me/following",
            params={"type": follow_type, "ids": join_values(ids)},
        )

    async def check_following(self, follow_type: str, ids: Values) -> Any:
        """GET /me/following/contains. Returns one boolean per ID."""
        require_choice("follow_type", follow_type, FOLLOW_TYPES)
        return await self._request(
            "GET",
            "/me/following/contains",
            params={"type": follow_type, "ids": join_values(ids)},
        )

    async def check_users_follow_playlist(self, playlist_id: str, ids: Values) -> Any:
        """GET /playlists/{id}/followers/contains."""
        return await self._request(
            "GET",
            f"/playlists/{playlist_id}/followers/contains",
            params={"ids": join_values(ids)},
        )
