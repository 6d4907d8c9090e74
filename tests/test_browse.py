"""Tests for the Browse endpoints."""

from datetime import datetime

import httpx
import pytest
import respx
from pydantic import ValidationError

from spotify_web_api.client import SpotifyWebApi
from spotify_web_api.constants import SPOTIFY_API_BASE as API
from spotify_web_api.models import TunableTrackAttributes


def _params(route: respx.Route) -> dict[str, str]:
    return dict(route.calls.last.request.url.params)


@respx.mock
async def test_get_categories_defaults(client: SpotifyWebApi) -> None:
    """Omitted limit and offset fall back to 20 and 0; unset filters are not sent."""
    route = respx.get(f"{API}/browse/categories").mock(
        return_value=httpx.Response(200, json={"categories": {"items": []}})
    )

    result = await client.get_categories()

    assert result == {"categories": {"items": []}}
    assert _params(route) == {"limit": "20", "offset": "0"}


@respx.mock
async def test_get_categories_all_params(client: SpotifyWebApi) -> None:
    """country, locale, limit and offset are passed through."""
    route = respx.get(f"{API}/browse/categories").mock(return_value=httpx.Response(200, json={}))

    await client.get_categories("SE", "sv_SE", 10, 5)

    assert _params(route) == {"country": "SE", "locale": "sv_SE", "limit": "10", "offset": "5"}


@respx.mock
async def test_get_category(client: SpotifyWebApi) -> None:
    """Category id is interpolated into the path."""
    route = respx.get(f"{API}/browse/categories/dinner").mock(
        return_value=httpx.Response(200, json={"id": "dinner"})
    )

    result = await client.get_category("dinner", "US")

    assert result == {"id": "dinner"}
    assert _params(route) == {"country": "US"}


@respx.mock
async def test_get_category_playlists(client: SpotifyWebApi) -> None:
    """Category playlists use the nested path and paging defaults."""
    route = respx.get(f"{API}/browse/categories/party/playlists").mock(return_value=httpx.Response(200, json={}))

    await client.get_category_playlists("party", "GB")

    assert _params(route) == {"country": "GB", "limit": "20", "offset": "0"}


@respx.mock
async def test_get_recommendations_seeds_are_comma_joined(client: SpotifyWebApi) -> None:
    """Seed lists serialize to comma-separated values."""
    route = respx.get(f"{API}/recommendations").mock(return_value=httpx.Response(200, json={"tracks": []}))

    await client.get_recommendations(["a", "b"], ["rock"], ["t1", "t2", "t3"], 5, "US")

    assert _params(route) == {
        "seed_artists": "a,b",
        "seed_genres": "rock",
        "seed_tracks": "t1,t2,t3",
        "limit": "5",
        "market": "US",
    }


@respx.mock
async def test_get_recommendations_flattens_bounds(client: SpotifyWebApi) -> None:
    """min_, max_ and target_ mappings become prefixed query keys."""
    route = respx.get(f"{API}/recommendations").mock(return_value=httpx.Response(200, json={}))

    await client.get_recommendations(
        seed_genres=["jazz"],
        min_={"popularity": 10},
        max_={"energy": 0.8, "tempo": 140},
        target_=TunableTrackAttributes(danceability=0.5),
    )

    assert _params(route) == {
        "seed_genres": "jazz",
        "limit": "20",
        "min_popularity": "10",
        "max_energy": "0.8",
        "max_tempo": "140",
        "target_danceability": "0.5",
    }


@respx.mock
async def test_get_recommendations_keeps_zero_bounds(client: SpotifyWebApi) -> None:
    """A bound of 0 is a real value and is sent."""
    route = respx.get(f"{API}/recommendations").mock(return_value=httpx.Response(200, json={}))

    await client.get_recommendations(seed_artists="a", min_={"mode": 0})

    assert _params(route)["min_mode"] == "0"


async def test_get_recommendations_rejects_unknown_attribute(client: SpotifyWebApi) -> None:
    """Unknown tunable attributes fail before any request is made."""
    with respx.mock(assert_all_called=False) as mock:
        route = mock.get(f"{API}/recommendations")
        with pytest.raises(ValidationError):
            await client.get_recommendations(seed_genres=["pop"], min_={"loudnesss": -5})
        assert not route.called


@respx.mock
async def test_get_recommendation_genres(client: SpotifyWebApi) -> None:
    """Available genre seeds take no parameters."""
    route = respx.get(f"{API}/recommendations/available-genre-seeds").mock(
        return_value=httpx.Response(200, json={"genres": ["acoustic", "afrobeat"]})
    )

    result = await client.get_recommendation_genres()

    assert result["genres"] == ["acoustic", "afrobeat"]
    assert _params(route) == {}


@respx.mock
async def test_get_new_releases(client: SpotifyWebApi) -> None:
    """New releases pass country and paging."""
    route = respx.get(f"{API}/browse/new-releases").mock(return_value=httpx.Response(200, json={}))

    await client.get_new_releases("SE", offset=40)

    assert _params(route) == {"country": "SE", "limit": "20", "offset": "40"}


@respx.mock
async def test_get_featured_playlists_formats_datetime(client: SpotifyWebApi) -> None:
    """A datetime timestamp is sent as ISO 8601 without microseconds."""
    route = respx.get(f"{API}/browse/featured-playlists").mock(return_value=httpx.Response(200, json={}))

    await client.get_featured_playlists("US", "en_US", datetime(2014, 10, 23, 9, 0, 0, 123456))

    assert _params(route) == {
        "country": "US",
        "locale": "en_US",
        "timestamp": "2014-10-23T09:00:00",
        "limit": "20",
        "offset": "0",
    }


@respx.mock
async def test_get_featured_playlists_string_timestamp(client: SpotifyWebApi) -> None:
    """A string timestamp is passed through as given."""
    route = respx.get(f"{API}/browse/featured-playlists").mock(return_value=httpx.Response(200, json={}))

    await client.get_featured_playlists(timestamp="2014-10-23T09:00:00")

    assert _params(route)["timestamp"] == "2014-10-23T09:00:00"
