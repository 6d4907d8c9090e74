"""Query-parameter shaping shared by the endpoint methods."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from spotify_web_api.models import TunableTrackAttributes

BOUND_PREFIXES = ("min_", "max_", "target_")


def join_values(values: str | Iterable[Any] | None) -> str | None:
    """Join a list of values into Spotify's comma-separated form.

    A bare string is passed through untouched, so ``"a,b"`` and ``["a", "b"]``
    produce the same query value. ``None`` entries are skipped; every other
    value, including ``0`` and ``False``, is kept. An empty result means the
    parameter is omitted.
    """
    if values is None:
        return None
    if isinstance(values, str):
        return values or None
    joined = ",".join(_query_value(value) for value in values if value is not None)
    return joined or None


def as_list(values: str | Iterable[Any] | None) -> list[Any] | None:
    """Turn a JSON-body list argument into a list, keeping a bare string as one item."""
    if values is None:
        return None
    if isinstance(values, str):
        return [values]
    return list(values)


def _query_value(value: Any) -> str:
    # Booleans are lower-cased the way httpx encodes single query values.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_bounds(
    prefix: str,
    bounds: TunableTrackAttributes | Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Flatten recommendation bounds into ``<prefix><attribute>`` query keys.

    Raises:
        pydantic.ValidationError: ``bounds`` names an attribute Spotify does not tune on.
    """
    if prefix not in BOUND_PREFIXES:
        raise ValueError(f"Unknown bound prefix {prefix!r}")
    if bounds is None:
        return {}
    if not isinstance(bounds, TunableTrackAttributes):
        bounds = TunableTrackAttributes.model_validate(dict(bounds))
    return {f"{prefix}{key}": value for key, value in bounds.model_dump(exclude_none=True).items()}


def format_timestamp(timestamp: datetime | str | None) -> str | None:
    """Render a ``timestamp`` parameter as ISO 8601 without fractional seconds."""
    if timestamp is None or isinstance(timestamp, str):
        return timestamp
    return timestamp.replace(microsecond=0).isoformat()


def drop_none(values: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Return a copy of ``values`` without ``None`` entries (``None`` if nothing is left)."""
    if values is None:
        return None
    cleaned = {key: value for key, value in values.items() if value is not None}
    return cleaned or None


def require_choice(name: str, value: str, choices: Iterable[str]) -> str:
    """Validate an enumerated argument before it is sent."""
    allowed = sorted(choices)
    if value not in allowed:
        raise ValueError(f"{name} must be one of {', '.join(allowed)}; got {value!r}")
    return value
