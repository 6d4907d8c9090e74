"""Pydantic models for request options.

Response payloads and error envelopes are returned as decoded JSON; only the
shapes this library itself has to validate are modelled here.
"""

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------


class TunableTrackAttributes(BaseModel):
    """Track attributes accepted as ``min_``, ``max_`` and ``target_`` bounds.

    Field order is the order the flattened query keys are emitted in.
    """

    model_config = ConfigDict(extra="forbid")

    acousticness: int | float | None = None
    danceability: int | float | None = None
    duration_ms: int | None = None
    energy: int | float | None = None
    instrumentalness: int | float | None = None
    key: int | None = None
    liveness: int | float | None = None
    loudness: int | float | None = None
    mode: int | None = None
    popularity: int | None = None
    speechiness: int | float | None = None
    tempo: int | float | None = None
    time_signature: int | None = None
    valence: int | float | None = None
