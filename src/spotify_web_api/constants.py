"""Spotify Web API base URL and request defaults."""

# Spotify Web API base
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

# Paging defaults
DEFAULT_LIMIT = 20
DEFAULT_OFFSET = 0

DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

# Endpoint defaults
DEFAULT_INCLUDE_GROUPS = ("single", "appears_on")
DEFAULT_SEARCH_TYPES = ("track", "artist")
DEFAULT_TIME_RANGE = "medium_term"

# Allowed values for enumerated arguments
REPEAT_STATES = frozenset({"track", "context", "off"})
TOP_ITEM_TYPES = frozenset({"artists", "tracks"})
FOLLOW_TYPES = frozenset({"artist", "user"})
TIME_RANGES = frozenset({"long_term", "medium_term", "short_term"})

# Service name used in structured log output
SERVICE_NAME = "spotify-web-api"
