"""Central configuration for the focus route planner.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Secrets are read from environment variables (optionally
via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Google Maps Platform settings
# ---------------------------------------------------------------------------
ROUTES_API_URL = "https://routes.googleapis.com/directions/v2:computeRoutes"
GEOCODE_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"
SPEED_LIMITS_API_URL = "https://roads.googleapis.com/v1/speedLimits"

# API key pulled from the environment. Do not hardcode secrets.
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")

# Request body defaults shared by every route query.
ROUTES_TRAVEL_MODE = "DRIVE"
ROUTES_ROUTING_PREFERENCE = "TRAFFIC_UNAWARE"
ROUTES_LANGUAGE_CODE = os.getenv("ROUTES_LANGUAGE_CODE", "en-US")
ROUTES_UNITS = "METRIC"


# ---------------------------------------------------------------------------
# HTTP behaviour
# ---------------------------------------------------------------------------
# HTTP session pool sizes.
HTTP_POOL_CONNECTIONS = 10
HTTP_POOL_MAXSIZE = 10

# Request timeout in seconds (callers may override per call).
REQUEST_TIMEOUT = _env_float("FOCUS_ROUTE_REQUEST_TIMEOUT", 15.0)

# MAPS_MAX_RETRIES covers network failures, 429s and 5xx responses.
MAPS_MAX_RETRIES = _env_int("MAPS_MAX_RETRIES", 3)
# MAPS_BACKOFF_MAX_SECONDS caps the exponential backoff per attempt.
MAPS_BACKOFF_MAX_SECONDS = _env_float("MAPS_BACKOFF_MAX_SECONDS", 4.0)

# Reverse geocoding results rarely change; keep them for a day.
GEOCODE_CACHE_SIZE = _env_int("GEOCODE_CACHE_SIZE", 512)
GEOCODE_CACHE_TTL_SECONDS = _env_int("GEOCODE_CACHE_TTL_SECONDS", 24 * 3600)


# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------
# A focus segment aims for 25 minutes and is considered ideal between 20 and
# 30 minutes of driving.
IDEAL_SEGMENT_SECONDS = 25 * 60
MIN_IDEAL_SEGMENT_SECONDS = 20 * 60
MAX_IDEAL_SEGMENT_SECONDS = 30 * 60

# Segments between 15 and 35 minutes are still acceptable.
MIN_ACCEPTABLE_SEGMENT_SECONDS = 15 * 60
MAX_ACCEPTABLE_SEGMENT_SECONDS = 35 * 60

# Routes API supports up to 25 waypoints including origin/destination.
MAX_AUTO_STOPOVERS = 23

# Route queries issued by the refinement loop before settling on a split.
MAX_REFINEMENT_ATTEMPTS = 4

# Average surface-road driving speed (~30 mph) used when the router provides
# no timing for a step, and as the default segment speed.
FALLBACK_SPEED_MPS = 13.4

# Helper hints never show more than this many positions.
MAX_HELPER_POSITIONS = 3


# ---------------------------------------------------------------------------
# Speed limits (optional)
# ---------------------------------------------------------------------------
# Speed-limit lookups require a Roads API entitlement; off unless opted in.
SPEED_LIMITS_ENABLED = _env_bool("FOCUS_ROUTE_SPEED_LIMITS_ENABLED", False)

# Roads API accepts at most 100 path points; keep headroom.
MAX_SPEED_LIMIT_POINTS_PER_REQUEST = 90

MPS_PER_KPH = 1000 / 3600
MPS_PER_MPH = 1609.34 / 3600


# ---------------------------------------------------------------------------
# Animation and journey timing
# ---------------------------------------------------------------------------
# Progress updates arrive once per second; each eased transition spans that
# interval.
ANIMATION_TRANSITION_SECONDS = 1.0

# Interval between display samples during a transition (~60 fps).
ANIMATION_FRAME_INTERVAL_SECONDS = _env_float(
    "ANIMATION_FRAME_INTERVAL_SECONDS", 1 / 60
)

# Forward offset (fraction of progress) used to derive the marker heading.
HEADING_LOOKAHEAD_PROGRESS = 0.001

# Camera settings applied while the map follows the marker.
FOLLOW_ZOOM = 17
FOLLOW_TILT = 60

# A stopover triggers a rest when progress lands within this window after it.
STOPOVER_TRIGGER_TOLERANCE = 0.005

# Rest duration applied when a stopover has none configured.
DEFAULT_REST_MINUTES = 5
