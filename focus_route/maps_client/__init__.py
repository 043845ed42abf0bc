"""Google Maps Platform client components (session, routes, geocoding, roads)."""

from .client import MapsClient  # noqa: F401
from .geocoding import clear_address_cache, fallback_label  # noqa: F401
from .resources import MapsResourceAPI  # noqa: F401
from .routes import (  # noqa: F401
    LEG_DURATIONS_FIELD_MASK,
    ROUTE_DETAIL_FIELD_MASK,
    build_route_request,
    parse_legs,
)
from .session import create_default_session, get_default_session  # noqa: F401
from .speed_limits import convert_speed_limit_to_mps  # noqa: F401
