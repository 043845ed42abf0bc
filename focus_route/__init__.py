"""Focus route planner package."""

from .main import main
from .models import GeoPoint, Location, RouteData, Stopover
from .errors import DecodeError, FocusRouteError, OracleError, DataShapeError

__all__ = [
    "main",
    "GeoPoint",
    "Location",
    "RouteData",
    "Stopover",
    "DecodeError",
    "FocusRouteError",
    "OracleError",
    "DataShapeError",
]
