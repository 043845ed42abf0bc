"""Facade bundling the Routes, Geocoding and Roads APIs behind one key."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import requests

from ..config import GOOGLE_MAPS_API_KEY, MAPS_MAX_RETRIES, REQUEST_TIMEOUT
from ..models import GeoPoint, Location
from .geocoding import Coordinate, GeocodingAPI
from .resources import MapsResourceAPI
from .routes import ROUTE_DETAIL_FIELD_MASK, RoutesAPI
from .speed_limits import SpeedLimitsAPI


class MapsClient:
    """Blocking Google Maps Platform client.

    The API key is opaque: it is forwarded in headers or query parameters
    and never inspected. Async callers run these methods through
    ``asyncio.to_thread``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        max_retries: int = MAPS_MAX_RETRIES,
    ) -> None:
        self.api_key = api_key if api_key is not None else GOOGLE_MAPS_API_KEY
        self._resources = MapsResourceAPI(
            session=session, timeout=timeout, max_retries=max_retries
        )
        self._routes = RoutesAPI(self.api_key, self._resources)
        self._geocoding = GeocodingAPI(self.api_key, self._resources)
        self._speed_limits = SpeedLimitsAPI(self.api_key, self._resources)

    def compute_route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        intermediates: Sequence[Coordinate] = (),
        *,
        field_mask: str = ROUTE_DETAIL_FIELD_MASK,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        return self._routes.compute_route(
            origin, destination, intermediates, field_mask=field_mask, timeout=timeout
        )

    def leg_durations(
        self,
        origin: Coordinate,
        destination: Coordinate,
        intermediates: Sequence[Coordinate],
        *,
        timeout: Optional[float] = None,
    ) -> List[int]:
        return self._routes.leg_durations(
            origin, destination, intermediates, timeout=timeout
        )

    def reverse_geocode(
        self, point: Coordinate, *, timeout: Optional[float] = None
    ) -> Optional[str]:
        return self._geocoding.reverse_geocode(point, timeout=timeout)

    def label_stop(
        self, index: int, point: Coordinate, *, timeout: Optional[float] = None
    ) -> Location:
        return self._geocoding.label_for(index, point, timeout=timeout)

    def speed_limits(
        self, points: Sequence[GeoPoint], *, timeout: Optional[float] = None
    ) -> List[float]:
        return self._speed_limits.speed_limits_for_path(points, timeout=timeout)
