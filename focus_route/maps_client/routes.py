"""Routes API (computeRoutes) request building and response parsing."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ..config import (
    MAX_AUTO_STOPOVERS,
    ROUTES_API_URL,
    ROUTES_LANGUAGE_CODE,
    ROUTES_ROUTING_PREFERENCE,
    ROUTES_TRAVEL_MODE,
    ROUTES_UNITS,
)
from ..errors import DataShapeError
from ..models import GeoPoint, Location, RouteLeg
from ..utils import parse_duration_seconds
from .resources import MapsResourceAPI

LOGGER = logging.getLogger(__name__)

Coordinate = Union[GeoPoint, Location]
JSONObj = Dict[str, Any]

# Full breakdown needed to build timelines and speed segments.
ROUTE_DETAIL_FIELD_MASK = ",".join(
    [
        "routes.duration",
        "routes.distanceMeters",
        "routes.polyline.encodedPolyline",
        "routes.legs.duration",
        "routes.legs.distanceMeters",
        "routes.legs.startLocation",
        "routes.legs.endLocation",
        "routes.legs.steps.distanceMeters",
        "routes.legs.steps.staticDuration",
        "routes.legs.steps.polyline.encodedPolyline",
    ]
)

# Refinement attempts only need the per-leg durations.
LEG_DURATIONS_FIELD_MASK = "routes.legs.duration"


def _waypoint(point: Coordinate) -> JSONObj:
    return {
        "location": {
            "latLng": {
                "latitude": point.lat,
                "longitude": point.lng,
            }
        }
    }


def build_route_request(
    origin: Coordinate,
    destination: Coordinate,
    intermediates: Sequence[Coordinate] = (),
) -> JSONObj:
    """Build the computeRoutes request body.

    Raises:
        ValueError: If more intermediates are supplied than the API accepts.
    """

    if len(intermediates) > MAX_AUTO_STOPOVERS:
        raise ValueError(
            f"At most {MAX_AUTO_STOPOVERS} intermediate waypoints are supported"
        )
    body: JSONObj = {
        "origin": _waypoint(origin),
        "destination": _waypoint(destination),
        "travelMode": ROUTES_TRAVEL_MODE,
        "routingPreference": ROUTES_ROUTING_PREFERENCE,
        "computeAlternativeRoutes": False,
        "languageCode": ROUTES_LANGUAGE_CODE,
        "units": ROUTES_UNITS,
    }
    if intermediates:
        body["intermediates"] = [_waypoint(p) for p in intermediates]
    return body


def first_route(payload: Any) -> JSONObj:
    """Return the first route of a computeRoutes response."""

    routes = payload.get("routes") if isinstance(payload, dict) else None
    if not routes or not isinstance(routes[0], dict):
        raise DataShapeError("computeRoutes response contained no routes")
    return routes[0]


def _lat_lng(raw: Optional[JSONObj]) -> GeoPoint:
    lat_lng = ((raw or {}).get("latLng")) or {}
    return GeoPoint(
        float(lat_lng.get("latitude") or 0.0),
        float(lat_lng.get("longitude") or 0.0),
    )


def parse_legs(route: JSONObj) -> List[RouteLeg]:
    """Convert raw legs into :class:`RouteLeg` values."""

    legs: List[RouteLeg] = []
    for leg in route.get("legs") or []:
        legs.append(
            RouteLeg(
                duration=parse_duration_seconds(leg.get("duration")),
                distance=float(leg.get("distanceMeters") or 0),
                start_location=_lat_lng(leg.get("startLocation")),
                end_location=_lat_lng(leg.get("endLocation")),
            )
        )
    return legs


class RoutesAPI:
    """Thin wrapper around computeRoutes for a single API key."""

    def __init__(self, api_key: str, resources: MapsResourceAPI) -> None:
        self._api_key = api_key
        self._resources = resources

    def compute_route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        intermediates: Sequence[Coordinate] = (),
        *,
        field_mask: str = ROUTE_DETAIL_FIELD_MASK,
        timeout: Optional[float] = None,
    ) -> JSONObj:
        """Return the first route for the given waypoints.

        Raises:
            OracleError: On HTTP or transport failures.
            DataShapeError: If the response carries no routes.
        """

        body = build_route_request(origin, destination, intermediates)
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self._api_key,
            "X-Goog-FieldMask": field_mask,
        }
        payload = self._resources.request_json(
            "POST",
            ROUTES_API_URL,
            "computeRoutes",
            json_body=body,
            headers=headers,
            timeout=timeout,
        )
        return first_route(payload)

    def leg_durations(
        self,
        origin: Coordinate,
        destination: Coordinate,
        intermediates: Sequence[Coordinate],
        *,
        timeout: Optional[float] = None,
    ) -> List[int]:
        """Return the actual duration (seconds) of each leg for these waypoints."""

        route = self.compute_route(
            origin,
            destination,
            intermediates,
            field_mask=LEG_DURATIONS_FIELD_MASK,
            timeout=timeout,
        )
        legs = route.get("legs") or []
        if not legs:
            raise DataShapeError("computeRoutes response contained no legs")
        durations = [parse_duration_seconds((leg or {}).get("duration")) for leg in legs]
        LOGGER.debug("Leg durations for %d stops: %s", len(intermediates), durations)
        return durations
