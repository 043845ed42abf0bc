"""Compute the immutable :class:`RouteData` snapshot that drives animation."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Callable, List, Optional, Sequence

from ..animation.speed_segments import (
    speed_segments_from_speed_limits,
    speed_segments_from_steps,
)
from ..config import MAX_AUTO_STOPOVERS, SPEED_LIMITS_ENABLED
from ..errors import DataShapeError, FocusRouteError
from ..geometry import cumulative_distances, decode_polyline, nearest_vertex_index
from ..maps_client import MapsClient, parse_legs
from ..models import GeoPoint, Location, RouteData, SpeedSegment, Stopover
from ..utils import parse_duration_seconds

LOGGER = logging.getLogger(__name__)

RouteListener = Callable[[Optional[RouteData]], None]


def _intermediates(stopovers: Sequence[Stopover]) -> List[Location]:
    located = [stop.location for stop in stopovers if not stop.location.is_unset]
    if len(located) > MAX_AUTO_STOPOVERS:
        LOGGER.warning(
            "Routes API accepts at most %s intermediates; dropping %s",
            MAX_AUTO_STOPOVERS,
            len(located) - MAX_AUTO_STOPOVERS,
        )
        located = located[:MAX_AUTO_STOPOVERS]
    return located


async def _speed_segments(
    client: MapsClient,
    route: dict,
    polyline: List[GeoPoint],
    distances: List[float],
    *,
    speed_limits_enabled: bool,
    timeout: Optional[float],
) -> List[SpeedSegment]:
    if speed_limits_enabled and len(polyline) > 1:
        try:
            samples = await asyncio.to_thread(
                client.speed_limits, polyline, timeout=timeout
            )
        except FocusRouteError as exc:
            LOGGER.warning("Speed limits unavailable, using step durations: %s", exc)
            samples = []
        segments = speed_segments_from_speed_limits(
            distances, samples, parse_duration_seconds(route.get("duration"))
        )
        if segments:
            return segments
    return speed_segments_from_steps(route.get("legs"))


async def compute_route_data(
    origin: Location,
    destination: Location,
    stopovers: Sequence[Stopover] = (),
    api_key: Optional[str] = None,
    *,
    client: Optional[MapsClient] = None,
    speed_limits_enabled: bool = SPEED_LIMITS_ENABLED,
    timeout: Optional[float] = None,
) -> Optional[RouteData]:
    """Query the route through ``stopovers`` and derive its animation tables.

    Returns None on any Maps failure or unusable payload, in which case the
    caller should drop whatever route it was showing.
    """

    client = client or MapsClient(api_key)
    try:
        route = await asyncio.to_thread(
            client.compute_route,
            origin,
            destination,
            _intermediates(stopovers),
            timeout=timeout,
        )
        encoded = (route.get("polyline") or {}).get("encodedPolyline")
        if not encoded:
            raise DataShapeError("route has no encoded polyline")
        polyline = decode_polyline(encoded)
        if not polyline:
            raise DataShapeError("route polyline decoded to no points")
        distances = cumulative_distances(polyline)
        segments = await _speed_segments(
            client,
            route,
            polyline,
            distances,
            speed_limits_enabled=speed_limits_enabled,
            timeout=timeout,
        )
        legs = parse_legs(route)
    except FocusRouteError as exc:
        LOGGER.warning("Route computation failed: %s", exc)
        return None
    except (KeyError, TypeError, ValueError) as exc:
        LOGGER.warning("Unexpected route payload: %s", exc)
        return None

    return RouteData(
        origin=origin,
        destination=destination,
        duration=float(parse_duration_seconds(route.get("duration"))),
        distance=float(route.get("distanceMeters") or 0),
        polyline=polyline,
        cumulative_distances=distances,
        speed_segments=segments or None,
        stopovers=list(stopovers) or None,
        legs=legs or None,
    )


def _distance_positions(route: RouteData, stopovers: Sequence[Stopover]) -> List[float]:
    total = route.total_path_distance
    positions: List[float] = []
    for stop in stopovers:
        if stop.location.is_unset or total <= 0:
            positions.append(0.0)
            continue
        index = nearest_vertex_index(route.polyline, stop.location.point)
        positions.append(route.cumulative_distances[index] / total)
    return positions


def _time_positions(
    route: RouteData, stopovers: Sequence[Stopover]
) -> Optional[List[float]]:
    legs = route.legs or []
    placed = sum(1 for stop in stopovers if not stop.location.is_unset)
    if route.duration <= 0 or len(legs) < placed:
        return None
    # Unset stopovers were never routed through, so they own no leg.
    positions: List[float] = []
    elapsed = 0.0
    leg_index = 0
    for stop in stopovers:
        if stop.location.is_unset:
            positions.append(0.0)
            continue
        elapsed += legs[leg_index].duration
        leg_index += 1
        fraction = elapsed / route.duration
        if not math.isfinite(fraction) or not 0 <= fraction <= 1:
            return None
        positions.append(fraction)
    return positions


def stopover_progress_positions(
    route: RouteData, stopovers: Optional[Sequence[Stopover]] = None
) -> List[float]:
    """Journey progress (0-1) at which each stopover is reached.

    Uses cumulative leg durations when the route reports them for every
    stopover, otherwise the distance fraction of the nearest route vertex.
    """

    stops = list(stopovers if stopovers is not None else route.stopovers or [])
    if not stops:
        return []
    timed = _time_positions(route, stops)
    if timed is not None:
        return timed
    return _distance_positions(route, stops)


class RouteTracker:
    """Holds the current route snapshot and replaces it as a whole.

    A failed refresh clears the snapshot so nothing keeps animating along
    a stale path.
    """

    def __init__(
        self,
        client: Optional[MapsClient] = None,
        *,
        listener: Optional[RouteListener] = None,
        speed_limits_enabled: bool = SPEED_LIMITS_ENABLED,
    ) -> None:
        self._client = client
        self._listener = listener
        self._speed_limits_enabled = speed_limits_enabled
        self.route: Optional[RouteData] = None

    @property
    def cumulative_distances(self) -> List[float]:
        return self.route.cumulative_distances if self.route else []

    @property
    def speed_segments(self) -> List[SpeedSegment]:
        return list(self.route.speed_segments or []) if self.route else []

    @property
    def stopover_positions(self) -> List[float]:
        return stopover_progress_positions(self.route) if self.route else []

    async def refresh(
        self,
        origin: Location,
        destination: Location,
        stopovers: Sequence[Stopover] = (),
        *,
        timeout: Optional[float] = None,
    ) -> Optional[RouteData]:
        self.route = await compute_route_data(
            origin,
            destination,
            stopovers,
            client=self._client,
            speed_limits_enabled=self._speed_limits_enabled,
            timeout=timeout,
        )
        if self._listener is not None:
            self._listener(self.route)
        return self.route

    def clear(self) -> None:
        self.route = None
        if self._listener is not None:
            self._listener(None)
