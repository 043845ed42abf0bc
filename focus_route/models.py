"""Dataclasses describing route geometry, legs and stopovers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


LatLng = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Immutable WGS84 coordinate in degrees."""

    lat: float
    lng: float

    def as_tuple(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass(frozen=True, slots=True)
class Location:
    """A coordinate with an optional human-readable address."""

    lat: float
    lng: float
    address: Optional[str] = None

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)

    @property
    def is_unset(self) -> bool:
        """True for placeholder stopovers that have not been positioned yet."""

        return self.lat == 0 and self.lng == 0


@dataclass(slots=True)
class TimePoint:
    """Route sample carrying the elapsed seconds since the origin."""

    lat: float
    lng: float
    time: float

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


@dataclass(frozen=True, slots=True)
class SpeedSegment:
    """Constant-speed stretch of the route between two cumulative distances."""

    start_distance: float
    end_distance: float
    duration: float
    speed: float


@dataclass(frozen=True, slots=True)
class RouteLeg:
    """One hop between two consecutive waypoints."""

    duration: float
    distance: float
    start_location: GeoPoint
    end_location: GeoPoint


@dataclass
class Stopover:
    location: Location
    time_percentage: float = 0.0
    rest_duration_minutes: float = 5.0


@dataclass(frozen=True)
class RouteData:
    """Snapshot of a computed route consumed by the animator.

    A fresh instance replaces the previous one whenever origin, destination
    or stopovers change; the lists are never mutated after construction.
    """

    origin: Location
    destination: Location
    duration: float
    distance: float
    polyline: List[GeoPoint]
    cumulative_distances: List[float]
    speed_segments: Optional[List[SpeedSegment]] = None
    stopovers: Optional[List[Stopover]] = None
    legs: Optional[List[RouteLeg]] = None

    @property
    def total_path_distance(self) -> float:
        return self.cumulative_distances[-1] if self.cumulative_distances else 0.0


@dataclass(slots=True)
class MarkerFrame:
    """Marker state emitted for each display refresh."""

    progress: float
    position: Optional[GeoPoint]
    heading: Optional[float]
    visible: bool = True


@dataclass(slots=True)
class LegAssessment:
    """Per-leg rating shown next to a planned journey."""

    label: str
    minutes: int
    rating: str
    suggestion: Optional[str] = None
