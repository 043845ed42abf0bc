"""Suggest stopovers that split a drive into focus-sized segments.

The search asks the Routes API for the plain origin to destination route,
places candidate waypoints at equal time intervals along it, then re-queries
with those waypoints to learn the real leg durations. The segment count is
nudged up or down for a few attempts until every leg lands in the ideal
window.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence

from ..config import (
    IDEAL_SEGMENT_SECONDS,
    MAX_AUTO_STOPOVERS,
    MAX_HELPER_POSITIONS,
    MAX_IDEAL_SEGMENT_SECONDS,
    MAX_REFINEMENT_ATTEMPTS,
    MIN_IDEAL_SEGMENT_SECONDS,
)
from ..errors import FocusRouteError
from ..geometry import (
    build_time_points,
    cumulative_distances,
    decode_polyline,
    has_time_data,
    point_at_distance,
    point_at_time,
)
from ..maps_client import MapsClient
from ..maps_client.geocoding import Coordinate
from ..models import GeoPoint, Location, TimePoint
from ..utils import parse_duration_seconds

LOGGER = logging.getLogger(__name__)


class SearchState(enum.Enum):
    SEARCHING = "searching"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SearchStep:
    """Position of the refinement search after an attempt."""

    state: SearchState
    segments: int
    attempt: int = 0

    @property
    def finished(self) -> bool:
        return self.state is not SearchState.SEARCHING


@dataclass(slots=True)
class RoutePlan:
    """Geometry of the unmodified route used to place candidates."""

    total_duration: int
    polyline: List[GeoPoint]
    distances: List[float]
    time_points: List[TimePoint] = field(default_factory=list)

    @property
    def total_distance(self) -> float:
        return self.distances[-1] if self.distances else 0.0


@dataclass(slots=True)
class SearchOutcome:
    step: SearchStep
    stopovers: List[GeoPoint]
    attempts: int


def ideal_segment_count(total_duration: float) -> int:
    """Number of ~25 minute segments that fit ``total_duration`` seconds."""

    if not math.isfinite(total_duration) or total_duration <= 0:
        return 1
    raw = total_duration / IDEAL_SEGMENT_SECONDS
    if raw < 1:
        return 1
    return max(1, math.floor(raw + 0.5))


def normalize_max_stopovers(max_stopovers: Any) -> int:
    """Floor a usable limit; anything else means the API maximum."""

    if isinstance(max_stopovers, bool) or not isinstance(max_stopovers, (int, float)):
        return MAX_AUTO_STOPOVERS
    if not math.isfinite(max_stopovers) or max_stopovers < 0:
        return MAX_AUTO_STOPOVERS
    return int(math.floor(max_stopovers))


def _shrink_floor(total_duration: float) -> int:
    return math.ceil(total_duration / MAX_IDEAL_SEGMENT_SECONDS)


def next_search_step(
    step: SearchStep,
    leg_durations: Optional[Sequence[float]],
    *,
    total_duration: float,
    max_segments: int,
    max_attempts: int = MAX_REFINEMENT_ATTEMPTS,
) -> SearchStep:
    """Decide what to do after evaluating ``step.segments`` segments.

    ``leg_durations`` is None (or empty) when the evaluation failed. When
    some legs are too long and others too short at once, growing wins while
    the segment ceiling allows it, then shrinking, else the split stands.
    """

    attempt = step.attempt + 1
    if not leg_durations:
        return SearchStep(SearchState.FAILED, step.segments, attempt)

    if all(
        MIN_IDEAL_SEGMENT_SECONDS <= duration <= MAX_IDEAL_SEGMENT_SECONDS
        for duration in leg_durations
    ):
        return SearchStep(SearchState.ACCEPTED, step.segments, attempt)

    too_long = any(duration > MAX_IDEAL_SEGMENT_SECONDS for duration in leg_durations)
    too_short = any(duration < MIN_IDEAL_SEGMENT_SECONDS for duration in leg_durations)

    if too_long and step.segments < max_segments:
        segments = step.segments + 1
    elif too_short and step.segments > _shrink_floor(total_duration):
        segments = max(step.segments - 1, 1)
    else:
        return SearchStep(SearchState.ACCEPTED, step.segments, attempt)

    if attempt >= max_attempts:
        return SearchStep(SearchState.EXHAUSTED, step.segments, attempt)
    return SearchStep(SearchState.SEARCHING, segments, attempt)


def generate_stopover_coordinates(plan: RoutePlan, segments: int) -> List[GeoPoint]:
    """Place ``segments - 1`` waypoints at equal travel-time intervals."""

    stop_count = max(segments - 1, 0)
    if stop_count == 0:
        return []

    timed = has_time_data(plan.time_points)
    interval = plan.total_duration / segments
    coords: List[GeoPoint] = []
    for i in range(1, stop_count + 1):
        point: Optional[GeoPoint] = None
        if timed:
            point = point_at_time(plan.time_points, interval * i)
        if point is None and plan.total_distance > 0:
            target = (plan.total_distance / segments) * i
            point = point_at_distance(plan.polyline, plan.distances, target)
        if point is not None:
            coords.append(point)
    return coords


def build_route_plan(route: dict) -> RoutePlan:
    encoded = (route.get("polyline") or {}).get("encodedPolyline") or ""
    polyline = decode_polyline(encoded)
    return RoutePlan(
        total_duration=parse_duration_seconds(route.get("duration")),
        polyline=polyline,
        distances=cumulative_distances(polyline),
        time_points=build_time_points(route.get("legs")),
    )


def helper_positions(
    polyline: Sequence[GeoPoint], total_duration: float
) -> List[GeoPoint]:
    """Route vertices roughly where suggested stopovers would fall.

    Up to ``MAX_HELPER_POSITIONS`` points, spaced evenly by distance and
    snapped to the nearest polyline vertex.
    """

    if len(polyline) < 2:
        return []
    count = min(ideal_segment_count(total_duration) - 1, MAX_HELPER_POSITIONS)
    if count <= 0:
        return []

    distances = cumulative_distances(polyline)
    total = distances[-1]
    positions: List[GeoPoint] = []
    for i in range(1, count + 1):
        target = total / (count + 1) * i
        index = min(range(len(distances)), key=lambda k: abs(distances[k] - target))
        positions.append(polyline[index])
    return positions


async def refine_stopovers(
    client: MapsClient,
    origin: Coordinate,
    destination: Coordinate,
    plan: RoutePlan,
    *,
    initial_segments: int,
    max_segments: int,
    timeout: Optional[float] = None,
) -> SearchOutcome:
    """Run the bounded search and return the stopovers it settled on."""

    step = SearchStep(SearchState.SEARCHING, initial_segments)
    accepted: List[GeoPoint] = []
    while not step.finished:
        candidates = generate_stopover_coordinates(plan, step.segments)
        stop_count = max(step.segments - 1, 0)
        if stop_count == 0:
            return SearchOutcome(replace(step, state=SearchState.ACCEPTED), [], step.attempt)
        if len(candidates) < stop_count:
            LOGGER.warning(
                "Only placed %s of %s stopovers; route data looks malformed",
                len(candidates),
                stop_count,
            )
            return SearchOutcome(replace(step, state=SearchState.FAILED), [], step.attempt)

        try:
            durations: Optional[List[int]] = await asyncio.to_thread(
                client.leg_durations,
                origin,
                destination,
                candidates,
                timeout=timeout,
            )
        except FocusRouteError as exc:
            LOGGER.warning(
                "Leg evaluation failed for %s segments: %s", step.segments, exc
            )
            durations = None

        LOGGER.debug(
            "Attempt %s with %s segments -> legs %s",
            step.attempt + 1,
            step.segments,
            durations,
        )
        step = next_search_step(
            step,
            durations,
            total_duration=plan.total_duration,
            max_segments=max_segments,
        )
        if step.state is not SearchState.FAILED:
            accepted = candidates
    return SearchOutcome(step, accepted, step.attempt)


async def _label_stopovers(
    client: MapsClient, points: Sequence[GeoPoint], timeout: Optional[float]
) -> List[Location]:
    labelled: List[Location] = []
    for index, point in enumerate(points):
        labelled.append(
            await asyncio.to_thread(client.label_stop, index, point, timeout=timeout)
        )
    return labelled


async def suggest_stopovers(
    origin: Coordinate,
    destination: Coordinate,
    api_key: Optional[str] = None,
    max_stopovers: Any = None,
    *,
    client: Optional[MapsClient] = None,
    timeout: Optional[float] = None,
) -> List[Location]:
    """Return labelled stopovers splitting the drive into focus segments.

    Never raises for upstream trouble: any Maps failure or malformed payload
    is logged and yields an empty list.
    """

    client = client or MapsClient(api_key)
    try:
        route = await asyncio.to_thread(
            client.compute_route, origin, destination, timeout=timeout
        )
        plan = build_route_plan(route)
        ideal = ideal_segment_count(plan.total_duration)
        limit = normalize_max_stopovers(max_stopovers)
        if min(max(ideal - 1, 0), limit) == 0:
            return []

        max_segments = min(limit + 1, MAX_AUTO_STOPOVERS + 1)
        outcome = await refine_stopovers(
            client,
            origin,
            destination,
            plan,
            initial_segments=min(max(ideal, 1), max_segments),
            max_segments=max_segments,
            timeout=timeout,
        )
        LOGGER.info(
            "Stopover search %s after %s attempt(s) with %s segment(s)",
            outcome.step.state.value,
            outcome.attempts,
            outcome.step.segments,
        )
        if not outcome.stopovers:
            return []
        return await _label_stopovers(client, outcome.stopovers, timeout)
    except FocusRouteError as exc:
        LOGGER.warning("Stopover suggestion failed: %s", exc)
        return []
    except (KeyError, TypeError, ValueError) as exc:
        LOGGER.warning("Unexpected route payload while suggesting stopovers: %s", exc)
        return []


__all__ = [
    "RoutePlan",
    "SearchOutcome",
    "SearchState",
    "SearchStep",
    "build_route_plan",
    "generate_stopover_coordinates",
    "helper_positions",
    "ideal_segment_count",
    "next_search_step",
    "normalize_max_stopovers",
    "refine_stopovers",
    "suggest_stopovers",
]
