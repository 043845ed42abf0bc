"""Build an elapsed-time timeline from a route's leg/step breakdown."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..config import FALLBACK_SPEED_MPS
from ..errors import DecodeError
from ..models import GeoPoint, TimePoint
from ..utils import parse_duration_seconds
from .codec import decode_polyline
from .distance import segment_lengths

LOGGER = logging.getLogger(__name__)

JSONObj = Dict[str, Any]


class _TimelineWriter:
    """Append samples, collapsing coincident consecutive coordinates."""

    def __init__(self) -> None:
        self.points: List[TimePoint] = []

    def push(self, point: GeoPoint, time_s: float) -> None:
        if self.points:
            last = self.points[-1]
            if last.lat == point.lat and last.lng == point.lng:
                last.time = time_s
                return
        self.points.append(TimePoint(point.lat, point.lng, time_s))


def step_duration_seconds(step: JSONObj) -> int:
    """Return the step's reported duration, preferring the live value."""

    return parse_duration_seconds(step.get("duration")) or parse_duration_seconds(
        step.get("staticDuration")
    )


def _decode_step(step: JSONObj) -> List[GeoPoint]:
    encoded = (step.get("polyline") or {}).get("encodedPolyline")
    if not encoded:
        return []
    try:
        return decode_polyline(encoded)
    except DecodeError as exc:
        LOGGER.debug("Skipping step with undecodable polyline: %s", exc)
        return []


def _reported_distance(step: JSONObj) -> Optional[float]:
    value = step.get("distanceMeters")
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return float(value)
    return None


def build_time_points(legs: Optional[Sequence[JSONObj]]) -> List[TimePoint]:
    """Convert Routes API legs into a monotone (lat, lng, time) series.

    Each step's duration is spread across its vertices in proportion to the
    length of every sub-segment. Steps reporting no duration fall back to
    ``distance / FALLBACK_SPEED_MPS``. Steps with fewer than two vertices
    only advance the clock. The first sample's time is always 0.
    """

    if not legs:
        return []

    writer = _TimelineWriter()
    cumulative = 0.0

    for leg in legs:
        for step in (leg or {}).get("steps") or []:
            vertices = _decode_step(step)
            duration = float(step_duration_seconds(step))

            if len(vertices) < 2:
                cumulative += duration
                continue

            lengths = segment_lengths(vertices)
            path_distance = sum(lengths)
            step_distance = _reported_distance(step) or path_distance
            if duration == 0 and step_distance > 0:
                duration = step_distance / FALLBACK_SPEED_MPS

            if not writer.points:
                writer.push(vertices[0], cumulative)

            if duration == 0 or path_distance == 0:
                cumulative += duration
                writer.push(vertices[-1], cumulative)
                continue

            for length, vertex in zip(lengths, vertices[1:]):
                cumulative += duration * (length / path_distance)
                writer.push(vertex, cumulative)

    if writer.points:
        writer.points[0].time = 0.0
    return writer.points


def has_time_data(series: Sequence[TimePoint]) -> bool:
    """True when the series spans a positive amount of time."""

    return len(series) > 1 and series[-1].time > 0
