"""Piecewise-constant speed profiles along a route."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence

from ..config import FALLBACK_SPEED_MPS
from ..models import SpeedSegment
from ..utils import parse_duration_seconds

JSONObj = Dict[str, Any]


def speed_segments_from_steps(legs: Optional[Sequence[JSONObj]]) -> List[SpeedSegment]:
    """Build one segment per Routes API step using its static duration.

    Steps without a reported duration count as 1 second; zero-duration
    steps move at ``FALLBACK_SPEED_MPS``.
    """

    segments: List[SpeedSegment] = []
    cumulative = 0.0
    for leg in legs or []:
        for step in (leg or {}).get("steps") or []:
            distance = float(step.get("distanceMeters") or 0)
            raw_duration = step.get("staticDuration")
            duration = float(parse_duration_seconds(raw_duration)) if raw_duration else 1.0
            speed = distance / duration if duration > 0 else FALLBACK_SPEED_MPS
            segments.append(
                SpeedSegment(
                    start_distance=cumulative,
                    end_distance=cumulative + distance,
                    duration=duration,
                    speed=speed,
                )
            )
            cumulative += distance
    return segments


def speed_segments_from_speed_limits(
    distances: Sequence[float],
    samples: Sequence[float],
    route_duration: Optional[float] = None,
) -> List[SpeedSegment]:
    """Build one segment per polyline sub-segment from per-vertex speed samples.

    Each sub-segment averages the samples at its two vertices when both are
    usable, otherwise takes whichever is, otherwise ``FALLBACK_SPEED_MPS``.
    Zero-length sub-segments are skipped. When ``route_duration`` is positive
    the durations are rescaled to sum to it, keeping the relative pace of the
    limits while matching the time the route reports.
    """

    if len(distances) <= 1 or not samples:
        return []

    def usable(index: int) -> Optional[float]:
        if index >= len(samples):
            return None
        value = samples[index]
        return value if math.isfinite(value) and value > 0 else None

    spans: List[tuple] = []
    for i in range(1, len(distances)):
        start, end = distances[i - 1], distances[i]
        if end - start <= 0:
            continue
        prev_sample, next_sample = usable(i - 1), usable(i)
        if prev_sample is not None and next_sample is not None:
            speed = (prev_sample + next_sample) / 2
        else:
            speed = prev_sample or next_sample or FALLBACK_SPEED_MPS
        spans.append((start, end, speed))

    scale = 1.0
    raw_total = sum((end - start) / speed for start, end, speed in spans)
    if route_duration and route_duration > 0 and raw_total > 0:
        scale = route_duration / raw_total

    segments: List[SpeedSegment] = []
    for start, end, speed in spans:
        duration = (end - start) / speed * scale
        segments.append(
            SpeedSegment(
                start_distance=start,
                end_distance=end,
                duration=duration,
                speed=(end - start) / duration,
            )
        )
    return segments


def total_duration(segments: Sequence[SpeedSegment]) -> float:
    return float(sum(seg.duration for seg in segments))
