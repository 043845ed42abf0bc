"""Linear interpolation of positions along a route by time or distance."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..models import GeoPoint, TimePoint
from ..utils import clamp


def _lerp(start: GeoPoint, end: GeoPoint, ratio: float) -> GeoPoint:
    return GeoPoint(
        start.lat + (end.lat - start.lat) * ratio,
        start.lng + (end.lng - start.lng) * ratio,
    )


def point_at_time(series: Sequence[TimePoint], target_time: float) -> GeoPoint:
    """Return the interpolated position at ``target_time`` seconds.

    Targets before the first sample return the first point and targets past
    the last sample return the last point. A zero-length time interval
    returns its later endpoint.
    """

    if not series:
        raise ValueError("Cannot interpolate over an empty time series")

    first = series[0]
    if target_time <= first.time:
        return first.point

    times = np.fromiter((p.time for p in series), dtype=float, count=len(series))
    # First sample whose time is >= target; always >= 1 here.
    index = int(np.searchsorted(times, target_time, side="left"))
    if index >= len(series):
        return series[-1].point
    if times[index] == target_time:
        # Samples sharing this timestamp form a zero-length interval; take its end.
        return series[int(np.searchsorted(times, target_time, side="right")) - 1].point

    previous = series[index - 1]
    current = series[index]
    interval = current.time - previous.time
    if interval <= 0:
        return current.point
    ratio = clamp((target_time - previous.time) / interval, 0.0, 1.0)
    return _lerp(previous.point, current.point, ratio)


def point_at_distance(
    polyline: Sequence[GeoPoint],
    distances: Sequence[float],
    target_distance: float,
) -> GeoPoint:
    """Return the interpolated position ``target_distance`` metres along the path."""

    if not polyline:
        raise ValueError("Cannot interpolate over an empty polyline")
    if len(distances) != len(polyline):
        raise ValueError("Distance table must align with polyline points")

    if target_distance <= distances[0]:
        return polyline[0]

    table = np.asarray(distances, dtype=float)
    index = int(np.searchsorted(table, target_distance, side="left"))
    if index >= len(polyline):
        return polyline[-1]

    start_distance = table[index - 1]
    span = table[index] - start_distance
    ratio = float((target_distance - start_distance) / span) if span > 0 else 0.0
    return _lerp(polyline[index - 1], polyline[index], ratio)
