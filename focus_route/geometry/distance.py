"""Great-circle distance, bearing and cumulative distance tables."""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from ..models import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Return the haversine distance in metres between two points."""

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def segment_lengths(points: Sequence[GeoPoint]) -> List[float]:
    """Return the length of each consecutive pair in ``points``."""

    return [haversine_m(points[i - 1], points[i]) for i in range(1, len(points))]


def cumulative_distances(points: Sequence[GeoPoint]) -> List[float]:
    """Build the cumulative distance table aligned with ``points``.

    The first entry is always 0 and the table has one entry per point; an
    empty input yields an empty table.
    """

    if not points:
        return []
    lengths = np.asarray(segment_lengths(points), dtype=float)
    table = np.concatenate(([0.0], np.cumsum(lengths)))
    return [float(value) for value in table]


def bearing_deg(a: GeoPoint, b: GeoPoint) -> float:
    """Initial great-circle bearing from ``a`` to ``b`` in (-180, 180] degrees."""

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlng = math.radians(b.lng - a.lng)
    y = math.sin(dlng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlng)
    heading = math.degrees(math.atan2(y, x))
    if heading <= -180.0:
        heading += 360.0
    return heading


def nearest_vertex_index(points: Sequence[GeoPoint], target: GeoPoint) -> int:
    """Return the index of the vertex closest to ``target``."""

    best_i = 0
    best_d = float("inf")
    for i, p in enumerate(points):
        d = haversine_m(p, target)
        if d < best_d:
            best_d = d
            best_i = i
    return best_i
