"""Route geometry: polyline decoding, distances, timelines and interpolation."""

from .codec import decode_polyline, encode_polyline
from .distance import (
    bearing_deg,
    cumulative_distances,
    haversine_m,
    nearest_vertex_index,
)
from .interpolation import point_at_distance, point_at_time
from .time_points import build_time_points, has_time_data

__all__ = [
    "decode_polyline",
    "encode_polyline",
    "bearing_deg",
    "cumulative_distances",
    "haversine_m",
    "nearest_vertex_index",
    "point_at_distance",
    "point_at_time",
    "build_time_points",
    "has_time_data",
]
