"""Encoded polyline helpers (Google polyline algorithm, precision 1e5)."""

from __future__ import annotations

from typing import Iterable, List

from polyline import decode as polyline_decode
from polyline import encode as polyline_encode

from ..errors import DecodeError
from ..models import GeoPoint


def decode_polyline(encoded: str) -> List[GeoPoint]:
    """Decode an encoded polyline string into a list of points.

    Raises:
        DecodeError: If the string ends mid-value or contains bytes that do
            not form a valid latitude/longitude pair.
    """

    if not encoded:
        return []
    try:
        decoded = polyline_decode(encoded, 5)
    except (IndexError, ValueError, TypeError) as exc:
        raise DecodeError(f"Unable to decode polyline of length {len(encoded)}") from exc
    return [GeoPoint(float(lat), float(lng)) for lat, lng in decoded]


def encode_polyline(points: Iterable[GeoPoint]) -> str:
    """Encode points into a polyline string (used by tooling and tests)."""

    return polyline_encode([(p.lat, p.lng) for p in points], 5)
