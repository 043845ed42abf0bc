"""Global pytest fixtures & helpers.

Adds project root to path and provides route payload factories plus a fake
Maps client so service tests never touch the network.
"""
from __future__ import annotations

import os
import sys
from typing import List, Optional, Sequence

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from focus_route.errors import OracleError
from focus_route.geometry import encode_polyline
from focus_route.geometry.distance import segment_lengths
from focus_route.maps_client import clear_address_cache
from focus_route.models import GeoPoint, Location


# --- Factory helpers -------------------------------------------------
def straight_line(count: int, start=(51.0, -1.0), step_deg: float = 0.01) -> List[GeoPoint]:
    """Points heading due north, ``step_deg`` apart (~1.1 km at 0.01)."""

    lat, lng = start
    return [GeoPoint(round(lat + i * step_deg, 5), lng) for i in range(count)]


def make_step(points: Sequence[GeoPoint], seconds: float) -> dict:
    return {
        "distanceMeters": int(sum(segment_lengths(points))),
        "staticDuration": f"{seconds:g}s",
        "polyline": {"encodedPolyline": encode_polyline(points)},
    }


def make_route(points: Sequence[GeoPoint], seconds: float, steps: int = 4) -> dict:
    """A single-leg computeRoutes route split into ``steps`` equal-time steps."""

    chunk = max((len(points) - 1) // steps, 1)
    step_payloads = []
    start = 0
    while start < len(points) - 1:
        end = min(start + chunk, len(points) - 1)
        step_payloads.append(make_step(points[start : end + 1], 0))
        start = end
    per_step = seconds / len(step_payloads)
    for step in step_payloads:
        step["staticDuration"] = f"{per_step:g}s"
    distance = int(sum(segment_lengths(points)))
    return {
        "duration": f"{seconds:g}s",
        "distanceMeters": distance,
        "polyline": {"encodedPolyline": encode_polyline(points)},
        "legs": [
            {
                "duration": f"{seconds:g}s",
                "distanceMeters": distance,
                "startLocation": {"latLng": {"latitude": points[0].lat, "longitude": points[0].lng}},
                "endLocation": {"latLng": {"latitude": points[-1].lat, "longitude": points[-1].lng}},
                "steps": step_payloads,
            }
        ],
    }


class FakeMapsClient:
    """Stands in for MapsClient, recording every call."""

    def __init__(
        self,
        route: Optional[dict] = None,
        leg_responses: Optional[list] = None,
        speed_samples: Optional[List[float]] = None,
        route_error: Optional[Exception] = None,
    ):
        self.route = route
        self.leg_responses = list(leg_responses or [])
        self.speed_samples = speed_samples or []
        self.route_error = route_error
        self.route_calls: list = []
        self.leg_calls: list = []
        self.label_calls: list = []
        self.speed_calls = 0

    def compute_route(self, origin, destination, intermediates=(), *, field_mask=None, timeout=None):
        self.route_calls.append(list(intermediates))
        if self.route_error is not None:
            raise self.route_error
        return self.route

    def leg_durations(self, origin, destination, intermediates, *, timeout=None):
        self.leg_calls.append(list(intermediates))
        response = self.leg_responses.pop(0) if self.leg_responses else None
        if response is None:
            raise OracleError("computeRoutes request failed (status 500)")
        if callable(response):
            return response(intermediates)
        return response

    def label_stop(self, index, point, *, timeout=None):
        self.label_calls.append(index)
        return Location(point.lat, point.lng, address=f"Address {index + 1}")

    def speed_limits(self, points, *, timeout=None):
        self.speed_calls += 1
        return list(self.speed_samples)


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def origin():
    return Location(51.0, -1.0, address="Origin")


@pytest.fixture
def destination():
    return Location(51.4, -1.0, address="Destination")


@pytest.fixture
def line_points():
    return straight_line(41)


@pytest.fixture
def route_factory(line_points):
    def _make(seconds: float, steps: int = 4) -> dict:
        return make_route(line_points, seconds, steps)

    return _make


@pytest.fixture(autouse=True)
def fresh_address_cache():
    clear_address_cache()
    yield
    clear_address_cache()
