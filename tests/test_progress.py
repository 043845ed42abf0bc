import pytest

from focus_route.animation import (
    ease_in_out_cubic,
    heading_at_progress,
    position_at_progress,
    progress_to_distance,
)
from focus_route.geometry import cumulative_distances
from focus_route.models import Location, RouteData, SpeedSegment

from conftest import straight_line

SEGMENTS = [SpeedSegment(0, 1000, 100, 10), SpeedSegment(1000, 2000, 50, 20)]


def _route(points, speed_segments=None):
    return RouteData(
        origin=Location(points[0].lat, points[0].lng),
        destination=Location(points[-1].lat, points[-1].lng),
        duration=600,
        distance=0,
        polyline=points,
        cumulative_distances=cumulative_distances(points),
        speed_segments=speed_segments,
    )


def test_progress_at_segment_boundary():
    assert progress_to_distance(100 / 150, SEGMENTS, 2000) == pytest.approx(1000)


def test_progress_inside_first_segment():
    assert progress_to_distance(0.5, SEGMENTS, 2000) == pytest.approx(750)


def test_progress_inside_faster_segment():
    # 125 s elapsed: 25 s into the 20 m/s segment.
    assert progress_to_distance(125 / 150, SEGMENTS, 2000) == pytest.approx(1500)


def test_progress_without_segments_is_constant_speed():
    assert progress_to_distance(0.25, None, 2000) == 500
    assert progress_to_distance(0.25, [], 2000) == 500


def test_progress_is_clamped():
    assert progress_to_distance(1.5, SEGMENTS, 2000) == pytest.approx(2000)
    assert progress_to_distance(-0.2, SEGMENTS, 2000) == 0


def test_position_and_heading_along_northbound_route():
    points = straight_line(11)
    route = _route(points)

    assert position_at_progress(route, 0) == points[0]
    end = position_at_progress(route, 1)
    assert end.lat == pytest.approx(points[-1].lat)
    assert end.lng == pytest.approx(points[-1].lng)
    middle = position_at_progress(route, 0.5)
    assert middle.lat == pytest.approx(points[5].lat, abs=1e-4)
    assert heading_at_progress(route, 0.5) == pytest.approx(0.0, abs=1e-6)


def test_heading_is_none_at_the_end():
    route = _route(straight_line(3))
    assert heading_at_progress(route, 1.0) is None


def test_ease_in_out_cubic_endpoints():
    assert ease_in_out_cubic(0) == 0
    assert ease_in_out_cubic(0.5) == pytest.approx(0.5)
    assert ease_in_out_cubic(1) == 1
    assert ease_in_out_cubic(0.25) < 0.25
