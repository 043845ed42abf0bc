import pytest

from focus_route.geometry import build_time_points, has_time_data
from focus_route.geometry.time_points import step_duration_seconds

from conftest import make_route, make_step, straight_line


def test_time_points_span_route_duration(line_points):
    route = make_route(line_points, 1000)
    series = build_time_points(route["legs"])

    assert len(series) == len(line_points)
    assert series[0].time == 0
    assert all(b.time >= a.time for a, b in zip(series, series[1:]))
    assert series[-1].time == pytest.approx(1000)
    assert has_time_data(series)


def test_step_boundaries_match_step_durations(line_points):
    route = make_route(line_points, 1000, steps=4)
    series = build_time_points(route["legs"])

    # Each of the four steps covers ten vertices and 250 seconds.
    assert series[10].time == pytest.approx(250)
    assert series[20].time == pytest.approx(500)


def test_no_legs_yields_empty_series():
    assert build_time_points(None) == []
    assert build_time_points([]) == []
    assert not has_time_data([])


def test_undecodable_step_still_advances_clock():
    good = straight_line(3)
    legs = [
        {
            "steps": [
                {"staticDuration": "100s", "polyline": {"encodedPolyline": "_p~iF~ps|U_"}},
                make_step(good, 50),
            ]
        }
    ]
    series = build_time_points(legs)

    assert len(series) == 3
    assert series[0].time == 0
    assert series[-1].time == pytest.approx(150)


def test_step_without_duration_uses_fallback_speed():
    points = straight_line(2)
    step = make_step(points, 0)
    del step["staticDuration"]
    series = build_time_points([{"steps": [step]}])

    assert series[-1].time == pytest.approx(step["distanceMeters"] / 13.4)


def test_step_duration_prefers_live_duration():
    assert step_duration_seconds({"duration": "42s", "staticDuration": "60s"}) == 42
    assert step_duration_seconds({"staticDuration": "60s"}) == 60
    assert step_duration_seconds({}) == 0
