import pytest

from focus_route.geometry import point_at_distance, point_at_time
from focus_route.models import GeoPoint, TimePoint


@pytest.fixture
def series():
    return [TimePoint(0.0, 0.0, 0.0), TimePoint(1.0, 0.0, 10.0), TimePoint(2.0, 0.0, 20.0)]


def test_point_at_time_interpolates(series):
    assert point_at_time(series, 5) == GeoPoint(0.5, 0.0)
    assert point_at_time(series, 15) == GeoPoint(1.5, 0.0)
    assert point_at_time(series, 10) == GeoPoint(1.0, 0.0)


def test_point_at_time_clamps_to_ends(series):
    assert point_at_time(series, -3) == GeoPoint(0.0, 0.0)
    assert point_at_time(series, 99) == GeoPoint(2.0, 0.0)


def test_point_at_time_moves_monotonically(series):
    lats = [point_at_time(series, t / 2).lat for t in range(0, 41)]
    assert all(b >= a for a, b in zip(lats, lats[1:]))
    assert max(b - a for a, b in zip(lats, lats[1:])) <= 0.05 + 1e-12


def test_point_at_time_on_stationary_samples_takes_later_point():
    series = [
        TimePoint(0.0, 0.0, 0.0),
        TimePoint(1.0, 0.0, 10.0),
        TimePoint(2.0, 0.0, 10.0),
        TimePoint(3.0, 0.0, 20.0),
    ]

    assert point_at_time(series, 10) == GeoPoint(2.0, 0.0)
    assert point_at_time(series, 15) == GeoPoint(2.5, 0.0)


def test_point_at_distance_interpolates():
    polyline = [GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0), GeoPoint(0.0, 2.0)]
    distances = [0.0, 100.0, 200.0]

    assert point_at_distance(polyline, distances, 150) == GeoPoint(0.0, 1.5)
    assert point_at_distance(polyline, distances, 0) == polyline[0]
    assert point_at_distance(polyline, distances, 500) == polyline[-1]


def test_point_at_distance_on_duplicate_vertex():
    polyline = [GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0), GeoPoint(0.0, 1.0), GeoPoint(0.0, 2.0)]
    distances = [0.0, 100.0, 100.0, 200.0]

    assert point_at_distance(polyline, distances, 100) == GeoPoint(0.0, 1.0)


def test_empty_inputs_are_rejected():
    with pytest.raises(ValueError):
        point_at_time([], 1.0)
    with pytest.raises(ValueError):
        point_at_distance([], [], 1.0)
    with pytest.raises(ValueError):
        point_at_distance([GeoPoint(0.0, 0.0)], [0.0, 1.0], 1.0)
