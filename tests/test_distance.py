import pytest

from focus_route.geometry import (
    bearing_deg,
    cumulative_distances,
    haversine_m,
    nearest_vertex_index,
)
from focus_route.models import GeoPoint

from conftest import straight_line


def test_haversine_one_degree_of_latitude():
    assert haversine_m(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0)) == pytest.approx(111_195, rel=1e-3)


def test_haversine_same_point_is_zero():
    p = GeoPoint(51.5, -0.12)
    assert haversine_m(p, p) == 0


def test_cumulative_table_aligns_with_polyline():
    points = straight_line(10)
    table = cumulative_distances(points)

    assert len(table) == len(points)
    assert table[0] == 0
    assert all(b >= a for a, b in zip(table, table[1:]))
    assert table[-1] == pytest.approx(9 * haversine_m(points[0], points[1]), rel=1e-3)


def test_cumulative_table_handles_degenerate_input():
    assert cumulative_distances([]) == []
    assert cumulative_distances([GeoPoint(1.0, 2.0)]) == [0.0]


@pytest.mark.parametrize(
    "target, expected",
    [
        (GeoPoint(1.0, 0.0), 0.0),
        (GeoPoint(0.0, 1.0), 90.0),
        (GeoPoint(-1.0, 0.0), 180.0),
        (GeoPoint(0.0, -1.0), -90.0),
    ],
)
def test_bearing_cardinal_directions(target, expected):
    assert bearing_deg(GeoPoint(0.0, 0.0), target) == pytest.approx(expected, abs=1e-6)


def test_nearest_vertex_index():
    points = straight_line(5)
    assert nearest_vertex_index(points, GeoPoint(51.021, -1.0)) == 2
    assert nearest_vertex_index(points, GeoPoint(60.0, -1.0)) == 4
