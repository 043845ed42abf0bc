"""Tests for the stopover map export tool."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

import folium
import pytest

from focus_route.geometry import cumulative_distances
from focus_route.models import Location, RouteData, RouteLeg, Stopover
from focus_route.tools import stopover_map
from focus_route.tools.stopover_map import (
    _RATING_COLORS,
    build_stopover_map,
    parse_location,
)
from focus_route.segment_assessment import SegmentRating


@pytest.fixture
def planned_route(line_points) -> RouteData:
    stop = Stopover(Location(51.2, -1.0, address="Services, M40"))
    legs = [
        RouteLeg(1500, 22000, line_points[0], line_points[20]),
        RouteLeg(600, 22000, line_points[20], line_points[-1]),
    ]
    return RouteData(
        origin=Location(51.0, -1.0, "Home"),
        destination=Location(51.4, -1.0, "Office"),
        duration=2100,
        distance=44000,
        polyline=line_points,
        cumulative_distances=cumulative_distances(line_points),
        stopovers=[stop],
        legs=legs,
    )


def test_build_stopover_map_colours_markers_by_leg(planned_route: RouteData, tmp_path: Path) -> None:
    output_path = tmp_path / "maps" / "route.html"
    map_object = build_stopover_map(
        planned_route, helpers=[planned_route.polyline[10]], output_html_path=output_path
    )

    assert isinstance(map_object, folium.Map)
    assert output_path.exists()

    marker_colors = [
        child.options.get("color")
        for child in map_object._children.values()
        if isinstance(child, folium.vector_layers.CircleMarker)
    ]
    assert _RATING_COLORS[SegmentRating.IDEAL] in marker_colors
    assert _RATING_COLORS[SegmentRating.OUT_OF_RANGE] in marker_colors
    assert len(marker_colors) == 4

    html = output_path.read_text(encoding="utf-8")
    assert "Services, M40" in html


def test_unset_stopover_does_not_shift_leg_colours(planned_route: RouteData) -> None:
    planned_route = replace(
        planned_route, stopovers=[Stopover(Location(0.0, 0.0))] + list(planned_route.stopovers)
    )

    map_object = build_stopover_map(planned_route)

    markers = {
        child.location[0]: child.options.get("color")
        for child in map_object._children.values()
        if isinstance(child, folium.vector_layers.CircleMarker)
    }
    assert 0.0 not in markers
    assert markers[51.2] == _RATING_COLORS[SegmentRating.IDEAL]
    assert markers[51.4] == _RATING_COLORS[SegmentRating.OUT_OF_RANGE]


def test_build_stopover_map_requires_geometry(planned_route: RouteData) -> None:
    empty = RouteData(
        origin=planned_route.origin,
        destination=planned_route.destination,
        duration=0,
        distance=0,
        polyline=[],
        cumulative_distances=[],
    )
    with pytest.raises(ValueError):
        build_stopover_map(empty)


def test_parse_location() -> None:
    assert parse_location("51.5,-0.12") == Location(51.5, -0.12)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_location("somewhere")


def test_main_writes_map(monkeypatch, planned_route: RouteData, tmp_path: Path) -> None:
    async def fake_plan(origin, destination, max_stopovers):
        return planned_route

    monkeypatch.setattr(stopover_map, "_plan_route", fake_plan)
    output = tmp_path / "out.html"

    code = stopover_map.main(
        ["--origin", "51.0,-1.0", "--destination", "51.4,-1.0", "--output", str(output)]
    )

    assert code == 0
    assert output.exists()


def test_main_reports_failure(monkeypatch, tmp_path: Path) -> None:
    async def fake_plan(origin, destination, max_stopovers):
        return None

    monkeypatch.setattr(stopover_map, "_plan_route", fake_plan)
    code = stopover_map.main(
        ["--origin", "51.0,-1.0", "--destination", "51.4,-1.0", "--output", str(tmp_path / "x.html")]
    )
    assert code == 1
