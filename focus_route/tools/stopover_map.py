"""Render a planned focus route with its stopovers as an interactive map."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

import folium

from ..models import GeoPoint, Location, RouteData, Stopover
from ..segment_assessment import SegmentRating, classify_segment, waypoint_label
from ..services import compute_route_data, helper_positions, suggest_stopovers

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

_ROUTE_COLOR = "#1f77b4"
_HELPER_COLOR = "#7f7f7f"
_RATING_COLORS = {
    SegmentRating.IDEAL: "#2ca02c",
    SegmentRating.ACCEPTABLE: "#ffbf00",
    SegmentRating.OUT_OF_RANGE: "#d62728",
}


def _latlon(points: Sequence[GeoPoint]) -> List[tuple]:
    return [point.as_tuple() for point in points]


def build_stopover_map(
    route: RouteData,
    *,
    helpers: Optional[Sequence[GeoPoint]] = None,
    output_html_path: Optional[PathLike] = None,
) -> folium.Map:
    """Draw the route polyline, stopovers coloured by leg rating, and helpers.

    Each stopover marker takes the colour of the leg that ends at it; the
    destination takes the colour of the final leg.

    Raises:
        ValueError: If the route has no geometry.
    """

    if not route.polyline:
        raise ValueError("Route has no polyline to draw")

    center = route.polyline[len(route.polyline) // 2]
    folium_map = folium.Map(location=center.as_tuple(), zoom_start=10, control_scale=True)
    folium.PolyLine(
        _latlon(route.polyline),
        color=_ROUTE_COLOR,
        weight=5,
        opacity=0.8,
        tooltip=f"{route.duration / 60:.0f} min, {route.distance / 1000:.1f} km",
    ).add_to(folium_map)

    legs = route.legs or []
    stops = route.stopovers or []
    # Unset stopovers are not routed through, so they neither own a leg nor a marker.
    routed = [stop.location for stop in stops if not stop.location.is_unset]
    waypoints = [route.origin] + routed + [route.destination]
    for index, location in enumerate(waypoints):
        if location.is_unset:
            continue
        label = waypoint_label(index, len(waypoints) - 1)
        color = _ROUTE_COLOR
        if 0 < index <= len(legs):
            leg = legs[index - 1]
            color = _RATING_COLORS[classify_segment(leg.duration)]
            label = f"{label}: {leg.duration / 60:.0f} min leg"
        folium.CircleMarker(
            location=location.point.as_tuple(),
            radius=8,
            color=color,
            fill=True,
            fill_color=color,
            tooltip=label,
            popup=folium.Popup(html=location.address or label, max_width=300),
        ).add_to(folium_map)

    for point in helpers or []:
        folium.CircleMarker(
            location=point.as_tuple(),
            radius=4,
            color=_HELPER_COLOR,
            fill=False,
            tooltip="Suggested stop area",
        ).add_to(folium_map)

    if output_html_path is not None:
        output_path = Path(output_html_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        folium_map.save(str(output_path))

    return folium_map


def parse_location(raw: str) -> Location:
    """Parse ``"lat,lng"`` into a :class:`Location`."""

    try:
        lat_text, lng_text = raw.split(",")
        return Location(float(lat_text), float(lng_text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected LAT,LNG but got {raw!r}") from exc


async def _plan_route(
    origin: Location, destination: Location, max_stopovers: Optional[int]
) -> Optional[RouteData]:
    suggested = await suggest_stopovers(origin, destination, max_stopovers=max_stopovers)
    stopovers = [Stopover(location) for location in suggested]
    return await compute_route_data(origin, destination, stopovers)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan a focus drive and write its stopovers to an HTML map."
    )
    parser.add_argument("--origin", type=parse_location, required=True)
    parser.add_argument("--destination", type=parse_location, required=True)
    parser.add_argument("--max-stopovers", type=int)
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("maps") / "focus-route.html",
        help="Output HTML path (default: maps/focus-route.html)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used via ``python -m focus_route.tools.stopover_map``."""

    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    route = asyncio.run(_plan_route(args.origin, args.destination, args.max_stopovers))
    if route is None:
        logging.error("Could not compute a route; see warnings above")
        return 1

    build_stopover_map(
        route,
        helpers=helper_positions(route.polyline, route.duration),
        output_html_path=args.output,
    )
    logging.info("Stopover map written to %s", args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
