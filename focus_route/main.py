"""Command line entry point: suggest stopovers, plan a route, simulate a journey."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List, Optional, Sequence

from .config import GOOGLE_MAPS_API_KEY
from .journey import JourneySession, run_journey
from .models import Location, RouteData, Stopover
from .segment_assessment import assess_legs, ideal_count
from .services import compute_route_data, stopover_progress_positions, suggest_stopovers
from .tools.stopover_map import parse_location
from .utils import format_minutes


def _setup_logging(verbose: bool = False) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _print_stopovers(stopovers: Sequence[Location]) -> None:
    if not stopovers:
        print("No stopovers needed")
        return
    for index, stop in enumerate(stopovers, start=1):
        print(f"{index:>2}. {stop.address or ''} ({stop.lat:.5f}, {stop.lng:.5f})")


def _print_route(route: RouteData) -> None:
    legs = route.legs or []
    print(
        f"Route: {format_minutes(route.duration)}, {route.distance / 1000:.1f} km, "
        f"{len(legs)} segment(s), {ideal_count(legs)} ideal"
    )
    for assessment in assess_legs(legs):
        line = f"  {assessment.label}: {assessment.minutes} min [{assessment.rating}]"
        if assessment.suggestion:
            line += f" - {assessment.suggestion}"
        print(line)


async def _plan(args: argparse.Namespace) -> Optional[RouteData]:
    suggested: List[Location] = await suggest_stopovers(
        args.origin, args.destination, args.api_key, args.max_stopovers
    )
    _print_stopovers(suggested)
    stopovers = [Stopover(loc, rest_duration_minutes=args.rest) for loc in suggested]
    route = await compute_route_data(
        args.origin, args.destination, stopovers, args.api_key
    )
    if route is not None:
        _print_route(route)
    return route


async def _simulate(args: argparse.Namespace) -> int:
    route = await _plan(args)
    if route is None:
        return 1
    if route.duration <= 0:
        logging.error("Route reports no travel time; nothing to simulate")
        return 1
    stops = route.stopovers or []
    session = JourneySession.for_stopovers(
        route.duration,
        stops,
        stopover_progress_positions(route),
        on_rest_start=lambda index, minutes: print(
            f"Rest at stop {index + 1} for {minutes:g} min"
        ),
        on_complete=lambda: print("Arrived"),
    )
    await run_journey(session, interval=1.0 / max(args.speedup, 1.0))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="focus-route",
        description="Split a drive into focus-sized segments separated by rest stops.",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--api-key", default=GOOGLE_MAPS_API_KEY)
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("suggest", "Suggest stopovers between origin and destination"),
        ("plan", "Suggest stopovers and rate the resulting segments"),
        ("simulate", "Plan a route and run the journey timer"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--origin", type=parse_location, required=True)
        cmd.add_argument("--destination", type=parse_location, required=True)
        cmd.add_argument("--max-stopovers", type=int)
        cmd.add_argument(
            "--rest", type=float, default=5.0, help="Rest minutes per stop (default: 5)"
        )
        if name == "simulate":
            cmd.add_argument(
                "--speedup",
                type=float,
                default=60.0,
                help="Simulated seconds per real second (default: 60)",
            )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)
    if not args.api_key:
        logging.error("GOOGLE_MAPS_API_KEY is not set")
        return 2

    if args.command == "suggest":
        stopovers = asyncio.run(
            suggest_stopovers(
                args.origin, args.destination, args.api_key, args.max_stopovers
            )
        )
        _print_stopovers(stopovers)
        return 0
    if args.command == "plan":
        return 0 if asyncio.run(_plan(args)) is not None else 1
    return asyncio.run(_simulate(args))


if __name__ == "__main__":
    raise SystemExit(main())
