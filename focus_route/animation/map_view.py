"""Camera state for the map widget, updated only through intents."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from ..config import FOLLOW_TILT, FOLLOW_ZOOM
from ..models import GeoPoint, MarkerFrame


@dataclass(frozen=True, slots=True)
class MapViewState:
    center: Optional[GeoPoint] = None
    zoom: float = 12
    heading: float = 0.0
    tilt: float = 0.0
    following: bool = False


@dataclass(frozen=True, slots=True)
class CenterOn:
    point: GeoPoint


@dataclass(frozen=True, slots=True)
class SetHeading:
    heading: float


@dataclass(frozen=True, slots=True)
class SetTilt:
    tilt: float


@dataclass(frozen=True, slots=True)
class EngageFollow:
    """Start following the marker at ``position`` with the given heading."""

    position: Optional[GeoPoint]
    heading: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ReleaseFollow:
    """Stop following (user dragged/zoomed the map, or the route was cleared)."""


MapIntent = Union[CenterOn, SetHeading, SetTilt, EngageFollow, ReleaseFollow]


def reduce_map_view(state: MapViewState, intent: MapIntent) -> MapViewState:
    """Return the camera state after applying ``intent``."""

    if isinstance(intent, CenterOn):
        return replace(state, center=intent.point)
    if isinstance(intent, SetHeading):
        return replace(state, heading=intent.heading)
    if isinstance(intent, SetTilt):
        return replace(state, tilt=intent.tilt)
    if isinstance(intent, EngageFollow):
        return replace(
            state,
            center=intent.position or state.center,
            zoom=FOLLOW_ZOOM,
            heading=intent.heading if intent.heading is not None else state.heading,
            tilt=FOLLOW_TILT,
            following=True,
        )
    if isinstance(intent, ReleaseFollow):
        if not state.following and state.tilt == 0 and state.heading == 0:
            return state
        return replace(state, heading=0.0, tilt=0.0, following=False)
    raise TypeError(f"Unsupported map intent: {intent!r}")


def follow_marker(state: MapViewState, frame: MarkerFrame) -> MapViewState:
    """Keep the camera on the marker while following; otherwise no-op."""

    if not state.following or not frame.visible or frame.position is None:
        return state
    state = reduce_map_view(state, CenterOn(frame.position))
    if frame.heading is not None:
        state = reduce_map_view(state, SetHeading(frame.heading))
    if state.tilt != FOLLOW_TILT:
        state = reduce_map_view(state, SetTilt(FOLLOW_TILT))
    return state
