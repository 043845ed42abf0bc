"""Marker animation: speed profiles, progress interpolation and camera state."""

from .map_view import (
    CenterOn,
    EngageFollow,
    MapViewState,
    ReleaseFollow,
    SetHeading,
    SetTilt,
    follow_marker,
    reduce_map_view,
)
from .progress import (
    AnimatorState,
    ProgressAnimator,
    ease_in_out_cubic,
    heading_at_progress,
    linear,
    position_at_progress,
    progress_to_distance,
)
from .speed_segments import (
    speed_segments_from_speed_limits,
    speed_segments_from_steps,
    total_duration,
)

__all__ = [
    "CenterOn",
    "EngageFollow",
    "MapViewState",
    "ReleaseFollow",
    "SetHeading",
    "SetTilt",
    "follow_marker",
    "reduce_map_view",
    "AnimatorState",
    "ProgressAnimator",
    "ease_in_out_cubic",
    "heading_at_progress",
    "linear",
    "position_at_progress",
    "progress_to_distance",
    "speed_segments_from_speed_limits",
    "speed_segments_from_steps",
    "total_duration",
]
