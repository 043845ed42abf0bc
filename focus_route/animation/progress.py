"""Map journey progress onto a route position and animate the marker.

Progress is a fraction of the total travel time. With speed segments the
marker covers more distance per second on fast stretches and less on slow
ones; without them it moves at constant speed.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from typing import Awaitable, Callable, Optional, Sequence

from ..config import (
    ANIMATION_FRAME_INTERVAL_SECONDS,
    ANIMATION_TRANSITION_SECONDS,
    HEADING_LOOKAHEAD_PROGRESS,
)
from ..geometry.distance import bearing_deg
from ..geometry.interpolation import point_at_distance
from ..models import GeoPoint, MarkerFrame, RouteData, SpeedSegment
from ..utils import clamp
from .speed_segments import total_duration

LOGGER = logging.getLogger(__name__)

Easing = Callable[[float], float]
FrameCallback = Callable[[MarkerFrame], None]


def linear(t: float) -> float:
    return t


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def progress_to_distance(
    progress: float,
    speed_segments: Optional[Sequence[SpeedSegment]],
    total_distance: float,
) -> float:
    """Convert a progress fraction into metres travelled along the route."""

    progress = clamp(progress, 0.0, 1.0)
    if not speed_segments:
        return progress * total_distance

    elapsed = progress * total_duration(speed_segments)
    accumulated = 0.0
    distance = 0.0
    for segment in speed_segments:
        if accumulated + segment.duration >= elapsed:
            return segment.start_distance + (elapsed - accumulated) * segment.speed
        accumulated += segment.duration
        distance = segment.end_distance
    return distance


def position_at_progress(route: RouteData, progress: float) -> GeoPoint:
    """Return the interpolated marker position at ``progress``."""

    target = progress_to_distance(
        progress, route.speed_segments, route.total_path_distance
    )
    return point_at_distance(route.polyline, route.cumulative_distances, target)


def heading_at_progress(
    route: RouteData,
    progress: float,
    epsilon: float = HEADING_LOOKAHEAD_PROGRESS,
) -> Optional[float]:
    """Return the travel bearing at ``progress``, or None when stationary."""

    here = position_at_progress(route, progress)
    ahead = position_at_progress(route, min(progress + epsilon, 1.0))
    if here == ahead:
        return None
    return bearing_deg(here, ahead)


class AnimatorState(enum.Enum):
    IDLE = "idle"
    ANIMATING = "animating"


class ProgressAnimator:
    """Smooths once-per-second progress updates into per-frame marker moves.

    Each :meth:`set_target` call cancels the in-flight transition and starts
    a new one from the currently displayed progress, so at most one
    animation task is alive at a time. Must be driven from a running event
    loop.
    """

    def __init__(
        self,
        on_frame: FrameCallback,
        route: Optional[RouteData] = None,
        *,
        transition_seconds: float = ANIMATION_TRANSITION_SECONDS,
        frame_interval: float = ANIMATION_FRAME_INTERVAL_SECONDS,
        easing: Easing = linear,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._on_frame = on_frame
        self._route = route
        self._transition = max(transition_seconds, 0.0)
        self._frame_interval = max(frame_interval, 0.0)
        self._easing = easing
        self._clock = clock
        self._sleep = sleep
        self._task: Optional[asyncio.Task[None]] = None
        self._displayed = 0.0
        self._target = 0.0
        self._state = AnimatorState.IDLE
        self.heading: Optional[float] = None

    @property
    def state(self) -> AnimatorState:
        return self._state

    @property
    def displayed_progress(self) -> float:
        return self._displayed

    @property
    def target_progress(self) -> float:
        return self._target

    @property
    def task(self) -> Optional[asyncio.Task[None]]:
        return self._task

    def set_route(self, route: Optional[RouteData]) -> None:
        """Swap in a freshly computed route; the animator returns to idle."""

        self._route = route
        self.reset()

    def set_target(self, progress: float) -> Optional[asyncio.Task[None]]:
        """Begin a transition from the displayed progress to ``progress``."""

        if self._route is None or not self._route.polyline:
            LOGGER.debug("Ignoring progress %.4f without a route", progress)
            return None
        if progress <= 0:
            self.reset()
            return None

        self._cancel()
        start = self._displayed
        self._target = clamp(progress, 0.0, 1.0)
        self._state = AnimatorState.ANIMATING
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(start, self._target))
        return self._task

    def reset(self) -> None:
        """Cancel any transition, hide the marker and return to idle."""

        self._cancel()
        self._displayed = 0.0
        self._target = 0.0
        self.heading = None
        if self._state is AnimatorState.ANIMATING:
            self._on_frame(MarkerFrame(0.0, None, None, visible=False))
        self._state = AnimatorState.IDLE

    async def wait(self) -> None:
        """Wait for the current transition (if any) to finish."""

        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    def frame_at(self, progress: float) -> MarkerFrame:
        """Compute the marker frame for ``progress`` without animating."""

        if self._route is None:
            raise RuntimeError("No route loaded")
        position = position_at_progress(self._route, progress)
        heading = heading_at_progress(self._route, progress)
        return MarkerFrame(progress, position, heading, visible=True)

    def _cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _emit(self, progress: float) -> None:
        frame = self.frame_at(progress)
        self._displayed = progress
        if frame.heading is not None:
            self.heading = frame.heading
        else:
            frame.heading = self.heading
        self._on_frame(frame)

    async def _run(self, start: float, target: float) -> None:
        started = self._clock()
        while True:
            if self._transition > 0:
                fraction = min((self._clock() - started) / self._transition, 1.0)
            else:
                fraction = 1.0
            self._emit(start + (target - start) * self._easing(fraction))
            if fraction >= 1.0:
                return
            await self._sleep(self._frame_interval)
