"""Focus journey timer: travel progress with rest breaks at stopovers."""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Set

from .config import DEFAULT_REST_MINUTES, STOPOVER_TRIGGER_TOLERANCE
from .models import Stopover

LOGGER = logging.getLogger(__name__)

ProgressListener = Callable[[float], object]
RestListener = Callable[[int, float], None]


class JourneyStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    RESTING = "resting"
    COMPLETED = "completed"


class JourneySession:
    """Advance journey progress one second per :meth:`tick`.

    ``stopover_positions`` are progress fractions (see
    :func:`focus_route.services.stopover_progress_positions`). When progress
    first enters ``[position, position + tolerance)`` the session rests for
    that stopover's rest duration before travel continues.
    """

    def __init__(
        self,
        total_seconds: float,
        stopover_positions: Sequence[float] = (),
        rest_minutes: Sequence[float] = (),
        *,
        on_progress: Optional[ProgressListener] = None,
        on_rest_start: Optional[RestListener] = None,
        on_rest_end: Optional[Callable[[int], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
        tolerance: float = STOPOVER_TRIGGER_TOLERANCE,
    ) -> None:
        if total_seconds <= 0:
            raise ValueError("Journey duration must be positive")
        self.total_seconds = float(total_seconds)
        self.stopover_positions: List[float] = list(stopover_positions)
        self.rest_minutes: List[float] = list(rest_minutes)
        self.tolerance = tolerance
        self._on_progress = on_progress
        self._on_rest_start = on_rest_start
        self._on_rest_end = on_rest_end
        self._on_complete = on_complete

        self.status = JourneyStatus.IDLE
        self.elapsed = 0
        self.rest_remaining = 0
        self.resting_at: Optional[int] = None
        self._completed_stops: Set[int] = set()

    @classmethod
    def for_stopovers(
        cls,
        total_seconds: float,
        stopovers: Sequence[Stopover],
        positions: Sequence[float],
        **kwargs,
    ) -> "JourneySession":
        return cls(
            total_seconds,
            positions,
            [stop.rest_duration_minutes for stop in stopovers],
            **kwargs,
        )

    @property
    def progress(self) -> float:
        return min(self.elapsed / self.total_seconds, 1.0)

    @property
    def completed_stopovers(self) -> Set[int]:
        return set(self._completed_stops)

    @property
    def remaining_seconds(self) -> float:
        return max(self.total_seconds - self.elapsed, 0.0)

    def start(self) -> None:
        self.elapsed = 0
        self.rest_remaining = 0
        self.resting_at = None
        self._completed_stops.clear()
        self.status = JourneyStatus.RUNNING
        LOGGER.info("Journey started (%.0f s)", self.total_seconds)
        self._notify(0.0)

    def pause(self) -> None:
        if self.status is JourneyStatus.RUNNING:
            self.status = JourneyStatus.PAUSED

    def resume(self) -> None:
        if self.status is JourneyStatus.PAUSED:
            self.status = JourneyStatus.RUNNING

    def reset(self) -> None:
        self.elapsed = 0
        self.rest_remaining = 0
        self.resting_at = None
        self._completed_stops.clear()
        self.status = JourneyStatus.IDLE
        self._notify(0.0)

    def skip_rest(self) -> None:
        if self.status is JourneyStatus.RESTING:
            self._finish_rest()

    def rest_duration_minutes(self, index: int) -> float:
        if index < len(self.rest_minutes) and self.rest_minutes[index] > 0:
            return self.rest_minutes[index]
        return DEFAULT_REST_MINUTES

    def tick(self) -> None:
        """Advance one second of travel or rest."""

        if self.status is JourneyStatus.RESTING:
            self.rest_remaining -= 1
            if self.rest_remaining <= 0:
                self._finish_rest()
            return
        if self.status is not JourneyStatus.RUNNING:
            return

        self.elapsed += 1
        if self.elapsed >= self.total_seconds:
            self.elapsed = int(self.total_seconds)
            self.status = JourneyStatus.COMPLETED
            LOGGER.info("Journey complete")
            self._notify(1.0)
            if self._on_complete is not None:
                self._on_complete()
            return

        progress = self.progress
        self._notify(progress)
        self._check_stopovers(progress)

    def _check_stopovers(self, progress: float) -> None:
        for index, position in enumerate(self.stopover_positions):
            if not position or index in self._completed_stops:
                continue
            if position <= progress < position + self.tolerance:
                self._completed_stops.add(index)
                self._start_rest(index)
                return

    def _start_rest(self, index: int) -> None:
        minutes = self.rest_duration_minutes(index)
        self.status = JourneyStatus.RESTING
        self.resting_at = index
        self.rest_remaining = int(round(minutes * 60))
        LOGGER.info("Resting %.1f min at stop %d", minutes, index + 1)
        if self._on_rest_start is not None:
            self._on_rest_start(index, minutes)

    def _finish_rest(self) -> None:
        index = self.resting_at
        self.rest_remaining = 0
        self.resting_at = None
        self.status = JourneyStatus.RUNNING
        if self._on_rest_end is not None and index is not None:
            self._on_rest_end(index)

    def _notify(self, progress: float) -> None:
        if self._on_progress is not None:
            self._on_progress(progress)


async def run_journey(
    session: JourneySession,
    *,
    interval: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> JourneyStatus:
    """Tick ``session`` every ``interval`` seconds until it completes or stops."""

    if session.status is JourneyStatus.IDLE:
        session.start()
    while session.status in (JourneyStatus.RUNNING, JourneyStatus.RESTING):
        await sleep(interval)
        session.tick()
    return session.status
