"""Rate planned legs against the 20-30 minute focus window."""

from __future__ import annotations

import enum
from typing import List, Optional, Sequence

from .config import (
    MAX_ACCEPTABLE_SEGMENT_SECONDS,
    MAX_IDEAL_SEGMENT_SECONDS,
    MIN_ACCEPTABLE_SEGMENT_SECONDS,
    MIN_IDEAL_SEGMENT_SECONDS,
)
from .models import LegAssessment, RouteLeg


class SegmentRating(enum.Enum):
    IDEAL = "ideal"
    ACCEPTABLE = "acceptable"
    OUT_OF_RANGE = "out_of_range"


def classify_segment(seconds: float) -> SegmentRating:
    if MIN_IDEAL_SEGMENT_SECONDS <= seconds <= MAX_IDEAL_SEGMENT_SECONDS:
        return SegmentRating.IDEAL
    if MIN_ACCEPTABLE_SEGMENT_SECONDS <= seconds <= MAX_ACCEPTABLE_SEGMENT_SECONDS:
        return SegmentRating.ACCEPTABLE
    return SegmentRating.OUT_OF_RANGE


def waypoint_label(index: int, total_legs: int) -> str:
    """Start, Stop N or Destination for waypoint ``index`` of a route."""

    if index == 0:
        return "Start"
    if index == total_legs:
        return "Destination"
    return f"Stop {index}"


def suggestion_for(seconds: float, stop_index: int, total_legs: int) -> Optional[str]:
    """Advice for the waypoint ``stop_index`` that ends a leg, if any is needed."""

    last = stop_index >= total_legs
    if seconds < MIN_ACCEPTABLE_SEGMENT_SECONDS:
        if last:
            return "Consider choosing a destination further away"
        return f"Move Stop {stop_index} further from {waypoint_label(stop_index - 1, total_legs)}"
    if seconds > MAX_ACCEPTABLE_SEGMENT_SECONDS:
        if last:
            return "Consider choosing a closer destination or add a stopover"
        return (
            f"Move Stop {stop_index} closer to {waypoint_label(stop_index - 1, total_legs)}, "
            "or add a stopover between them"
        )
    if seconds < MIN_IDEAL_SEGMENT_SECONDS:
        if last:
            return "Good! Slightly shorter segment - consider moving destination a bit further"
        return f"Good! Consider moving Stop {stop_index} slightly further for ideal 25min"
    if seconds > MAX_IDEAL_SEGMENT_SECONDS:
        if last:
            return "Good! Slightly longer segment - consider moving destination a bit closer"
        return f"Good! Consider moving Stop {stop_index} slightly closer for ideal 25min"
    return None


def assess_legs(legs: Sequence[RouteLeg]) -> List[LegAssessment]:
    total = len(legs)
    assessments: List[LegAssessment] = []
    for index, leg in enumerate(legs):
        assessments.append(
            LegAssessment(
                label=f"{waypoint_label(index, total)} -> {waypoint_label(index + 1, total)}",
                minutes=int(round(leg.duration / 60)),
                rating=classify_segment(leg.duration).value,
                suggestion=suggestion_for(leg.duration, index + 1, total),
            )
        )
    return assessments


def ideal_count(legs: Sequence[RouteLeg]) -> int:
    return sum(1 for leg in legs if classify_segment(leg.duration) is SegmentRating.IDEAL)
