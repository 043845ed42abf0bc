"""General utility helpers shared across modules."""

from __future__ import annotations

import math
import re
from typing import Any

_DURATION_RE = re.compile(r"([\d.]+)s")


def parse_duration_seconds(duration: Any) -> int:
    """Parse a Routes API duration string such as ``"1234s"``.

    Fractional values are rounded half-up; missing or malformed values
    parse to 0.
    """

    if not duration or not isinstance(duration, str):
        return 0
    match = _DURATION_RE.search(duration)
    if not match:
        return 0
    try:
        value = float(match.group(1))
    except ValueError:
        return 0
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def format_minutes(seconds: float) -> str:
    """Format seconds as a rounded ``N min`` label."""

    return f"{int(math.floor(seconds / 60 + 0.5))} min"


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)
