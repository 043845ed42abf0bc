"""Roads API speed-limit sampling along a decoded route path."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from ..config import (
    FALLBACK_SPEED_MPS,
    MAX_SPEED_LIMIT_POINTS_PER_REQUEST,
    MPS_PER_KPH,
    MPS_PER_MPH,
    SPEED_LIMITS_API_URL,
)
from ..errors import OracleError
from ..models import GeoPoint
from .resources import MapsResourceAPI

LOGGER = logging.getLogger(__name__)


def convert_speed_limit_to_mps(value: Any, units: Optional[str]) -> Optional[float]:
    """Convert a Roads API speed limit to metres/second (None when unusable)."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    if units == "MPH":
        return float(value) * MPS_PER_MPH
    return float(value) * MPS_PER_KPH


def _chunk_starts(count: int, chunk_size: int) -> range:
    # Consecutive chunks share one point so every sub-segment is covered.
    step = max(chunk_size - 1, 1)
    return range(0, count, step)


def _apply_chunk(
    payload: Any, offset: int, samples: List[Optional[float]]
) -> None:
    if not isinstance(payload, dict):
        return
    by_place: Dict[str, float] = {}
    for limit in payload.get("speedLimits") or []:
        converted = convert_speed_limit_to_mps(
            (limit or {}).get("speedLimit"), (limit or {}).get("units")
        )
        place_id = (limit or {}).get("placeId")
        if converted is not None and place_id:
            by_place[place_id] = converted
    for snapped in payload.get("snappedPoints") or []:
        original_index = (snapped or {}).get("originalIndex")
        place_id = (snapped or {}).get("placeId")
        if not isinstance(original_index, int) or place_id not in by_place:
            continue
        global_index = offset + original_index
        if 0 <= global_index < len(samples):
            samples[global_index] = by_place[place_id]


class SpeedLimitsAPI:
    """Batched speed-limit lookups for a single API key."""

    def __init__(self, api_key: str, resources: MapsResourceAPI) -> None:
        self._api_key = api_key
        self._resources = resources

    def speed_limits_for_path(
        self,
        points: Sequence[GeoPoint],
        *,
        timeout: Optional[float] = None,
        chunk_size: int = MAX_SPEED_LIMIT_POINTS_PER_REQUEST,
    ) -> List[float]:
        """Return one speed sample (m/s) per point, or [] when no data came back.

        Chunks that fail are logged and skipped; points without a usable
        limit default to ``FALLBACK_SPEED_MPS``.
        """

        if not points:
            return []
        samples: List[Optional[float]] = [None] * len(points)
        for start in _chunk_starts(len(points), chunk_size):
            chunk = points[start : start + chunk_size]
            if len(chunk) < 2:
                continue
            params = {
                "path": "|".join(f"{p.lat},{p.lng}" for p in chunk),
                "units": "KPH",
                "key": self._api_key,
            }
            try:
                payload = self._resources.request_json(
                    "GET",
                    SPEED_LIMITS_API_URL,
                    "speedLimits",
                    params=params,
                    timeout=timeout,
                )
            except OracleError as exc:
                LOGGER.warning(
                    "Speed limit chunk starting at %d failed: %s", start, exc
                )
                continue
            _apply_chunk(payload, start, samples)

        if not any(value is not None for value in samples):
            return []
        return [
            value if value is not None and value > 0 else FALLBACK_SPEED_MPS
            for value in samples
        ]
