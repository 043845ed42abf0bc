"""Reverse geocoding with a module-level TTL cache."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Optional, Tuple, Union

from cachetools import TTLCache

from ..config import GEOCODE_API_URL, GEOCODE_CACHE_SIZE, GEOCODE_CACHE_TTL_SECONDS
from ..errors import OracleError
from ..models import GeoPoint, Location
from .resources import MapsResourceAPI

LOGGER = logging.getLogger(__name__)

Coordinate = Union[GeoPoint, Location]
_CacheKey = Tuple[float, float]

# Module-level TTL+LRU cache of formatted addresses.
_address_cache: TTLCache[_CacheKey, str] = TTLCache(
    maxsize=max(1, GEOCODE_CACHE_SIZE), ttl=max(1, GEOCODE_CACHE_TTL_SECONDS)
)
_address_cache_lock = RLock()


def _cache_key(point: Coordinate) -> _CacheKey:
    return (round(point.lat, 6), round(point.lng, 6))


def clear_address_cache() -> None:
    with _address_cache_lock:
        _address_cache.clear()


def fallback_label(index: int, point: Coordinate) -> str:
    """Return the synthetic label used when no address is available."""

    return f"Stop {index + 1} ({point.lat:.4f}, {point.lng:.4f})"


def _formatted_address(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    status = payload.get("status")
    if status and status not in ("OK", "ZERO_RESULTS"):
        detail = payload.get("error_message") or status
        raise OracleError(f"Reverse geocoding failed: {detail}")
    results = payload.get("results") or []
    if not results or not isinstance(results[0], dict):
        return None
    address = results[0].get("formatted_address")
    return str(address) if address else None


class GeocodingAPI:
    """Reverse geocoder for a single API key."""

    def __init__(self, api_key: str, resources: MapsResourceAPI) -> None:
        self._api_key = api_key
        self._resources = resources

    def reverse_geocode(
        self, point: Coordinate, *, timeout: Optional[float] = None
    ) -> Optional[str]:
        """Return the first formatted address for ``point`` or None.

        Raises:
            OracleError: On HTTP failures or a non-OK geocoder status.
        """

        key = _cache_key(point)
        with _address_cache_lock:
            cached = _address_cache.get(key)
        if cached is not None:
            return cached

        payload = self._resources.request_json(
            "GET",
            GEOCODE_API_URL,
            "reverseGeocode",
            params={"latlng": f"{point.lat},{point.lng}", "key": self._api_key},
            timeout=timeout,
        )
        address = _formatted_address(payload)
        if address:
            with _address_cache_lock:
                _address_cache[key] = address
        return address

    def label_for(
        self, index: int, point: Coordinate, *, timeout: Optional[float] = None
    ) -> Location:
        """Reverse geocode ``point`` into a Location, falling back to a label."""

        try:
            address = self.reverse_geocode(point, timeout=timeout)
        except OracleError as exc:
            LOGGER.warning("Reverse geocoding failed for stop %d: %s", index + 1, exc)
            address = None
        return Location(
            lat=point.lat,
            lng=point.lng,
            address=address or fallback_label(index, point),
        )
