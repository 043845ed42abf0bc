"""Central error types used across the application."""

from __future__ import annotations


class FocusRouteError(RuntimeError):
    """Base error for route planning failures."""


class DecodeError(FocusRouteError, ValueError):
    """Raised when an encoded polyline is truncated or malformed."""


class OracleError(FocusRouteError):
    """Raised when a Google Maps Platform call fails (status or transport)."""


class DataShapeError(OracleError):
    """Raised when an API response lacks the fields a caller relies on."""


__all__ = [
    "FocusRouteError",
    "DecodeError",
    "OracleError",
    "DataShapeError",
]
