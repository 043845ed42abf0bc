"""Shared HTTP response helpers for Google Maps Platform interactions."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from ..errors import OracleError

LOGGER = logging.getLogger(__name__)

__all__ = [
    "classify_response_status",
    "extract_error",
]


def classify_response_status(
    response: requests.Response,
    context: str,
    *,
    attempt: int,
    backoff: float,
    can_retry: bool,
) -> Tuple[str, Optional[Exception]]:
    """Return action for a response status: ok, retry, or raise."""

    status = response.status_code
    if 200 <= status < 300:
        return "ok", None

    detail = extract_error(response)

    def with_detail(message: str) -> str:
        return f"{message} | {detail}" if detail else message

    if status == 429 and can_retry:
        LOGGER.warning(
            "%s rate limited (429) attempt=%s; sleeping %.1fs",
            context,
            attempt,
            backoff,
        )
        return "retry", None

    if 500 <= status < 600 and can_retry:
        LOGGER.warning(
            "%s; retrying in %.1fs",
            with_detail(f"{context} server error {status}"),
            backoff,
        )
        return "retry", None

    if status in (401, 403):
        message = with_detail(f"{context} rejected the API key (status {status})")
        LOGGER.warning(message)
        return "raise", OracleError(message)

    message = with_detail(f"{context} request failed (status {status})")
    LOGGER.error(message)
    return "raise", OracleError(message)


def extract_error(resp: Optional[requests.Response]) -> Optional[str]:
    """Return compact string with Google error info (status + message) if present."""

    if resp is None:
        return None
    data = _safe_json(resp)
    if data is None:
        return _extract_error_text(resp)
    if not isinstance(data, dict):
        return None
    parts = _collect_error_parts(data)
    return " | ".join(parts) if parts else None


def _safe_json(resp: requests.Response) -> Optional[Any]:
    """Safely parse JSON; return None if parsing fails."""

    try:
        return resp.json()
    except ValueError as exc:  # requests' JSONDecodeError subclasses ValueError
        LOGGER.debug(
            "Failed to decode JSON from %s: %s", getattr(resp, "url", "?"), exc
        )
        return None


def _extract_error_text(resp: requests.Response) -> Optional[str]:
    """Best-effort plain-text extraction when JSON parsing fails."""

    text = getattr(resp, "text", "")
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    return (trimmed[:297] + "...") if len(trimmed) > 300 else trimmed


def _collect_error_parts(data: Dict[str, Any]) -> List[str]:
    """Build error snippets from the standard Google API error envelope.

    Handles both ``{"error": {"status", "message"}}`` (Routes/Roads) and
    ``{"status", "error_message"}`` (Geocoding).
    """

    parts: List[str] = []
    error = data.get("error")
    if isinstance(error, dict):
        status = error.get("status")
        message = error.get("message")
        if status:
            parts.append(str(status))
        if message:
            parts.append(str(message))
        return parts
    status = data.get("status")
    if status and status != "OK":
        parts.append(str(status))
    message = data.get("error_message")
    if message:
        parts.append(str(message))
    return parts
