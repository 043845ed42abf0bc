"""Generic JSON request helper with retry/backoff for Maps endpoints."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import requests

from ..config import MAPS_BACKOFF_MAX_SECONDS, MAPS_MAX_RETRIES, REQUEST_TIMEOUT
from ..errors import OracleError
from .response_handling import classify_response_status
from .session import get_default_session

LOGGER = logging.getLogger(__name__)


class MapsResourceAPI:
    """Encapsulates Google Maps JSON requests with retries and rich errors."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        max_retries: int = MAPS_MAX_RETRIES,
    ) -> None:
        self._session = session or get_default_session()
        self._timeout = timeout
        self._max_retries = max(1, max_retries)

    @property
    def timeout(self) -> float:
        return self._timeout

    def request_json(
        self,
        method: str,
        url: str,
        context: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Issue the request and return the decoded JSON body.

        Raises:
            OracleError: On transport failures, non-2xx statuses once retries
                are exhausted, or non-JSON payloads.
        """

        effective_timeout = self._timeout if timeout is None else timeout
        backoff = 1.0
        attempt = 0
        while True:
            attempt += 1
            can_retry = attempt < self._max_retries
            LOGGER.debug("%s %s attempt=%s", method, context, attempt)
            try:
                response = self._session.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    headers=headers,
                    timeout=effective_timeout,
                )
            except requests.RequestException as exc:
                if can_retry:
                    LOGGER.warning(
                        "%s network error attempt=%s err=%s; retrying in %.1fs",
                        context,
                        attempt,
                        exc.__class__.__name__,
                        backoff,
                    )
                    time.sleep(backoff)
                    backoff = min(backoff * 2, MAPS_BACKOFF_MAX_SECONDS)
                    continue
                message = f"{context} network error: {exc.__class__.__name__}"
                LOGGER.error(message)
                raise OracleError(message) from exc

            action, error = classify_response_status(
                response,
                context,
                attempt=attempt,
                backoff=backoff,
                can_retry=can_retry,
            )
            if action == "retry":
                time.sleep(backoff)
                backoff = min(backoff * 2, MAPS_BACKOFF_MAX_SECONDS)
                continue
            if action == "raise" and error is not None:
                raise error

            try:
                return response.json()
            except ValueError as exc:
                message = f"{context} returned non-JSON payload"
                LOGGER.error(message)
                raise OracleError(message) from exc
