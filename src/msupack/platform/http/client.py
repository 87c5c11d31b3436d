"""Where: src/msupack/platform/http/client.py
What: HTTP adapter with retry logic for the remote sprite catalog.
Why: Decouple network concerns from catalog parsing and caching.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Protocol

import requests

from msupack.config.settings import HTTP_TIMEOUT_SECONDS, HTTP_USER_AGENT
from msupack.platform.logging import logger


@dataclass(slots=True)
class HTTPResult:
    """Represent an HTTP response payload relevant to catalog clients."""

    status: int
    headers: dict[str, str]
    content: bytes | None

    @property
    def ok(self) -> bool:
        return self.content is not None and 200 <= self.status < 300

    def json(self) -> Any:
        """Decode the body as JSON; raises ``ValueError`` on malformed payloads."""

        if self.content is None:
            raise ValueError(f"No response body (status={self.status})")
        return json.loads(self.content.decode("utf-8"))


class HTTPClient(Protocol):
    """Protocol for HTTP clients able to fetch raw payloads."""

    def get(self, url: str) -> HTTPResult:
        ...


class RequestsHTTPClient:
    """Perform GET requests through ``requests`` with a single retry."""

    _MAX_ATTEMPTS: int = 2

    def __init__(
        self,
        *,
        user_agent: str = HTTP_USER_AGENT,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._session: requests.Session = session or requests.Session()
        self._timeout: float = timeout
        self._headers: dict[str, str] = {"User-Agent": user_agent}

    def get(self, url: str) -> HTTPResult:
        for attempt in range(self._MAX_ATTEMPTS):
            try:
                response = self._session.get(url, headers=self._headers, timeout=self._timeout)
            except requests.RequestException as exc:
                logger.warning("HTTP request to %s failed: %s", url, exc)
                return HTTPResult(status=0, headers={}, content=None)

            status = int(response.status_code)
            headers = {str(key): str(value) for key, value in response.headers.items()}

            if self._should_retry(status):
                if attempt < self._MAX_ATTEMPTS - 1:
                    delay = self._retry_delay(headers)
                    logger.warning(
                        "Rate-limited/server error from %s (status=%s). Retrying in %.1fs.",
                        url,
                        status,
                        delay,
                    )
                    time.sleep(delay)
                    continue
                logger.warning("Giving up on %s (status=%s)", url, status)
                return HTTPResult(status=status, headers=headers, content=None)

            if not 200 <= status < 300:
                logger.warning("HTTP error from %s: status=%s", url, status)
                return HTTPResult(status=status, headers=headers, content=None)

            return HTTPResult(status=status, headers=headers, content=response.content)

        return HTTPResult(status=0, headers={}, content=None)

    @staticmethod
    def _should_retry(status: int) -> bool:
        return status == 429 or status >= 500

    @staticmethod
    def _retry_delay(headers: dict[str, str]) -> float:
        retry_after = _parse_retry_after(headers.get("Retry-After"))
        return max(1.0, min(10.0, retry_after or 1.0))


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    stripped = value.strip()
    if stripped.isdigit():
        return float(int(stripped))
    try:
        dt = parsedate_to_datetime(stripped)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = (dt - datetime.now(timezone.utc)).total_seconds()
    return max(0.0, delta)


__all__ = ["HTTPClient", "HTTPResult", "RequestsHTTPClient"]
