"""
HTTP Client

Thin requests-based client used by the vault CLI to talk to the server.
"""

from __future__ import annotations

import json as _json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

import requests


logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """
    Response from an HTTP request.
    """
    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Get response content as text."""
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parse response as JSON."""
        return _json.loads(self.content)

    def raise_for_status(self) -> None:
        """Raise exception if status is not 2xx."""
        if not self.ok:
            raise HttpError(
                f"HTTP {self.status_code}",
                status_code=self.status_code,
                response=self,
            )


class HttpError(Exception):
    """HTTP request error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[HttpResponse] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class HttpClient:
    """
    HTTP client with a base URL and connection-level retries.

    Usage:
        client = HttpClient(base_url="http://127.0.0.1:3000")

        response = client.get("/health")
        if response.ok:
            data = response.json()
    """

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout: float = 30.0,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        default_headers: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            base_url: Prefix for relative request paths
            timeout: Default request timeout in seconds
            max_retries: Extra attempts after a connection error or timeout
            retry_delay: Seconds between attempts
            default_headers: Headers to include in all requests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.default_headers = default_headers or {}
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        """Lazy-create the requests session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.default_headers)
        return self._session

    def _url(self, url: str) -> str:
        if url.startswith(("http://", "https://")) or not self.base_url:
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        Make an HTTP request.

        HTTP error statuses are returned, not raised; only transport
        failures (after retries) raise HttpError.

        Returns:
            HttpResponse with status, content, and headers
        """
        session = self._get_session()
        effective_timeout = timeout or self.timeout
        full_url = self._url(url)

        attempt = 0
        while True:
            try:
                response = session.request(
                    method=method,
                    url=full_url,
                    json=json,
                    timeout=effective_timeout,
                )
                break
            except (requests.ConnectionError, requests.Timeout) as e:
                if attempt >= self.max_retries:
                    raise HttpError(str(e)) from e
                attempt += 1
                logger.warning(
                    f"{method} {full_url} failed ({e}); retry {attempt}/{self.max_retries}"
                )
                time.sleep(self.retry_delay)
            except requests.RequestException as e:
                raise HttpError(str(e)) from e

        logger.debug(f"{method} {full_url} -> {response.status_code}")
        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            url=str(response.url),
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )

    def get(self, url: str, *, timeout: Optional[float] = None) -> HttpResponse:
        """Make a GET request."""
        return self.request("GET", url, timeout=timeout)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
