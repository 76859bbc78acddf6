"""
Vault Client

Client side of the vault protocol on top of core.http.HttpClient.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

from pydantic import ValidationError

from core.config.runtime import RuntimeConfig
from core.http import HttpClient, HttpError, HttpResponse
from core.schemas.errors import TransportException
from core.schemas.transport import FileResponse, UploadRequest, UploadResponse


logger = logging.getLogger(__name__)


def _error_message(response: HttpResponse) -> str:
    """Best-effort message from an ErrorResponse body."""
    try:
        body = response.json()
        return body["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.text[:200] or f"HTTP {response.status_code}"


class VaultClient:
    """
    Talks to a vault server.

    Usage:
        client = VaultClient(HttpClient(base_url="http://127.0.0.1:3000"))
        client.upload_file("a.txt", b"hello")
        response = client.fetch_file("a.txt")
    """

    def __init__(self, http: HttpClient) -> None:
        self.http = http

    def _call(self, method: str, path: str, **kwargs) -> HttpResponse:
        try:
            response = self.http.request(method, path, **kwargs)
        except HttpError as e:
            raise TransportException(f"{method} {path} failed: {e}") from e
        if not response.ok:
            raise TransportException(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )
        return response

    def health(self) -> bool:
        try:
            return bool(self._call("GET", "/health").json().get("ok"))
        except (TransportException, ValueError):
            return False

    def upload_file(self, filename: str, content: bytes) -> UploadResponse:
        """Upload one file (base64 on the wire)."""
        request = UploadRequest.from_bytes(filename, content)
        response = self._call("POST", "/upload", json=request.model_dump())
        logger.info(f"Uploaded {filename} ({len(content)} bytes)")
        return UploadResponse.model_validate(response.json())

    def fetch_file(self, filename: str) -> FileResponse:
        """
        Fetch a file and its proof.

        Raises:
            TransportException: On HTTP failure or an unparseable body
        """
        response = self._call("GET", f"/file/{quote(filename, safe='')}")
        try:
            return FileResponse.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            raise TransportException(f"Malformed file response for {filename}: {e}") from e

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "VaultClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def create_client(config: RuntimeConfig, server_url: Optional[str] = None) -> VaultClient:
    """Build a VaultClient from configuration."""
    http = HttpClient(
        base_url=server_url or config.client.server_url,
        timeout=config.http.timeout,
        max_retries=config.http.max_retries,
        retry_delay=config.http.retry_delay,
        default_headers={"User-Agent": config.http.user_agent},
    )
    return VaultClient(http)
