"""HTTP transport — authenticated request execution against the incident.io API."""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from incidentio.api.config import ClientConfig
from incidentio.api.errors import TransportError

logger = logging.getLogger(__name__)


def join_url(base_url: str, path: str) -> str:
    """Join base URL and path with exactly one separating slash."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def _dump_headers(headers: httpx.Headers) -> str:
    lines = []
    for name, value in headers.items():
        if name.lower() == "authorization":
            value = "Bearer ***"
        lines.append(f"{name}: {value}")
    return "\n".join(lines)


class Transport:
    """Owns base URL, bearer credential and a shared httpx.Client.

    The underlying httpx.Client is safe for concurrent use from multiple
    threads; Transport holds no other mutable state.

    Debug dumps go to the "incidentio.api.transport" logger at DEBUG level,
    so they only show up once logging is configured, e.g. with
    incidentio.logging.configure_logging(logging.DEBUG).
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Transport.

        Args:
            config: ClientConfig with API key, base URL, timeout and debug flag.
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.
        """
        self._config = config
        self._client = httpx.Client(
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def url_for(self, path: str) -> str:
        return join_url(self._config.base_url, path)

    def execute(self, method: str, path: str, body: bytes | None = None) -> tuple[int, bytes]:
        """Send one authenticated request and return its status and raw body.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: API path, joined to the configured base URL.
            body: Optional JSON-encoded request body.

        Returns:
            Tuple of (status code, response bytes).

        Raises:
            TransportError: On connection, timeout or body read failure. Never retried.
        """
        headers = {"Authorization": f"Bearer {self._config.api_key}"}
        if body is not None:
            headers["Content-Type"] = "application/json"

        request = self._client.build_request(
            method, self.url_for(path), headers=headers, content=body
        )

        if self._config.debug:
            logger.debug(
                "### REQUEST:\n%s %s\n%s\n\n%s\n### /REQUEST",
                request.method,
                request.url,
                _dump_headers(request.headers),
                (body or b"").decode("utf-8", errors="replace"),
            )

        try:
            response = self._client.send(request)
        except httpx.RequestError as e:
            raise TransportError(f"{method} {request.url} failed: {e}") from e

        if self._config.debug:
            logger.debug(
                "### RESPONSE:\n%s %s\n%s\n\n%s\n### /RESPONSE",
                response.status_code,
                response.reason_phrase,
                _dump_headers(response.headers),
                response.content.decode("utf-8", errors="replace"),
            )

        return response.status_code, response.content

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
