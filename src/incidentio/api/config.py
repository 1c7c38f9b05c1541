"""Client configuration — credentials, base URL, timeout, and debug toggle."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://api.incident.io"
DEFAULT_TIMEOUT = 10.0

_TRUTHY = ("1", "true", "yes")


class ClientConfig(BaseModel):
    """Configuration for the incident.io API client. Immutable once built.

    When debug is set, every request and response is logged at DEBUG level on
    the "incidentio.api.transport" logger. Library users must configure logging
    (e.g. incidentio.logging.configure_logging(logging.DEBUG)) to see them.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    debug: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("api_key")
    @classmethod
    def _api_key_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("api_key must not be empty")
        return v

    @classmethod
    def from_env(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        debug: bool | None = None,
        timeout: float | None = None,
    ) -> ClientConfig:
        """Load config, preferring explicit arguments over environment variables.

        Environment variables:
            INCIDENT_IO_API_KEY: API bearer token (required if api_key is not given).
            INCIDENT_IO_BASE_URL: Base URL override, e.g. for a mock server.
            INCIDENT_IO_DEBUG: Dump full requests/responses when "1", "true" or "yes".
            INCIDENT_IO_TIMEOUT: Request timeout in seconds.

        Raises:
            ValueError: If no API key is available or a value is invalid.
        """
        key = api_key or os.environ.get("INCIDENT_IO_API_KEY", "")
        if not key:
            raise ValueError("INCIDENT_IO_API_KEY environment variable is required")

        url = base_url or os.environ.get("INCIDENT_IO_BASE_URL", "") or DEFAULT_BASE_URL

        if debug is None:
            debug = os.environ.get("INCIDENT_IO_DEBUG", "").lower() in _TRUTHY

        if timeout is None:
            raw_timeout = os.environ.get("INCIDENT_IO_TIMEOUT", "")
            try:
                timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
            except ValueError as e:
                raise ValueError(f"Invalid INCIDENT_IO_TIMEOUT: {raw_timeout}") from e

        return cls(api_key=key, base_url=url, debug=debug, timeout=timeout)
