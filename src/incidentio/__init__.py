"""incidentio — typed client and resource managers for the incident.io API."""

from incidentio.api import (
    APIError,
    CallerError,
    Client,
    ClientConfig,
    DecodeError,
    IncidentIOError,
    TransportError,
    is_error_status,
)

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "CallerError",
    "Client",
    "ClientConfig",
    "DecodeError",
    "IncidentIOError",
    "TransportError",
    "__version__",
    "is_error_status",
]
