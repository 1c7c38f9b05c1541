"""incidentio API — typed REST client for incident.io resources."""

from incidentio.api.config import ClientConfig
from incidentio.api.errors import (
    APIError,
    CallerError,
    DecodeError,
    ErrorDetail,
    ErrorSource,
    IncidentIOError,
    TransportError,
    decode_error,
    is_error_status,
)
from incidentio.api.models import (
    CustomField,
    CustomFieldMetadata,
    CustomFieldOption,
    CustomFieldOptionMetadata,
    FieldRequirement,
    FieldType,
    IncidentRole,
    IncidentRoleMetadata,
    Severity,
    SeverityMetadata,
    parse_field_requirement,
    parse_field_type,
)
from incidentio.api.operations import ResourceKind
from incidentio.api.resources import (
    Client,
    CustomFieldOptions,
    CustomFields,
    IncidentRoles,
    ResourceAccessor,
    Severities,
)
from incidentio.api.transport import Transport, join_url

__all__ = [
    "APIError",
    "CallerError",
    "Client",
    "ClientConfig",
    "CustomField",
    "CustomFieldMetadata",
    "CustomFieldOption",
    "CustomFieldOptionMetadata",
    "CustomFieldOptions",
    "CustomFields",
    "DecodeError",
    "ErrorDetail",
    "ErrorSource",
    "FieldRequirement",
    "FieldType",
    "IncidentIOError",
    "IncidentRole",
    "IncidentRoleMetadata",
    "IncidentRoles",
    "ResourceAccessor",
    "ResourceKind",
    "Severities",
    "Severity",
    "SeverityMetadata",
    "Transport",
    "TransportError",
    "decode_error",
    "is_error_status",
    "join_url",
    "parse_field_requirement",
    "parse_field_type",
]
