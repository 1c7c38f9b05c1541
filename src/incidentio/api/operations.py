"""Generic CRUD operations shared by every resource kind.

Each operation is a single request/response round trip: compose the path,
serialize the body, compare the status with the verb's expected set, then
decode either the response envelope or the structured error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from incidentio.api.errors import CallerError, DecodeError, decode_error
from incidentio.api.models import (
    CustomField,
    CustomFieldMetadata,
    CustomFieldOption,
    CustomFieldOptionMetadata,
    CustomFieldOptionResponse,
    CustomFieldResponse,
    IncidentRole,
    IncidentRoleMetadata,
    IncidentRoleResponse,
    Severity,
    SeverityMetadata,
    SeverityResponse,
)
from incidentio.api.transport import Transport

logger = logging.getLogger(__name__)

API_PREFIX = "/v1"

STATUS_OK = 200
STATUS_CREATED = 201
STATUS_ACCEPTED = 202
STATUS_NO_CONTENT = 204

FieldsT = TypeVar("FieldsT", bound=BaseModel)
MetadataT = TypeVar("MetadataT", bound=BaseModel)


@dataclass(frozen=True)
class ResourceKind(Generic[FieldsT, MetadataT]):
    """Per-kind endpoint configuration.

    Attributes:
        label: Human readable name used in messages.
        path: URL segment under /v1.
        envelope: Key the API wraps the resource under in responses.
        fields_model: Model of the mutable fields sent on create/update.
        response_model: Model of the full response envelope.
        delete_statuses: Statuses that confirm a successful delete.
    """

    label: str
    path: str
    envelope: str
    fields_model: type[FieldsT]
    response_model: type[BaseModel]
    delete_statuses: frozenset[int] = frozenset({STATUS_NO_CONTENT})

    def collection_path(self) -> str:
        return f"{API_PREFIX}/{self.path}"

    def item_path(self, resource_id: str) -> str:
        # Ids are opaque and must stay inside a single path segment.
        segment = quote(resource_id, safe="")
        if segment in (".", ".."):
            segment = segment.replace(".", "%2E")
        return f"{API_PREFIX}/{self.path}/{segment}"


INCIDENT_ROLES: ResourceKind[IncidentRole, IncidentRoleMetadata] = ResourceKind(
    label="incident role",
    path="incident_roles",
    envelope="incident_role",
    fields_model=IncidentRole,
    response_model=IncidentRoleResponse,
)

# Severities confirm deletion with 202 Accepted instead of 204.
SEVERITIES: ResourceKind[Severity, SeverityMetadata] = ResourceKind(
    label="severity",
    path="severities",
    envelope="severity",
    fields_model=Severity,
    response_model=SeverityResponse,
    delete_statuses=frozenset({STATUS_ACCEPTED}),
)

CUSTOM_FIELDS: ResourceKind[CustomField, CustomFieldMetadata] = ResourceKind(
    label="custom field",
    path="custom_fields",
    envelope="custom_field",
    fields_model=CustomField,
    response_model=CustomFieldResponse,
)

CUSTOM_FIELD_OPTIONS: ResourceKind[CustomFieldOption, CustomFieldOptionMetadata] = ResourceKind(
    label="custom field option",
    path="custom_field_options",
    envelope="custom_field_option",
    fields_model=CustomFieldOption,
    response_model=CustomFieldOptionResponse,
)

FieldsT = TypeVar("FieldsT", bound=BaseModel)
MetadataT = TypeVar("MetadataT", bound=BaseModel)



def _require_id(kind: ResourceKind[Any, Any], resource_id: str, verb: str) -> None:
    if not resource_id:
        raise CallerError(f"You must specify the ID of the {kind.label} to {verb}")


def _encode(kind: ResourceKind[FieldsT, Any], fields: FieldsT) -> bytes:
    if not isinstance(fields, kind.fields_model):
        raise CallerError(
            f"Expected {kind.fields_model.__name__} for {kind.label}, "
            f"got {type(fields).__name__}"
        )
    # Only the mutable fields go on the wire; metadata (id, timestamps) never does.
    include = set(kind.fields_model.model_fields)
    return fields.model_dump_json(include=include).encode("utf-8")


def _decode(kind: ResourceKind[Any, MetadataT], body: bytes) -> MetadataT:
    try:
        envelope = kind.response_model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Malformed {kind.label} response: {e}") from e
    return cast("MetadataT", getattr(envelope, kind.envelope))


def _check(method: str, path: str, status: int, body: bytes, expected: frozenset[int]) -> None:
    if status in expected:
        logger.debug("%s %s -> %d", method, path, status)
        return
    logger.debug(
        "%s %s -> unexpected status %d (expected %s)", method, path, status, sorted(expected)
    )
    raise decode_error(body, status)


def get(
    transport: Transport, kind: ResourceKind[FieldsT, MetadataT], resource_id: str
) -> MetadataT:
    """Fetch one resource by id.

    Raises:
        CallerError: If resource_id is empty (no request is sent).
        TransportError: On network failure.
        APIError: On any status other than 200.
        DecodeError: If the response or error body is malformed.
    """
    _require_id(kind, resource_id, "get")
    path = kind.item_path(resource_id)
    status, body = transport.execute("GET", path)
    _check("GET", path, status, body, frozenset({STATUS_OK}))
    return _decode(kind, body)


def create(
    transport: Transport, kind: ResourceKind[FieldsT, MetadataT], fields: FieldsT
) -> MetadataT:
    """Create a resource. The returned metadata carries the server-assigned id.

    Raises:
        CallerError: If fields is not the kind's fields model.
        TransportError: On network failure.
        APIError: On any status other than 201.
        DecodeError: If the response or error body is malformed.
    """
    data = _encode(kind, fields)
    path = kind.collection_path()
    status, body = transport.execute("POST", path, data)
    _check("POST", path, status, body, frozenset({STATUS_CREATED}))
    return _decode(kind, body)


def update(
    transport: Transport,
    kind: ResourceKind[FieldsT, MetadataT],
    resource_id: str,
    fields: FieldsT,
) -> MetadataT:
    """Replace the mutable fields of an existing resource.

    Raises:
        CallerError: If resource_id is empty or fields is the wrong model.
        TransportError: On network failure.
        APIError: On any status other than 200.
        DecodeError: If the response or error body is malformed.
    """
    _require_id(kind, resource_id, "update")
    data = _encode(kind, fields)
    path = kind.item_path(resource_id)
    status, body = transport.execute("PUT", path, data)
    _check("PUT", path, status, body, frozenset({STATUS_OK}))
    return _decode(kind, body)


def delete(transport: Transport, kind: ResourceKind[Any, Any], resource_id: str) -> None:
    """Delete a resource, accepting only the kind's delete success statuses.

    A 404 surfaces as an APIError; callers decide whether "already gone" is fine.

    Raises:
        CallerError: If resource_id is empty (no request is sent).
        TransportError: On network failure.
        APIError: On any status outside kind.delete_statuses.
        DecodeError: If the error body is malformed.
    """
    _require_id(kind, resource_id, "delete")
    path = kind.item_path(resource_id)
    status, body = transport.execute("DELETE", path)
    _check("DELETE", path, status, body, kind.delete_statuses)
