"""Per-kind endpoint accessors and the Client facade that builds them."""

from __future__ import annotations

from types import TracebackType
from typing import Generic, TypeVar

import httpx
from pydantic import BaseModel

from incidentio.api import operations
from incidentio.api.config import ClientConfig
from incidentio.api.models import (
    CustomField,
    CustomFieldMetadata,
    CustomFieldOption,
    CustomFieldOptionMetadata,
    IncidentRole,
    IncidentRoleMetadata,
    Severity,
    SeverityMetadata,
)
from incidentio.api.operations import ResourceKind
from incidentio.api.transport import Transport

FieldsT = TypeVar("FieldsT", bound=BaseModel)
MetadataT = TypeVar("MetadataT", bound=BaseModel)



class ResourceAccessor(Generic[FieldsT, MetadataT]):
    """Binds one resource kind to a shared transport and exposes its four verbs."""

    def __init__(self, transport: Transport, kind: ResourceKind[FieldsT, MetadataT]) -> None:
        self._transport = transport
        self.kind = kind

    def get(self, resource_id: str) -> MetadataT:
        return operations.get(self._transport, self.kind, resource_id)

    def create(self, fields: FieldsT) -> MetadataT:
        return operations.create(self._transport, self.kind, fields)

    def update(self, resource_id: str, fields: FieldsT) -> MetadataT:
        return operations.update(self._transport, self.kind, resource_id, fields)

    def delete(self, resource_id: str) -> None:
        operations.delete(self._transport, self.kind, resource_id)


class IncidentRoles(ResourceAccessor[IncidentRole, IncidentRoleMetadata]):
    """Accessor for /v1/incident_roles."""

    def __init__(self, transport: Transport) -> None:
        super().__init__(transport, operations.INCIDENT_ROLES)


class Severities(ResourceAccessor[Severity, SeverityMetadata]):
    """Accessor for /v1/severities. Deletes are confirmed with 202."""

    def __init__(self, transport: Transport) -> None:
        super().__init__(transport, operations.SEVERITIES)


class CustomFields(ResourceAccessor[CustomField, CustomFieldMetadata]):
    """Accessor for /v1/custom_fields."""

    def __init__(self, transport: Transport) -> None:
        super().__init__(transport, operations.CUSTOM_FIELDS)


class CustomFieldOptions(ResourceAccessor[CustomFieldOption, CustomFieldOptionMetadata]):
    """Accessor for /v1/custom_field_options."""

    def __init__(self, transport: Transport) -> None:
        super().__init__(transport, operations.CUSTOM_FIELD_OPTIONS)


class Client:
    """incident.io API client.

    Owns one Transport built from an immutable ClientConfig; every accessor
    returned by this client shares it.

    Example:
        with Client.from_env() as client:
            role = client.incident_roles().get("01G0J1EXE7AXZ2C93K61WBPYEH")
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Client.

        Args:
            config: ClientConfig with API key, base URL, timeout and debug flag.
            transport: Optional httpx transport override (mock server in tests).
        """
        self.config = config
        self._transport = Transport(config, transport=transport)

    @classmethod
    def from_env(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        debug: bool | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> Client:
        """Build a client from explicit values with environment fallbacks.

        Raises:
            ValueError: If no API key is configured.
        """
        config = ClientConfig.from_env(api_key=api_key, base_url=base_url, debug=debug)
        return cls(config, transport=transport)

    def incident_roles(self) -> IncidentRoles:
        return IncidentRoles(self._transport)

    def severities(self) -> Severities:
        return Severities(self._transport)

    def custom_fields(self) -> CustomFields:
        return CustomFields(self._transport)

    def custom_field_options(self) -> CustomFieldOptions:
        return CustomFieldOptions(self._transport)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
