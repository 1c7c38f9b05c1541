"""Resource managers backed by the API accessors."""

from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel

from incidentio.api.errors import APIError, is_error_status
from incidentio.api.resources import Client, ResourceAccessor
from incidentio.manager.base import ResourceManager

logger = logging.getLogger(__name__)

NOT_FOUND = 404

FieldsT = TypeVar("FieldsT", bound=BaseModel)
MetadataT = TypeVar("MetadataT", bound=BaseModel)


class AccessorResourceManager(
    ResourceManager[FieldsT, MetadataT]
):
    """ResourceManager for any kind, delegating to its ResourceAccessor."""

    def __init__(self, type_name: str, accessor: ResourceAccessor[FieldsT, MetadataT]) -> None:
        """Initialize the manager.

        Args:
            type_name: Host-facing resource type, e.g. "incidentio_severity".
            accessor: Accessor for the matching API resource kind.
        """
        self.type_name = type_name
        self._accessor = accessor

    def create(self, fields: FieldsT) -> MetadataT:
        created = self._accessor.create(fields)
        logger.debug("%s: created a resource with ID=%s", self.type_name, _id_of(created))
        return created

    def read(self, resource_id: str) -> MetadataT | None:
        try:
            return self._accessor.get(resource_id)
        except APIError as e:
            if is_error_status(e, NOT_FOUND):
                logger.debug("%s %s not found, removing from state", self.type_name, resource_id)
                return None
            raise

    def update(self, resource_id: str, fields: FieldsT) -> MetadataT:
        return self._accessor.update(resource_id, fields)

    def delete(self, resource_id: str) -> None:
        try:
            self._accessor.delete(resource_id)
        except APIError as e:
            if not is_error_status(e, NOT_FOUND):
                raise
            # The resource is already gone.
            logger.debug("%s %s already deleted", self.type_name, resource_id)

    def import_state(self, resource_id: str) -> MetadataT:
        return self._accessor.get(resource_id)


def _id_of(resource: BaseModel) -> str:
    return str(getattr(resource, "id", ""))


def managers_for(client: Client) -> dict[str, ResourceManager]:
    """Build one manager per resource type, keyed by host resource type name."""
    return {
        "incidentio_custom_field_option": AccessorResourceManager(
            "incidentio_custom_field_option", client.custom_field_options()
        ),
        "incidentio_custom_field": AccessorResourceManager(
            "incidentio_custom_field", client.custom_fields()
        ),
        "incidentio_incident_role": AccessorResourceManager(
            "incidentio_incident_role", client.incident_roles()
        ),
        "incidentio_severity": AccessorResourceManager(
            "incidentio_severity", client.severities()
        ),
    }
