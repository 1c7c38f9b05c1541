"""Resource manager contract — what an infrastructure-as-code host calls."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

FieldsT = TypeVar("FieldsT", bound=BaseModel)
MetadataT = TypeVar("MetadataT", bound=BaseModel)



class ResourceManager(ABC, Generic[FieldsT, MetadataT]):
    """Abstract base class for managing one resource kind on behalf of a host.

    Plan diffing and state persistence stay with the host; a manager only maps
    lifecycle steps to API calls and applies the "404 means absent" policy.
    """

    @abstractmethod
    def create(self, fields: FieldsT) -> MetadataT:
        """Create the resource and return it with its server-assigned id."""
        ...

    @abstractmethod
    def read(self, resource_id: str) -> MetadataT | None:
        """Refresh the resource. Returns None if it no longer exists."""
        ...

    @abstractmethod
    def update(self, resource_id: str, fields: FieldsT) -> MetadataT:
        """Replace the resource's mutable fields."""
        ...

    @abstractmethod
    def delete(self, resource_id: str) -> None:
        """Delete the resource. Deleting an already absent resource succeeds."""
        ...

    @abstractmethod
    def import_state(self, resource_id: str) -> MetadataT:
        """Adopt an existing resource by id. Fails if it does not exist."""
        ...
