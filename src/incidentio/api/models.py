"""Resource models: mutable fields, server metadata and response envelopes."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from incidentio.api.errors import CallerError


class FieldType(StrEnum):
    """Custom field types."""

    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"
    TEXT = "text"
    LINK = "link"
    NUMERIC = "numeric"


class FieldRequirement(StrEnum):
    """When a custom field must be filled in during the incident lifecycle."""

    NEVER = "never"
    BEFORE_CLOSURE = "before_closure"
    ALWAYS = "always"


def parse_field_type(value: str) -> FieldType:
    """Parse a custom field type.

    Raises:
        CallerError: If value is not one of the known field types.
    """
    try:
        return FieldType(value)
    except ValueError as e:
        raise CallerError(f"{value} is not a valid field type") from e


def parse_field_requirement(value: str) -> FieldRequirement:
    """Parse a custom field requirement.

    Raises:
        CallerError: If value is not one of the known requirements.
    """
    try:
        return FieldRequirement(value)
    except ValueError as e:
        raise CallerError(f"{value} is not a valid field requirement") from e


# --- Incident roles ---


class IncidentRole(BaseModel):
    """Mutable fields of an incident role."""

    name: str
    description: str
    required: bool = False
    instructions: str
    shortform: str

    model_config = ConfigDict(frozen=True)


class IncidentRoleMetadata(IncidentRole):
    """Incident role as returned by the API."""

    id: str
    created_at: str = ""
    updated_at: str = ""
    role_type: str = ""


class IncidentRoleResponse(BaseModel):
    incident_role: IncidentRoleMetadata


# --- Severities ---


class Severity(BaseModel):
    """Mutable fields of a severity. Lower rank means less severe."""

    name: str = Field(max_length=50)
    description: str = Field(default="", max_length=1000)
    rank: int

    model_config = ConfigDict(frozen=True)


class SeverityMetadata(Severity):
    """Severity as returned by the API."""

    id: str
    created_at: str = ""
    updated_at: str = ""


class SeverityResponse(BaseModel):
    severity: SeverityMetadata


# --- Custom field options ---


class CustomFieldOption(BaseModel):
    """Mutable fields of a custom field option."""

    custom_field_id: str
    sort_key: int = 1000
    value: str

    model_config = ConfigDict(frozen=True)


class CustomFieldOptionMetadata(CustomFieldOption):
    """Custom field option as returned by the API (no timestamps)."""

    id: str


class CustomFieldOptionResponse(BaseModel):
    custom_field_option: CustomFieldOptionMetadata


# --- Custom fields ---


class CustomField(BaseModel):
    """Mutable fields of a custom field."""

    name: str
    description: str
    field_type: FieldType
    required: FieldRequirement = FieldRequirement.NEVER
    show_before_creation: bool = False
    show_before_closure: bool = False
    show_before_update: bool = False

    model_config = ConfigDict(frozen=True)

    def __init__(self, /, **data: Any) -> None:
        # Unknown enum values raise CallerError rather than ValidationError.
        if isinstance(data.get("field_type"), str):
            data["field_type"] = parse_field_type(data["field_type"])
        if isinstance(data.get("required"), str):
            data["required"] = parse_field_requirement(data["required"])
        super().__init__(**data)


class CustomFieldMetadata(CustomField):
    """Custom field as returned by the API, including its options."""

    id: str
    created_at: str = ""
    updated_at: str = ""
    options: list[CustomFieldOptionMetadata] = Field(default_factory=list)


class CustomFieldResponse(BaseModel):
    custom_field: CustomFieldMetadata
