"""CLI commands — get, create, update and delete incident.io resources."""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from incidentio.api.errors import APIError, IncidentIOError, is_error_status
from incidentio.api.resources import Client, ResourceAccessor


class KindName(StrEnum):
    """Resource kinds addressable from the command line."""

    incident_role = "incident-role"
    severity = "severity"
    custom_field = "custom-field"
    custom_field_option = "custom-field-option"


def accessor_for(client: Client, kind: KindName) -> ResourceAccessor[Any, Any]:
    """Return the client accessor for a CLI kind name."""
    factories = {
        KindName.incident_role: client.incident_roles,
        KindName.severity: client.severities,
        KindName.custom_field: client.custom_fields,
        KindName.custom_field_option: client.custom_field_options,
    }
    return factories[kind]()


def load_data(data: str) -> dict[str, Any]:
    """Load a JSON object from an inline string or from "@path/to/file.json".

    Raises:
        ValueError: If the file is missing or the content is not a JSON object.
    """
    if data.startswith("@"):
        path = Path(data[1:])
        if not path.exists():
            raise ValueError(f"File not found: {path}")
        data = path.read_text()

    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ValueError("Resource data must be a JSON object")
    return parsed


def get_command(client: Client, kind: KindName, resource_id: str, format: str = "human") -> int:
    """Fetch and print one resource.

    Returns:
        Exit code (0 for success, 1 for error or not found).
    """
    accessor = accessor_for(client, kind)
    try:
        resource = accessor.get(resource_id)
    except APIError as e:
        if is_error_status(e, 404):
            rprint(f"[red]Error:[/red] {kind.value} {resource_id} not found")
            return 1
        _print_api_error(e)
        return 1
    except IncidentIOError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    return _print_resource(resource, kind, format)


def create_command(client: Client, kind: KindName, data: str, format: str = "human") -> int:
    """Create a resource from JSON data and print it.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    accessor = accessor_for(client, kind)
    try:
        fields = accessor.kind.fields_model.model_validate(load_data(data))
    except ValidationError as e:
        rprint(f"[red]Error:[/red] Invalid {kind.value}: {escape(str(e))}")
        return 1
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    try:
        resource = accessor.create(fields)
    except APIError as e:
        _print_api_error(e)
        return 1
    except IncidentIOError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    return _print_resource(resource, kind, format)


def update_command(
    client: Client, kind: KindName, resource_id: str, data: str, format: str = "human"
) -> int:
    """Replace a resource's mutable fields from JSON data and print the result.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    accessor = accessor_for(client, kind)
    try:
        fields = accessor.kind.fields_model.model_validate(load_data(data))
    except ValidationError as e:
        rprint(f"[red]Error:[/red] Invalid {kind.value}: {escape(str(e))}")
        return 1
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    try:
        resource = accessor.update(resource_id, fields)
    except APIError as e:
        _print_api_error(e)
        return 1
    except IncidentIOError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    return _print_resource(resource, kind, format)


def delete_command(
    client: Client, kind: KindName, resource_id: str, format: str = "human"
) -> int:
    """Delete a resource.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    accessor = accessor_for(client, kind)
    try:
        accessor.delete(resource_id)
    except APIError as e:
        _print_api_error(e)
        return 1
    except IncidentIOError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    if format == "json":
        print(json.dumps({"deleted": resource_id, "kind": kind.value}))
    else:
        rprint(f"[green]✓[/green] Deleted {kind.value} {resource_id}")
    return 0


def _print_resource(resource: BaseModel, kind: KindName, format: str) -> int:
    if format == "json":
        print(resource.model_dump_json(indent=2))
        return 0
    if format != "human":
        rprint(f"[red]Error:[/red] Unknown format: {format}")
        return 1

    table = Table(title=kind.value)
    table.add_column("Attribute", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in resource.model_dump(mode="json").items():
        if isinstance(value, list):
            # Custom field options: show their values
            value = ", ".join(str(v.get("value", "")) for v in value)
        table.add_row(name, str(value))
    rprint(table)
    return 0


def _print_api_error(err: APIError) -> None:
    rprint(f"[red]API error ({err.status}):[/red] {escape(str(err))}")
    for detail in err.errors:
        attribute = detail.source.pointer or detail.source.field if detail.source else ""
        if attribute:
            rprint(f"  [yellow]{attribute}[/yellow]: {escape(detail.message)}")
    if err.request_id:
        rprint(f"  request_id: {err.request_id}")
