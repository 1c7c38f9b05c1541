"""incidentio CLI application."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated

import typer
from rich import print as rprint

import incidentio as incidentio_pkg
from incidentio.api.resources import Client
from incidentio.cli.commands import (
    KindName,
    create_command,
    delete_command,
    get_command,
    update_command,
)
from incidentio.logging import configure_logging


class OutputFormat(StrEnum):
    """Output format for CLI commands."""

    human = "human"
    json = "json"


@dataclass(frozen=True)
class GlobalOptions:
    """Options given before the subcommand."""

    format: OutputFormat = OutputFormat.human
    api_key: str | None = None
    base_url: str | None = None
    debug: bool = False


app = typer.Typer(
    name="incidentio",
    help="Manage incident.io roles, severities and custom fields.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        rprint(f"incidentio {incidentio_pkg.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format."),
    ] = OutputFormat.human,
    api_key: Annotated[
        str | None,
        typer.Option("--api-key", help="API key (default: $INCIDENT_IO_API_KEY)."),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="API base URL (default: $INCIDENT_IO_BASE_URL)."),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log full HTTP requests and responses to stderr."),
    ] = False,
    log_json: Annotated[
        bool,
        typer.Option("--log-json", help="Write log records to stderr as JSON lines."),
    ] = False,
) -> None:
    """incidentio — manage incident.io configuration from the command line."""
    from dotenv import load_dotenv

    load_dotenv()
    if debug or log_json:
        configure_logging(logging.DEBUG if debug else logging.INFO, json_format=log_json)
    ctx.obj = GlobalOptions(format=format, api_key=api_key, base_url=base_url, debug=debug)


def _build_client(options: GlobalOptions) -> Client:
    """Build a Client from global options, exiting with setup help if unconfigured."""
    try:
        return Client.from_env(
            api_key=options.api_key,
            base_url=options.base_url,
            debug=options.debug or None,
        )
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        rprint("\n[yellow]Setup instructions:[/yellow]")
        rprint("  export INCIDENT_IO_API_KEY=<your-api-key>")
        rprint("  export INCIDENT_IO_BASE_URL=<base-url>  # optional")
        raise typer.Exit(1) from e


def _options(ctx: typer.Context) -> GlobalOptions:
    return ctx.obj if isinstance(ctx.obj, GlobalOptions) else GlobalOptions()


@app.command("get")
def get(
    ctx: typer.Context,
    kind: Annotated[KindName, typer.Argument(help="Resource kind")],
    resource_id: Annotated[str, typer.Argument(help="Resource ID")],
) -> None:
    """Show one resource."""
    options = _options(ctx)
    with _build_client(options) as client:
        exit_code = get_command(client, kind, resource_id, format=options.format.value)
    raise typer.Exit(exit_code)


@app.command("create")
def create(
    ctx: typer.Context,
    kind: Annotated[KindName, typer.Argument(help="Resource kind")],
    data: Annotated[
        str,
        typer.Option("--data", "-d", help="Resource fields as JSON, or @file.json"),
    ],
) -> None:
    """Create a resource."""
    options = _options(ctx)
    with _build_client(options) as client:
        exit_code = create_command(client, kind, data, format=options.format.value)
    raise typer.Exit(exit_code)


@app.command("update")
def update(
    ctx: typer.Context,
    kind: Annotated[KindName, typer.Argument(help="Resource kind")],
    resource_id: Annotated[str, typer.Argument(help="Resource ID")],
    data: Annotated[
        str,
        typer.Option("--data", "-d", help="Resource fields as JSON, or @file.json"),
    ],
) -> None:
    """Replace the fields of a resource."""
    options = _options(ctx)
    with _build_client(options) as client:
        exit_code = update_command(client, kind, resource_id, data, format=options.format.value)
    raise typer.Exit(exit_code)


@app.command("delete")
def delete(
    ctx: typer.Context,
    kind: Annotated[KindName, typer.Argument(help="Resource kind")],
    resource_id: Annotated[str, typer.Argument(help="Resource ID")],
) -> None:
    """Delete a resource."""
    options = _options(ctx)
    with _build_client(options) as client:
        exit_code = delete_command(client, kind, resource_id, format=options.format.value)
    raise typer.Exit(exit_code)
