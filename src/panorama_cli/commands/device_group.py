"""Device group command group implementation."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.json import JSON
from rich.table import Table

from panorama_cli.commands.common import (
    API_EXCEPTIONS,
    OutputFormat,
    build_service,
    console,
    handle_api_exception,
)
from panorama_cli.connection import (
    ApiKeyOption,
    HostOption,
    InsecureOption,
    PasswordOption,
    PortOption,
    UsernameOption,
)
from panorama_cli.models.jobs import JobStatus

device_group_app = typer.Typer(no_args_is_help=True, help="Inspect and rearrange device groups.")

SHARED_LABEL = "shared"


def _render_hierarchy(parents: dict[str, str], output: OutputFormat) -> None:
    if output is OutputFormat.JSON:
        console.print(JSON.from_data(parents))
        return

    table = Table(title="Device Group Hierarchy")
    table.add_column("Device Group")
    table.add_column("Parent")

    for name, parent in parents.items():
        table.add_row(name, parent or SHARED_LABEL)

    console.print(table)


@device_group_app.command("hierarchy")
def device_group_hierarchy(
    ctx: typer.Context,
    output: Annotated[
        OutputFormat,
        typer.Option("--output", help="Response format: table or json."),
    ] = OutputFormat.TABLE,
    host: HostOption = None,
    api_key: ApiKeyOption = None,
    username: UsernameOption = None,
    password: PasswordOption = None,
    port: PortOption = None,
    insecure: InsecureOption = False,
) -> None:
    """Show each device group with its parent."""

    parents: dict[str, str] = {}
    try:
        service = build_service(ctx, host, api_key, username, password, port, insecure)
        parents = service.device_group_hierarchy()
    except API_EXCEPTIONS as exc:
        handle_api_exception(exc)

    _render_hierarchy(parents, output)


@device_group_app.command("set-parent")
def device_group_set_parent(
    ctx: typer.Context,
    child: Annotated[str, typer.Argument(help="Device group to move.")],
    parent: Annotated[
        str,
        typer.Option("--parent", help="New parent device group; omit to move to shared."),
    ] = "",
    host: HostOption = None,
    api_key: ApiKeyOption = None,
    username: UsernameOption = None,
    password: PasswordOption = None,
    port: PortOption = None,
    insecure: InsecureOption = False,
) -> None:
    """Move a device group below a new parent and wait for the job to finish."""

    status: JobStatus | None = None
    try:
        service = build_service(ctx, host, api_key, username, password, port, insecure)
        status = service.assign_device_group_parent(child, parent)
    except API_EXCEPTIONS as exc:
        handle_api_exception(exc)

    job_id = status.job_id if status is not None else ""
    console.print(
        f"Device group '{child}' moved under '{parent or SHARED_LABEL}' (job {job_id})"
    )
