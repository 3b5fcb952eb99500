"""VM auth key command group implementation."""

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
from panorama_cli.models.auth_key import VmAuthKey

vm_auth_key_app = typer.Typer(no_args_is_help=True, help="Manage VM-Series bootstrap auth keys.")


def _render_keys(keys: list[VmAuthKey], output: OutputFormat, title: str) -> None:
    if output is OutputFormat.JSON:
        console.print(JSON.from_data([key.model_dump(mode="json") for key in keys]))
        return

    table = Table(title=title)
    table.add_column("Auth Key")
    table.add_column("Expiry")
    table.add_column("Expires")

    for key in keys:
        table.add_row(
            key.auth_key,
            key.expiry,
            key.expires.isoformat() if key.expires is not None else "-",
        )

    console.print(table)


@vm_auth_key_app.command("create")
def vm_auth_key_create(
    ctx: typer.Context,
    hours: Annotated[
        int,
        typer.Option("--hours", min=1, max=8760, help="Lifetime of the key in hours."),
    ] = 24,
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
    """Generate a new VM auth key."""

    keys: list[VmAuthKey] = []
    try:
        service = build_service(ctx, host, api_key, username, password, port, insecure)
        keys = [service.create_vm_auth_key(hours)]
    except API_EXCEPTIONS as exc:
        handle_api_exception(exc)

    _render_keys(keys, output, "Generated VM Auth Key")


@vm_auth_key_app.command("list")
def vm_auth_key_list(
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
    """List current VM auth keys."""

    keys: list[VmAuthKey] = []
    try:
        service = build_service(ctx, host, api_key, username, password, port, insecure)
        keys = service.get_vm_auth_keys()
    except API_EXCEPTIONS as exc:
        handle_api_exception(exc)

    _render_keys(keys, output, "VM Auth Keys")
