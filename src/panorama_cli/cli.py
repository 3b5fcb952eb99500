"""Typer-based command line interface for Panorama operational commands."""

from pathlib import Path
from typing import Any

import typer
from rich.json import JSON

from panorama_cli import __version__
from panorama_cli.commands.common import (
    API_EXCEPTIONS,
    build_service,
    console,
    handle_api_exception,
)
from panorama_cli.commands.device_group import device_group_app
from panorama_cli.commands.jobs import jobs_app
from panorama_cli.commands.vm_auth_key import vm_auth_key_app
from panorama_cli.config import Settings
from panorama_cli.connection import (
    ApiKeyOption,
    HostOption,
    InsecureOption,
    PasswordOption,
    PortOption,
    UsernameOption,
)
from panorama_cli.logging_config import configure_logging

app = typer.Typer(
    no_args_is_help=True,
    help="Panorama operational commands over the PAN-OS XML API.",
)
app.add_typer(vm_auth_key_app, name="vm-auth-key")
app.add_typer(device_group_app, name="device-group")
app.add_typer(jobs_app, name="job")


def _render(payload: Any) -> None:
    """Render API payloads in a readable JSON format."""

    console.print(JSON.from_data(payload, default=str))


@app.callback()
def common_options(
    ctx: typer.Context,
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Optional .env file with PANORAMA_CLI_* variables.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Log operational commands (-v) and raw XML (-vv) to stderr.",
    ),
) -> None:
    """Load shared configuration for all commands."""

    configure_logging(verbose)
    ctx.obj = {"settings": Settings.from_env_file(env_file)}


@app.command("version")
def show_version() -> None:
    """Show the installed panorama-cli version."""

    console.print(f"panorama-cli {__version__}")


@app.command("test-connection")
def test_connection(
    ctx: typer.Context,
    host: HostOption = None,
    api_key: ApiKeyOption = None,
    username: UsernameOption = None,
    password: PasswordOption = None,
    port: PortOption = None,
    insecure: InsecureOption = False,
) -> None:
    """Validate API access with a "show system info" call."""

    system: dict[str, object] = {}
    try:
        service = build_service(ctx, host, api_key, username, password, port, insecure)
        system = service.system_info().system
    except API_EXCEPTIONS as exc:
        handle_api_exception(exc)

    _render(system)


@app.command("clock")
def show_clock(
    ctx: typer.Context,
    host: HostOption = None,
    api_key: ApiKeyOption = None,
    username: UsernameOption = None,
    password: PasswordOption = None,
    port: PortOption = None,
    insecure: InsecureOption = False,
) -> None:
    """Show the device time with its resolved time zone."""

    clock_text = ""
    try:
        service = build_service(ctx, host, api_key, username, password, port, insecure)
        clock_text = service.clock().isoformat()
    except API_EXCEPTIONS as exc:
        handle_api_exception(exc)

    console.print(clock_text)


def main() -> None:
    app()
