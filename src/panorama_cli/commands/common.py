"""Service construction and error rendering shared by the command groups."""

from __future__ import annotations

from enum import StrEnum
from typing import NoReturn

import typer
from rich.console import Console

from panorama_cli.config import Settings
from panorama_cli.connection import connection_params
from panorama_cli.errors import PanoramaError
from panorama_cli.executor import CommandExecutor
from panorama_cli.sdk import create_client
from panorama_cli.services.panorama_service import PanoramaService

console = Console()
API_EXCEPTIONS = (PanoramaError,)


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"


def build_service(
    ctx: typer.Context,
    host: str | None,
    api_key: str | None,
    username: str | None,
    password: str | None,
    port: int | None,
    insecure: bool,
) -> PanoramaService:
    settings: Settings = ctx.obj["settings"]
    params = connection_params(settings, host, api_key, username, password, port, insecure)
    client = create_client(params)
    return PanoramaService(
        CommandExecutor(client),
        device_timezone=settings.device_timezone,
        job_poll_interval=settings.job_poll_interval,
        job_timeout=settings.job_timeout,
    )


def handle_api_exception(exc: Exception) -> NoReturn:
    console.print(f"API request failed: {exc}", style="bold red")
    raise typer.Exit(code=1) from exc
