"""Job command group implementation."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.json import JSON

from panorama_cli.commands.common import (
    API_EXCEPTIONS,
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

jobs_app = typer.Typer(no_args_is_help=True, help="Follow asynchronous jobs.")


def _print_progress(status: JobStatus) -> None:
    progress = f"{status.progress}%" if status.progress is not None else "-"
    console.print(f"job {status.job_id}: {status.state.value} {progress}")


@jobs_app.command("wait")
def job_wait(
    ctx: typer.Context,
    job_id: Annotated[str, typer.Argument(help="Job id to wait for.")],
    interval: Annotated[
        float | None,
        typer.Option("--interval", min=0.1, help="Seconds between status checks."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", min=1, help="Give up after this many seconds."),
    ] = None,
    quiet: Annotated[bool, typer.Option("--quiet", help="Do not print each poll.")] = False,
    host: HostOption = None,
    api_key: ApiKeyOption = None,
    username: UsernameOption = None,
    password: PasswordOption = None,
    port: PortOption = None,
    insecure: InsecureOption = False,
) -> None:
    """Poll a job until it completes or fails."""

    status: JobStatus | None = None
    try:
        service = build_service(ctx, host, api_key, username, password, port, insecure)
        status = service.wait_for_job(
            job_id,
            interval,
            None if quiet else _print_progress,
            timeout=timeout,
        )
    except API_EXCEPTIONS as exc:
        handle_api_exception(exc)

    if status is not None:
        console.print(JSON.from_data(status.model_dump(mode="json")))
