"""Shared connection option resolution for CLI commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import typer

from panorama_cli.config import Settings

HostOption = Annotated[str | None, typer.Option(help="Panorama hostname or IP.")]
ApiKeyOption = Annotated[str | None, typer.Option(help="Panorama XML API key.")]
UsernameOption = Annotated[str | None, typer.Option(help="Panorama API username.")]
PasswordOption = Annotated[str | None, typer.Option(help="Panorama API password.")]
PortOption = Annotated[int | None, typer.Option(min=1, max=65535, help="Panorama API port.")]
InsecureOption = Annotated[
    bool,
    typer.Option(help="Disable TLS certificate verification."),
]


@dataclass(frozen=True, slots=True)
class ConnectionParams:
    """Resolved connection parameters for the XML API client."""

    host: str
    api_key: str | None
    username: str | None
    password: str | None
    port: int | None
    verify_ssl: bool
    timeout: float


def _resolve(value: str | None, default: str | None, option_name: str) -> str:
    if value:
        return value
    if default:
        return default
    raise typer.BadParameter(
        f"Provide --{option_name} or set PANORAMA_CLI_{option_name.upper().replace('-', '_')}."
    )


def _optional(value: str | None, default: str | None) -> str | None:
    return value or default or None


def connection_params(
    settings: Settings,
    host: str | None,
    api_key: str | None,
    username: str | None,
    password: str | None,
    port: int | None,
    insecure: bool,
) -> ConnectionParams:
    """Resolve command options and settings into XML API client kwargs.

    An API key wins over a username/password pair; without a key both
    username and password are required so the client can generate one.
    """

    resolved_key = _optional(api_key, settings.api_key)
    resolved_username: str | None = None
    resolved_password: str | None = None
    if resolved_key is None:
        resolved_username = _resolve(username, settings.username, "username")
        resolved_password = _resolve(password, settings.password, "password")

    return ConnectionParams(
        host=_resolve(host, settings.host, "host"),
        api_key=resolved_key,
        username=resolved_username,
        password=resolved_password,
        port=port if port is not None else settings.port,
        verify_ssl=False if insecure else settings.verify_ssl,
        timeout=settings.timeout,
    )
