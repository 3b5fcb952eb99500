from __future__ import annotations

import pytest
from fake_xapi import InMemoryXapiClient
from typer.testing import CliRunner

from panorama_cli.connection import ConnectionParams


@pytest.fixture
def xapi_client() -> InMemoryXapiClient:
    return InMemoryXapiClient()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def connection_args() -> list[str]:
    return [
        "--host",
        "panorama.example.com",
        "--api-key",
        "super-secret-key",
    ]


@pytest.fixture
def cli_client(
    monkeypatch: pytest.MonkeyPatch, xapi_client: InMemoryXapiClient
) -> InMemoryXapiClient:
    def _create_client(_params: ConnectionParams) -> InMemoryXapiClient:
        return xapi_client

    monkeypatch.setattr("panorama_cli.commands.common.create_client", _create_client)
    for name in ("DEVICE_TIMEZONE", "JOB_POLL_INTERVAL", "JOB_TIMEOUT"):
        monkeypatch.delenv(f"PANORAMA_CLI_{name}", raising=False)
    return xapi_client
