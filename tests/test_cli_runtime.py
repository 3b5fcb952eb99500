from __future__ import annotations

import json

from fake_xapi import InMemoryXapiClient, job_document, success
from typer.testing import CliRunner

from panorama_cli.cli import app


def test_vm_auth_key_list_requires_connection_settings(runner: CliRunner) -> None:
    result = runner.invoke(
        app,
        ["vm-auth-key", "list"],
        env={
            "PANORAMA_CLI_HOST": "",
            "PANORAMA_CLI_API_KEY": "",
            "PANORAMA_CLI_USERNAME": "",
            "PANORAMA_CLI_PASSWORD": "",
        },
    )

    assert result.exit_code == 2


def test_test_connection_success(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    cli_client.reply(
        "<system>",
        success("<system><hostname>pano-01</hostname><sw-version>11.1.2</sw-version></system>"),
    )

    result = runner.invoke(app, ["test-connection", *connection_args])

    assert result.exit_code == 0
    assert "pano-01" in result.stdout
    assert cli_client.commands == ["<show><system><info></info></system></show>"]


def test_test_connection_api_error(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    result = runner.invoke(app, ["test-connection", *connection_args])

    assert result.exit_code == 1
    assert "API request failed" in result.stdout
    assert cli_client.commands


def test_clock_prints_zone_aware_time(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    cli_client.reply("<clock>", success("Wed Jan 15 13:45:00 UTC 2024"))

    result = runner.invoke(app, ["clock", *connection_args])

    assert result.exit_code == 0
    assert "2024-01-15T13:45:00+00:00" in result.stdout


def test_device_group_hierarchy_json(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    cli_client.reply(
        "<dg-hierarchy>",
        success('<dg-hierarchy><dg name="emea"><dg name="branch"/></dg></dg-hierarchy>'),
    )

    result = runner.invoke(
        app, ["device-group", "hierarchy", "--output", "json", *connection_args]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"emea": "", "branch": "emea"}


def test_device_group_set_parent_waits_for_job(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    cli_client.reply("<move-dg>", success("<job>42</job>"))
    cli_client.reply("<jobs>", job_document("42", "FIN", result="OK", progress="100"))

    result = runner.invoke(app, ["device-group", "set-parent", "branch", *connection_args])

    assert result.exit_code == 0
    assert "moved under 'shared' (job 42)" in result.stdout
    assert cli_client.count("<jobs>") == 1


def test_device_group_set_parent_job_failure(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    cli_client.reply("<move-dg>", success("<job>42</job>"))
    cli_client.reply(
        "<jobs>", job_document("42", "FIN", result="FAIL", details=["move not allowed"])
    )

    result = runner.invoke(
        app, ["device-group", "set-parent", "branch", "--parent", "emea", *connection_args]
    )

    assert result.exit_code == 1
    assert "move not allowed" in result.stdout


def test_vm_auth_key_list_json(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    cli_client.reply("<clock>", success("Wed Jan 15 13:45:00 UTC 2024"))
    cli_client.reply(
        "<vm-auth-key><show>",
        success(
            "<bootstrap-vm-auth-keys><entry><vm-auth-key>111</vm-auth-key>"
            "<expiry-time>2024/01/16 13:45:00</expiry-time></entry></bootstrap-vm-auth-keys>"
        ),
    )

    result = runner.invoke(app, ["vm-auth-key", "list", "--output", "json", *connection_args])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == [
        {
            "auth_key": "111",
            "expiry": "2024/01/16 13:45:00",
            "expires": "2024-01-16T13:45:00Z",
        }
    ]


def test_vm_auth_key_create_rejects_bad_reply(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    cli_client.reply("<clock>", success("Wed Jan 15 13:45:00 UTC 2024"))
    cli_client.reply("<generate>", success("VM auth key 123 generated."))

    result = runner.invoke(app, ["vm-auth-key", "create", "--hours", "4", *connection_args])

    assert result.exit_code == 1
    assert "API request failed" in result.stdout


def test_job_wait_prints_progress(
    runner: CliRunner,
    connection_args: list[str],
    cli_client: InMemoryXapiClient,
) -> None:
    cli_client.reply("<jobs>", job_document("5", "FIN", result="OK", progress="100"))

    result = runner.invoke(app, ["job", "wait", "5", *connection_args])

    assert result.exit_code == 0
    assert "job 5: completed 100%" in result.stdout
