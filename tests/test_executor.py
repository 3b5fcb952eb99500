import logging

import pan.xapi
import pytest
from fake_xapi import InMemoryXapiClient, success

from panorama_cli.errors import DeserializationError, TransportError
from panorama_cli.executor import CommandExecutor
from panorama_cli.models.jobs import JobSubmission
from panorama_cli.protocol.request import CommandRequest
from panorama_cli.protocol.response import ResponseSchema

JOB_SCHEMA = ResponseSchema(JobSubmission, {"job_id": "result>job"})
MOVE_REQUEST = CommandRequest("request", {"move-dg>entry>@name": "branch"})


def test_op_sends_command_and_decodes_reply(xapi_client: InMemoryXapiClient) -> None:
    xapi_client.reply("<move-dg>", success("<job>17</job>"))
    executor = CommandExecutor(xapi_client)

    result = executor.op(MOVE_REQUEST, JOB_SCHEMA)

    assert result.response.job_id == "17"
    assert result.raw == success("<job>17</job>")
    assert xapi_client.commands == [MOVE_REQUEST.to_xml()]
    assert xapi_client.queries == [None]


def test_op_passes_target_and_extra_query_params(xapi_client: InMemoryXapiClient) -> None:
    xapi_client.reply("<move-dg>", success("<job>17</job>"))
    executor = CommandExecutor(xapi_client)

    executor.op(MOVE_REQUEST, JOB_SCHEMA, target="007951000012345", extra_qs={"vsys": "vsys1"})

    assert xapi_client.queries == [{"vsys": "vsys1", "target": "007951000012345"}]


def test_op_wraps_transport_errors(xapi_client: InMemoryXapiClient) -> None:
    executor = CommandExecutor(xapi_client)

    with pytest.raises(TransportError, match="no canned reply") as exc_info:
        executor.op(MOVE_REQUEST, JOB_SCHEMA)

    assert isinstance(exc_info.value.__cause__, pan.xapi.PanXapiError)


def test_op_reports_error_status_as_transport_error(xapi_client: InMemoryXapiClient) -> None:
    xapi_client.reply(
        "<move-dg>",
        '<response status="error"><msg><line>branch is not a device group</line></msg></response>',
    )
    executor = CommandExecutor(xapi_client)

    with pytest.raises(TransportError, match="branch is not a device group"):
        executor.op(MOVE_REQUEST, JOB_SCHEMA)


def test_op_raises_deserialization_error_with_raw_payload(
    xapi_client: InMemoryXapiClient,
) -> None:
    xapi_client.reply("<move-dg>", "<response><result>")
    executor = CommandExecutor(xapi_client)

    with pytest.raises(DeserializationError) as exc_info:
        executor.op(MOVE_REQUEST, JOB_SCHEMA)

    assert exc_info.value.raw == "<response><result>"


def test_op_tolerates_missing_elements(xapi_client: InMemoryXapiClient) -> None:
    xapi_client.reply("<move-dg>", '<response status="success"/>')
    executor = CommandExecutor(xapi_client)

    result = executor.op(MOVE_REQUEST, JOB_SCHEMA)

    assert result.response.job_id == ""


def test_op_logs_description_on_op_logger(
    xapi_client: InMemoryXapiClient, caplog: pytest.LogCaptureFixture
) -> None:
    xapi_client.reply("<move-dg>", success("<job>17</job>"))
    executor = CommandExecutor(xapi_client)

    with caplog.at_level(logging.INFO, logger="panorama_cli.op"):
        executor.op(MOVE_REQUEST, JOB_SCHEMA, description="moving branch to shared")

    messages = [record.getMessage() for record in caplog.records]
    assert "(op) moving branch to shared" in messages
    assert all("<move-dg>" not in message for message in messages)
