"""Operational command execution against the PAN-OS XML API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from xml.parsers.expat import ExpatError

import pan.xapi
import xmltodict
from pydantic import BaseModel, ValidationError

from panorama_cli.errors import DeserializationError, TransportError
from panorama_cli.protocol.request import CommandRequest
from panorama_cli.protocol.response import ResponseSchema, as_object, text_lines
from panorama_cli.xapi_client import QueryParams, XapiClientProtocol

logger = logging.getLogger(__name__)
op_logger = logging.getLogger("panorama_cli.op")


def log_op(message: str, *args: object) -> None:
    """Log an operational command event in human-readable form."""

    op_logger.info("(op) " + message, *args)


@dataclass(frozen=True, slots=True)
class OpResult[M: BaseModel]:
    """Raw reply text plus the response decoded through its schema."""

    raw: str
    response: M


class CommandExecutor:
    """Serializes requests, performs the call and decodes the reply.

    Holds nothing but the client, so concurrent calls are as safe as the
    client itself.
    """

    def __init__(self, client: XapiClientProtocol):
        self._client = client

    def op[M: BaseModel](
        self,
        request: CommandRequest,
        schema: ResponseSchema[M],
        *,
        target: str = "",
        extra_qs: QueryParams | None = None,
        description: str | None = None,
    ) -> OpResult[M]:
        log_op("%s", description or request.describe())

        cmd = request.to_xml()
        query: QueryParams = dict(extra_qs or {})
        if target:
            query["target"] = target

        logger.debug("sending op command: %s", cmd)
        try:
            self._client.op(cmd=cmd, cmd_xml=False, extra_qs=query or None)
        except pan.xapi.PanXapiError as exc:
            raise TransportError(str(exc)) from exc

        raw = self._client.xml_document or ""
        logger.debug("received reply: %s", raw)

        try:
            document = xmltodict.parse(raw)
        except ExpatError as exc:
            raise DeserializationError("Malformed XML reply", raw) from exc

        body = as_object(as_object(document).get("response"))
        if body.get("@status") == "error":
            raise TransportError(_error_message(body))

        try:
            response = schema.decode(body)
        except ValidationError as exc:
            raise DeserializationError(
                f"Unexpected reply shape ({exc.error_count()} errors)", raw
            ) from exc

        return OpResult(raw=raw, response=response)


def _error_message(body: dict[str, object]) -> str:
    lines = text_lines(body.get("msg"))
    if not lines:
        lines = text_lines(as_object(body.get("result")).get("msg"))
    return " ".join(lines) if lines else "Device returned an error status"
