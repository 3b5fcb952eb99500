"""Typed protocol for XML API client interactions used by the command executor."""

from __future__ import annotations

from typing import Protocol

type QueryParams = dict[str, str]


class XapiClientProtocol(Protocol):
    """Subset of ``pan.xapi.PanXapi`` used by this project."""

    xml_document: str | None

    def op(
        self,
        cmd: str | None = None,
        vsys: str | None = None,
        cmd_xml: bool = False,
        extra_qs: QueryParams | str | None = None,
    ) -> None: ...
