"""Operational command requests addressed by element paths."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import cast

import xmltodict

PATH_SEPARATOR = ">"

type XmlPayload = dict[str, object]


def _empty_fields() -> dict[str, object]:
    return {}


@dataclass(frozen=True, slots=True)
class CommandRequest:
    """One operational command.

    ``fields`` maps ``>``-delimited element paths below ``root`` to their
    values, e.g. ``{"bootstrap>vm-auth-key>generate>lifetime": 8}`` under
    the ``request`` root. A segment starting with ``@`` names an attribute
    of the element before it. ``None`` values are skipped, as are empty
    values of paths listed in ``omit_empty``.
    """

    root: str
    fields: Mapping[str, object] = field(default_factory=_empty_fields)
    omit_empty: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.root or PATH_SEPARATOR in self.root:
            raise ValueError(f"Invalid root element: {self.root!r}")
        for path in self.fields:
            if not all(path.split(PATH_SEPARATOR)):
                raise ValueError(f"Invalid element path: {path!r}")

    def describe(self) -> str:
        paths = ", ".join(self.fields) if self.fields else "(no parameters)"
        return f"{self.root}: {paths}"

    def to_payload(self) -> XmlPayload:
        body: XmlPayload = {}
        for path, value in self.fields.items():
            if value is None:
                continue
            if path in self.omit_empty and value == "":
                continue
            _assign(body, path.split(PATH_SEPARATOR), value)
        return {self.root: body or None}

    def to_xml(self) -> str:
        return xmltodict.unparse(self.to_payload(), full_document=False)


def _assign(body: XmlPayload, segments: list[str], value: object) -> None:
    node = body
    for segment in segments[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ValueError(f"Element {segment!r} already holds a value")
        node = cast(XmlPayload, child)

    leaf = segments[-1]
    if leaf in node:
        raise ValueError(f"Element {leaf!r} is assigned twice")
    node[leaf] = _to_text(value)


def _to_text(value: object) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)
