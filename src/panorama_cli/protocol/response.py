"""Explicit element-path descriptors for decoding XML API replies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Final, cast

from pydantic import BaseModel, BeforeValidator

from panorama_cli.protocol.request import PATH_SEPARATOR

type XmlObject = dict[str, object]

MISSING: Final = object()


def ensure_list(value: object) -> list[object]:
    """Wrap a single xmltodict element in a list; ``None`` becomes empty."""

    if value is None:
        return []
    if isinstance(value, list):
        return cast(list[object], value)
    return [value]


def text_value(value: object) -> str:
    """Return the character data of an element decoded by xmltodict."""

    if value is None:
        return ""
    if isinstance(value, dict):
        return str(cast(XmlObject, value).get("#text", "")).strip()
    return str(value).strip()


def text_lines(value: object) -> list[str]:
    """Collect ``<line>`` children (or bare text) into a list of strings."""

    if isinstance(value, dict):
        value = cast(XmlObject, value).get("line")
    lines = [text_value(item) for item in ensure_list(value)]
    return [line for line in lines if line]


XmlText = Annotated[str, BeforeValidator(text_value)]
XmlLines = Annotated[list[str], BeforeValidator(text_lines)]


def as_object(value: object) -> XmlObject:
    if not isinstance(value, dict):
        return {}

    normalized: XmlObject = {}
    for key, item in cast(dict[object, object], value).items():
        if isinstance(key, str):
            normalized[key] = item
    return normalized


def lookup(document: object, path: str) -> object:
    """Follow ``path`` through nested elements, or return ``MISSING``."""

    current = document
    for segment in path.split(PATH_SEPARATOR):
        if not isinstance(current, Mapping) or segment not in current:
            return MISSING
        current = cast(Mapping[str, object], current)[segment]
    return current


class ResponseSchema[M: BaseModel]:
    """Maps model field names to element paths below the ``response`` root.

    Paths that are absent from a reply are left out of the validated data,
    so the model's defaults apply instead of an error.
    """

    def __init__(self, model: type[M], fields: Mapping[str, str]) -> None:
        self.model = model
        self.fields = dict(fields)

    def extract(self, document: object) -> XmlObject:
        values: XmlObject = {}
        for name, path in self.fields.items():
            found = lookup(document, path)
            if found is not MISSING:
                values[name] = found
        return values

    def decode(self, document: object) -> M:
        return self.model.model_validate(self.extract(document))
