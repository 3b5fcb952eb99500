"""Models for VM auth key (bootstrap key) operations."""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from panorama_cli.protocol.response import XmlText, ensure_list

EXPIRY_FORMAT = "%Y/%m/%d %H:%M:%S"
EXPIRY_PATTERN = re.compile(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}", re.ASCII)
GENERATED_PREFIX = "VM auth key "
GENERATED_TOKEN_COUNT = 9


def parse_expiry(text: str, zone: tzinfo) -> datetime | None:
    """Parse a device-local ``YYYY/MM/DD hh:mm:ss`` string in ``zone``.

    Returns ``None`` when the text does not match the layout.
    """

    if not EXPIRY_PATTERN.fullmatch(text):
        return None
    try:
        parsed = datetime.strptime(text, EXPIRY_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=zone)


class VmAuthKey(BaseModel):
    """A VM auth key paired with when it expires.

    ``expiry`` is the text reported by the device, without zone information.
    ``expires`` is the absolute instant derived from it, or ``None`` when the
    text could not be parsed.
    """

    model_config = ConfigDict(populate_by_name=True)

    auth_key: XmlText = Field(default="", alias="vm-auth-key")
    expiry: XmlText = Field(default="", alias="expiry-time")
    expires: datetime | None = None

    def parse_expires(self, zone: tzinfo) -> None:
        parsed = parse_expiry(self.expiry, zone)
        if parsed is not None:
            self.expires = parsed


class GeneratedKeyMessage(BaseModel):
    message: XmlText = ""


class VmAuthKeyList(BaseModel):
    keys: Annotated[list[VmAuthKey], BeforeValidator(ensure_list)] = Field(default_factory=list)
