"""Models for system level show commands."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from panorama_cli.protocol.response import XmlText, as_object


class ClockReply(BaseModel):
    text: XmlText = ""


class SystemInfo(BaseModel):
    """Flat ``show system info`` fields such as ``hostname`` and ``sw-version``."""

    system: Annotated[dict[str, object], BeforeValidator(as_object)] = Field(default_factory=dict)
