"""Models for asynchronous job tracking."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from panorama_cli.protocol.response import XmlLines, XmlText, as_object, ensure_list, text_value


class JobState(StrEnum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


def _coerce_progress(value: object) -> int | None:
    # Finished jobs sometimes report a completion timestamp instead of a percentage.
    text = text_value(value)
    return int(text) if text.isdigit() else None


def _device_entries(value: object) -> list[object]:
    return ensure_list(as_object(value).get("entry"))


class JobDevice(BaseModel):
    """Per-device result of a job pushed to managed firewalls."""

    model_config = ConfigDict(populate_by_name=True)

    serial: XmlText = Field(default="", alias="serial-no")
    result: XmlText = ""


class JobStatus(BaseModel):
    """Observed state of a job as reported by ``show jobs id``."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: XmlText = Field(default="", alias="id")
    job_type: XmlText = Field(default="", alias="type")
    status: XmlText = ""
    result: XmlText = ""
    progress: Annotated[int | None, BeforeValidator(_coerce_progress)] = None
    details: XmlLines = Field(default_factory=list)
    devices: Annotated[list[JobDevice], BeforeValidator(_device_entries)] = Field(
        default_factory=list
    )

    @property
    def state(self) -> JobState:
        if self.status == "FIN":
            if self.result == "FAIL":
                return JobState.FAILED
            if self.result == "PEND":
                return JobState.ACTIVE
            if any(device.result == "PEND" for device in self.devices):
                return JobState.ACTIVE
            return JobState.COMPLETED
        if self.status == "ACT":
            return JobState.ACTIVE
        return JobState.PENDING

    @property
    def failed_devices(self) -> list[JobDevice]:
        return [device for device in self.devices if device.result not in ("OK", "PEND")]


class JobStatusResponse(BaseModel):
    job: JobStatus | None = None


class JobSubmission(BaseModel):
    """Reply of a command that enqueues a job: ``<result><job>N</job></result>``."""

    job_id: XmlText = ""
