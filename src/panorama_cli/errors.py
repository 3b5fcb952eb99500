"""Exceptions raised by the Panorama client."""

from __future__ import annotations


class PanoramaError(Exception):
    """Base class for every error raised by this package."""


class TransportError(PanoramaError):
    """The XML API call failed or the device answered with an error status."""


class DeserializationError(PanoramaError):
    """The device reply was not well-formed XML."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(f"{message}: {raw}")
        self.raw = raw


class ProtocolFormatError(PanoramaError):
    """Well-formed reply whose content does not match the expected shape."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(f"{message}: {raw}")
        self.raw = raw


class ClockError(PanoramaError):
    """The device clock could not be read or its zone could not be resolved."""


class JobError(PanoramaError):
    """Base class for asynchronous job errors."""

    def __init__(self, job_id: str, message: str) -> None:
        super().__init__(message)
        self.job_id = job_id


class JobFailedError(JobError):
    def __init__(self, job_id: str, details: list[str]) -> None:
        reason = " | ".join(details) if details else "unknown reason"
        super().__init__(job_id, f"Job {job_id} failed: {reason}")
        self.details = details


class JobTimeoutError(JobError):
    def __init__(self, job_id: str, timeout: float) -> None:
        super().__init__(job_id, f"Job {job_id} did not finish within {timeout:g} seconds")
        self.timeout = timeout


class JobCancelledError(JobError):
    def __init__(self, job_id: str) -> None:
        super().__init__(job_id, f"Waiting for job {job_id} was cancelled")
