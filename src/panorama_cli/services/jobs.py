"""Polling of asynchronous jobs until they reach a terminal state."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from panorama_cli.errors import (
    JobCancelledError,
    JobFailedError,
    JobTimeoutError,
    ProtocolFormatError,
)
from panorama_cli.executor import CommandExecutor, log_op
from panorama_cli.models.jobs import JobState, JobStatus, JobStatusResponse
from panorama_cli.protocol.request import CommandRequest
from panorama_cli.protocol.response import ResponseSchema

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_TIMEOUT = 600.0

JOB_STATUS_SCHEMA = ResponseSchema(JobStatusResponse, {"job": "result>job"})

type ProgressCallback = Callable[[JobStatus], None]


class JobWaiter:
    """Polls ``show jobs id`` until a job completes, fails or runs out of time.

    ``sleep`` and ``monotonic`` are injectable so the loop can be driven
    without real waiting.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self._executor = executor
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._sleep = sleep
        self._monotonic = monotonic

    def status(self, job_id: str) -> JobStatus:
        request = CommandRequest("show", {"jobs>id": job_id})
        result = self._executor.op(
            request,
            JOB_STATUS_SCHEMA,
            description=f"checking status of job {job_id}",
        )
        if result.response.job is None:
            raise ProtocolFormatError(f"No status for job {job_id}", result.raw)
        return result.response.job

    def wait(
        self,
        job_id: str,
        poll_interval: float | None = None,
        progress: ProgressCallback | None = None,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> JobStatus:
        """Block until ``job_id`` finishes and return its final status.

        Falsy ``poll_interval`` or ``timeout`` fall back to the waiter's
        defaults. Raises ``JobFailedError`` for failed jobs,
        ``JobTimeoutError`` once ``timeout`` seconds have passed and
        ``JobCancelledError`` when ``cancel`` is set.
        """

        interval = poll_interval or self.poll_interval
        limit = timeout or self.timeout
        deadline = self._monotonic() + limit
        last_progress: int | None = None

        log_op("waiting for job %s", job_id)
        while True:
            status = self.status(job_id)
            if progress is not None:
                progress(status)

            if status.progress is not None and status.progress != last_progress:
                last_progress = status.progress
                log_op("job %s: %d percent complete", job_id, last_progress)

            state = status.state
            if state is JobState.FAILED:
                raise JobFailedError(job_id, status.details)
            if state is JobState.COMPLETED:
                for device in status.devices:
                    log_op("job %s: device %s result %s", job_id, device.serial, device.result)
                if status.failed_devices:
                    raise JobFailedError(
                        job_id, status.details + ["commit failed on one or more devices"]
                    )
                return status

            remaining = deadline - self._monotonic()
            if remaining <= 0:
                raise JobTimeoutError(job_id, limit)

            delay = min(interval, remaining)
            if cancel is None:
                self._sleep(delay)
            elif cancel.wait(delay):
                raise JobCancelledError(job_id)
