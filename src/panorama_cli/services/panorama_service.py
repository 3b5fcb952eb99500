"""Business logic for Panorama operational commands."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone, tzinfo

from panorama_cli.errors import ClockError, PanoramaError, ProtocolFormatError
from panorama_cli.executor import CommandExecutor
from panorama_cli.models.auth_key import (
    GENERATED_PREFIX,
    GENERATED_TOKEN_COUNT,
    GeneratedKeyMessage,
    VmAuthKey,
    VmAuthKeyList,
)
from panorama_cli.models.hierarchy import DeviceGroupHierarchy
from panorama_cli.models.jobs import JobStatus, JobSubmission
from panorama_cli.models.system import ClockReply, SystemInfo
from panorama_cli.protocol.request import CommandRequest
from panorama_cli.protocol.response import ResponseSchema
from panorama_cli.services.clock import parse_clock
from panorama_cli.services.hierarchy import flatten_hierarchy
from panorama_cli.services.jobs import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
    JobWaiter,
    ProgressCallback,
)

logger = logging.getLogger(__name__)

CLOCK_SCHEMA = ResponseSchema(ClockReply, {"text": "result"})
SYSTEM_INFO_SCHEMA = ResponseSchema(SystemInfo, {"system": "result>system"})
GENERATE_KEY_SCHEMA = ResponseSchema(GeneratedKeyMessage, {"message": "result"})
LIST_KEYS_SCHEMA = ResponseSchema(
    VmAuthKeyList, {"keys": "result>bootstrap-vm-auth-keys>entry"}
)
HIERARCHY_SCHEMA = ResponseSchema(DeviceGroupHierarchy, {"groups": "result>dg-hierarchy>dg"})
JOB_SUBMISSION_SCHEMA = ResponseSchema(JobSubmission, {"job_id": "result>job"})


class PanoramaService:
    """Service wrapper for Panorama bootstrap keys, device groups and jobs."""

    def __init__(
        self,
        executor: CommandExecutor,
        *,
        device_timezone: str | None = None,
        job_waiter: JobWaiter | None = None,
        job_poll_interval: float = DEFAULT_POLL_INTERVAL,
        job_timeout: float = DEFAULT_TIMEOUT,
    ):
        self._executor = executor
        self._device_timezone = device_timezone
        self._jobs = job_waiter or JobWaiter(
            executor, poll_interval=job_poll_interval, timeout=job_timeout
        )

    def clock(self) -> datetime:
        result = self._executor.op(
            CommandRequest("show", {"clock": ""}),
            CLOCK_SCHEMA,
            description="retrieving system time",
        )
        if not result.response.text:
            raise ClockError(f"No clock in reply: {result.raw}")
        return parse_clock(result.response.text, self._device_timezone)

    def system_info(self) -> SystemInfo:
        result = self._executor.op(
            CommandRequest("show", {"system>info": ""}),
            SYSTEM_INFO_SCHEMA,
            description="retrieving system info",
        )
        return result.response

    def create_vm_auth_key(self, hours: int) -> VmAuthKey:
        """Generate a VM auth key valid for ``hours`` hours."""

        zone = self._device_zone()
        result = self._executor.op(
            CommandRequest("request", {"bootstrap>vm-auth-key>generate>lifetime": hours}),
            GENERATE_KEY_SCHEMA,
            description="generating a vm auth code",
        )

        message = result.response.message
        if not message:
            raise ProtocolFormatError("No message in reply", result.raw)
        if not message.startswith(GENERATED_PREFIX):
            raise ProtocolFormatError("Unexpected reply prefix", message)

        tokens = message.split()
        if len(tokens) != GENERATED_TOKEN_COUNT:
            raise ProtocolFormatError(
                f"Got {len(tokens)} of {GENERATED_TOKEN_COUNT} fields", message
            )

        key = VmAuthKey(auth_key=tokens[3], expiry=" ".join(tokens[7:]))
        key.parse_expires(zone)
        return key

    def get_vm_auth_keys(self) -> list[VmAuthKey]:
        zone = self._device_zone()
        result = self._executor.op(
            CommandRequest("request", {"bootstrap>vm-auth-key>show": ""}),
            LIST_KEYS_SCHEMA,
            description="listing vm auth codes",
        )

        keys = result.response.keys
        for key in keys:
            key.parse_expires(zone)
            if key.expires is None:
                logger.warning("Could not parse expiry %r of vm auth key", key.expiry)
        return keys

    def device_group_hierarchy(self) -> dict[str, str]:
        """Return a mapping of device group name to parent name ("" for top level)."""

        result = self._executor.op(
            CommandRequest("show", {"dg-hierarchy": ""}),
            HIERARCHY_SCHEMA,
            description="retrieving device group hierarchy",
        )
        return flatten_hierarchy(result.response.groups)

    def assign_device_group_parent(self, child: str, parent: str = "") -> JobStatus:
        """Move device group ``child`` below ``parent`` and wait for the job.

        An empty ``parent`` moves the group to the top level (shared).
        """

        request = CommandRequest(
            "request",
            {"move-dg>entry>@name": child, "move-dg>entry>new-parent-dg": parent},
            omit_empty=frozenset({"move-dg>entry>new-parent-dg"}),
        )
        result = self._executor.op(
            request,
            JOB_SUBMISSION_SCHEMA,
            description=f"assigning device group {child!r} new parent: {parent}",
        )

        job_id = result.response.job_id
        if not job_id:
            raise ProtocolFormatError("No job id in reply", result.raw)
        return self._jobs.wait(job_id)

    def wait_for_job(
        self,
        job_id: str,
        poll_interval: float | None = None,
        progress: ProgressCallback | None = None,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> JobStatus:
        return self._jobs.wait(
            job_id, poll_interval, progress, timeout=timeout, cancel=cancel
        )

    def _device_zone(self) -> tzinfo:
        try:
            return self.clock().tzinfo or timezone.utc
        except PanoramaError as exc:
            logger.warning("Failed to get/parse system time: %s", exc)
            return timezone.utc
