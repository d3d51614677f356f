"""Runtime fetcher for dev controller - probes the live state of a running container."""

from __future__ import annotations

import asyncio
import json
import logging
import subprocess
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from kubedev.constants.defaults import SHELL_DEFAULT, SHELL_PREFERENCE, WORKDIR_DEFAULT
from kubedev.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kubedev.controllers.dev.errors import HardProbeFailure, SoftProbeFailure
from kubedev.controllers.dev.parsers.pod_parser import PodParser
from kubedev.models.dev.probed_facts import ProbedFacts
from kubedev.models.dev.workload import RunningInstance

logger = logging.getLogger(__name__)

# Anything a best-effort probe may raise that should turn into its fallback.
_SOFT_ERRORS = (
    SoftProbeFailure,
    RuntimeError,
    OSError,
    subprocess.TimeoutExpired,
    ValueError,
)


@dataclass(frozen=True)
class BestEffortProbe:
    """A runtime probe paired with the value used when it fails."""

    name: str
    run: Callable[[RunningInstance, str], Awaitable[Any]]
    fallback: Callable[[], Any]


class RuntimeIntrospector:
    """Probes a running container for user, workdir, shell, limits and ports."""

    def __init__(
        self,
        run_kubectl_func: Any,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
            request_timeout: Value passed to kubectl --request-timeout
        """
        self._run_kubectl = run_kubectl_func
        self._request_timeout = request_timeout
        self._pod_parser = PodParser()

    async def _exec(
        self, instance: RunningInstance, container: str, *command: str
    ) -> str:
        return await self._run_kubectl(
            (
                "exec",
                instance.name,
                "-n",
                instance.namespace,
                "-c",
                container,
                "--",
                *command,
            )
        )

    async def probe_user(self, instance: RunningInstance, container: str) -> int | None:
        """Return the UID the container runs as; root maps to None."""
        user_id = int((await self._exec(instance, container, "id", "-u")).strip())
        if user_id == 0:
            logger.debug("Container %s/%s runs as root", instance.name, container)
            return None
        return user_id

    async def probe_workdir(self, instance: RunningInstance, container: str) -> str:
        workdir = (await self._exec(instance, container, "pwd")).strip()
        if not workdir.startswith("/"):
            raise SoftProbeFailure(f"unexpected working directory {workdir!r}")
        return workdir

    async def is_shell_available(
        self, instance: RunningInstance, container: str, shell: str
    ) -> bool:
        """Return True when ``shell`` can be started inside the container."""
        try:
            await self._exec(instance, container, shell, "-c", "exit 0")
        except (RuntimeError, OSError, subprocess.TimeoutExpired) as exc:
            logger.debug(
                "%s is not available in %s/%s: %s",
                shell,
                instance.name,
                container,
                exc,
            )
            return False
        return True

    async def probe_command(
        self, instance: RunningInstance, container: str
    ) -> list[str]:
        for shell in SHELL_PREFERENCE:
            if await self.is_shell_available(instance, container, shell):
                return [shell]
        raise SoftProbeFailure(f"none of {', '.join(SHELL_PREFERENCE)} is available")

    async def probe_resource_limits(
        self, instance: RunningInstance, container: str
    ) -> bool:
        """Return True when the live container declares any resource limit."""
        limits = self._pod_parser.container_limits(instance, container)
        if limits is None:
            raise SoftProbeFailure(f"container {container!r} not found in pod spec")
        return bool(limits)

    async def probe_ports(self, instance: RunningInstance) -> list[int]:
        """Return the remote ports exposed for the pod by its services.

        Raises:
            HardProbeFailure: Services could not be listed.
        """
        try:
            output = await self._run_kubectl(
                (
                    "get",
                    "services",
                    "-n",
                    instance.namespace,
                    "-o",
                    "json",
                    f"--request-timeout={self._request_timeout}",
                )
            )
            data = json.loads(output)
        except (RuntimeError, OSError, subprocess.TimeoutExpired) as exc:
            raise HardProbeFailure(f"error listing services: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise HardProbeFailure("invalid JSON listing services") from exc
        if not isinstance(data, dict):
            raise HardProbeFailure("unexpected output listing services")
        return self._pod_parser.parse_service_ports(data.get("items", []), instance)

    def best_effort_probes(self) -> tuple[BestEffortProbe, ...]:
        """Return the probes whose failures fall back to defaults."""
        return (
            BestEffortProbe("user", self.probe_user, lambda: None),
            BestEffortProbe("workdir", self.probe_workdir, lambda: WORKDIR_DEFAULT),
            BestEffortProbe("command", self.probe_command, lambda: [SHELL_DEFAULT]),
            BestEffortProbe("resources", self.probe_resource_limits, lambda: False),
        )

    async def _run_best_effort(
        self, probe: BestEffortProbe, instance: RunningInstance, container: str
    ) -> Any:
        try:
            return await probe.run(instance, container)
        except _SOFT_ERRORS as exc:
            logger.info("error getting %s of the deployment: %s", probe.name, exc)
            return probe.fallback()

    async def probe_all(self, instance: RunningInstance, container: str) -> ProbedFacts:
        """Run every probe concurrently and collect the observed facts.

        Best-effort probes never raise; a ports failure propagates once the
        other probes have finished.
        """
        probes = self.best_effort_probes()
        results = await asyncio.gather(
            *(self._run_best_effort(p, instance, container) for p in probes),
            self.probe_ports(instance),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        *values, ports = results
        observed = {probe.name: value for probe, value in zip(probes, values)}
        return ProbedFacts(
            user_id=observed["user"],
            workdir=observed["workdir"],
            command=observed["command"],
            has_resource_limits=observed["resources"],
            ports=ports,
        )
