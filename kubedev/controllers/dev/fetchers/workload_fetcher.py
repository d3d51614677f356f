"""Workload fetcher for dev controller - resolves the running pod behind a deployment."""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

from kubedev.constants.enums import PodPhase
from kubedev.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kubedev.controllers.dev.errors import NotRunningError, ResolutionError
from kubedev.controllers.dev.parsers.pod_parser import PodParser
from kubedev.controllers.dev.parsers.workload_parser import WorkloadParser
from kubedev.models.dev.workload import RunningInstance, WorkloadInfo, WorkloadRef

logger = logging.getLogger(__name__)


class WorkloadResolver:
    """Resolves a deployment to the pod currently running its latest revision.

    The lookup walks deployment -> replica set -> pod -> container state,
    stopping at the first step that fails.
    """

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
        self._workload_parser = WorkloadParser()
        self._pod_parser = PodParser()

    @staticmethod
    def _selector_arg(match_labels: dict[str, str]) -> tuple[str, ...]:
        if not match_labels:
            return ()
        selector = ",".join(f"{key}={value}" for key, value in match_labels.items())
        return ("-l", selector)

    async def _get_json(self, args: tuple[str, ...]) -> dict[str, Any]:
        """Run a read command and decode its JSON output.

        Raises:
            ResolutionError: kubectl failed or returned something other than an object.
        """
        full_args = (*args, "-o", "json", f"--request-timeout={self._request_timeout}")
        try:
            output = await self._run_kubectl(full_args)
            data = json.loads(output)
        except (RuntimeError, OSError, subprocess.TimeoutExpired) as exc:
            raise ResolutionError(f"kubectl {' '.join(args)} failed: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ResolutionError(f"invalid JSON from kubectl {' '.join(args)}") from exc
        if not isinstance(data, dict):
            raise ResolutionError(f"unexpected output from kubectl {' '.join(args)}")
        return data

    async def fetch_workload(self, ref: WorkloadRef) -> WorkloadInfo:
        """Fetch the deployment named by ``ref``."""
        deployment = await self._get_json(
            ("get", "deployment", ref.name, "-n", ref.namespace)
        )
        return self._workload_parser.parse_workload(deployment)

    async def fetch_current_replica_set(self, workload: WorkloadInfo) -> dict[str, Any]:
        """Fetch the replica set owned by the deployment's current revision."""
        data = await self._get_json(
            (
                "get",
                "replicasets",
                "-n",
                workload.namespace,
                *self._selector_arg(workload.match_labels),
            )
        )
        rs = self._workload_parser.find_current_replica_set(
            data.get("items", []), workload
        )
        if rs is None:
            raise ResolutionError(
                f"replicaset not found for deployment '{workload.name}'"
            )
        logger.debug(
            "Deployment %s resolved to replicaset %s",
            workload.name,
            rs.get("metadata", {}).get("name"),
        )
        return rs

    async def fetch_running_pod(
        self,
        workload: WorkloadInfo,
        replica_set: dict[str, Any],
        container: str,
    ) -> RunningInstance:
        """Return the first running pod of the replica set with ``container`` running."""
        rs_uid = replica_set.get("metadata", {}).get("uid", "")
        data = await self._get_json(
            (
                "get",
                "pods",
                "-n",
                workload.namespace,
                *self._selector_arg(workload.match_labels),
            )
        )
        for pod in data.get("items", []):
            if not self._workload_parser.is_owned_by(pod, rs_uid):
                continue
            instance = self._pod_parser.parse_running_instance(pod)
            if instance.phase != PodPhase.RUNNING:
                continue
            if not instance.is_usable(container):
                logger.debug(
                    "Pod %s is running but container %s is %s",
                    instance.name,
                    container,
                    instance.container_state(container).value,
                )
                raise NotRunningError(workload.name)
            return instance
        raise NotRunningError(workload.name)

    @staticmethod
    def target_container(ref: WorkloadRef, workload: WorkloadInfo) -> str:
        """Return the container to develop in, defaulting to the first one declared."""
        if ref.container:
            return ref.container
        if workload.container_names:
            return workload.container_names[0]
        raise ResolutionError(f"deployment '{workload.name}' declares no containers")

    async def resolve_workload(
        self, ref: WorkloadRef
    ) -> tuple[WorkloadInfo, RunningInstance, str]:
        """Resolve ``ref`` and also return the deployment metadata and container name.

        Raises:
            ResolutionError: The deployment or its current replica set was not found.
            NotRunningError: No running pod, or the target container is not running.
        """
        workload = await self.fetch_workload(ref)
        container = self.target_container(ref, workload)
        replica_set = await self.fetch_current_replica_set(workload)
        instance = await self.fetch_running_pod(workload, replica_set, container)
        return workload, instance, container

    async def resolve(self, ref: WorkloadRef) -> RunningInstance:
        """Resolve ``ref`` to its running pod."""
        _, instance, _ = await self.resolve_workload(ref)
        return instance
