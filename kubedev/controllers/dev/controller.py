"""Dev controller for inferring dev descriptors from running deployments.

This module wires the resolver, introspector and synthesizer into a single
inference call: resolve the running pod, probe it, then merge the facts into
the caller's descriptor.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess

from kubedev.constants.timeouts import CLUSTER_CHECK_TIMEOUT
from kubedev.controllers.base import BaseController
from kubedev.controllers.dev.fetchers import RuntimeIntrospector, WorkloadResolver
from kubedev.controllers.dev.synthesizer import ConfigSynthesizer
from kubedev.models.dev.dev_descriptor import DevDescriptor
from kubedev.models.dev.workload import WorkloadRef
from kubedev.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)


class DevController(BaseController):
    """Infers dev descriptors from deployments through kubectl.

    Delegates to:
    - WorkloadResolver: deployment -> replica set -> running pod
    - RuntimeIntrospector: user, workdir, shell, limits and ports of the pod
    - ConfigSynthesizer: merge rules over the caller's descriptor
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        """Initialize the dev controller.

        Args:
            settings: Cluster and kubectl settings.
        """
        super().__init__(settings)
        self._resolver = WorkloadResolver(
            self._run_kubectl, request_timeout=self.settings.request_timeout
        )
        self._introspector = RuntimeIntrospector(
            self._run_kubectl, request_timeout=self.settings.request_timeout
        )
        self._synthesizer = ConfigSynthesizer()

    async def check_connection(self) -> bool:
        """Check if the cluster answers a namespace-scoped read."""
        try:
            await asyncio.wait_for(
                self._run_kubectl(
                    (
                        "get",
                        "deployments",
                        "-n",
                        self.settings.namespace,
                        "-o",
                        "name",
                        f"--request-timeout={self.settings.request_timeout}",
                    )
                ),
                timeout=CLUSTER_CHECK_TIMEOUT,
            )
        except (
            RuntimeError,
            OSError,
            subprocess.TimeoutExpired,
            asyncio.TimeoutError,
        ) as exc:
            logger.debug("Cluster connection check failed: %s", exc)
            return False
        return True

    async def infer(self, dev: DevDescriptor, ref: WorkloadRef) -> DevDescriptor:
        """Fill unset fields of ``dev`` from the running deployment ``ref``.

        Raises:
            ResolutionError: The deployment or its replica set was not found.
            NotRunningError: No running pod backs the deployment.
            HardProbeFailure: The exposed ports could not be read.
        """
        workload, instance, container = await self._resolver.resolve_workload(ref)
        logger.debug(
            "Inferring dev descriptor from %s/%s container %s",
            instance.namespace,
            instance.name,
            container,
        )
        facts = await self._introspector.probe_all(instance, container)
        return self._synthesizer.synthesize(dev, instance, workload, facts)
