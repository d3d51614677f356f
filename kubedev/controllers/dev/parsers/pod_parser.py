"""Pod parser for dev controller - parses pods and services into structured formats."""

from __future__ import annotations

import logging
from typing import Any

from kubedev.constants.enums import ContainerState, PodPhase
from kubedev.models.dev.workload import RunningInstance

logger = logging.getLogger(__name__)


class PodParser:
    """Parses pod and service data into structured formats."""

    def __init__(self) -> None:
        """Initialize pod parser."""
        pass

    @staticmethod
    def _parse_phase(raw_phase: Any) -> PodPhase:
        try:
            return PodPhase(raw_phase)
        except ValueError:
            return PodPhase.UNKNOWN

    @staticmethod
    def _parse_container_state(status: dict[str, Any]) -> ContainerState:
        """Map a container status entry to its current state key."""
        state = status.get("state") or {}
        for candidate in (
            ContainerState.RUNNING,
            ContainerState.WAITING,
            ContainerState.TERMINATED,
        ):
            if state.get(candidate.value) is not None:
                return candidate
        return ContainerState.UNKNOWN

    def parse_running_instance(self, pod: dict[str, Any]) -> RunningInstance:
        """Parse a single pod into RunningInstance.

        Args:
            pod: Raw pod dictionary from API

        Returns:
            RunningInstance object.
        """
        metadata = pod.get("metadata", {})
        status = pod.get("status", {})
        labels = metadata.get("labels") or {}

        container_states = {
            entry["name"]: self._parse_container_state(entry)
            for entry in status.get("containerStatuses") or []
            if isinstance(entry, dict) and entry.get("name")
        }

        return RunningInstance(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", "default"),
            uid=metadata.get("uid", ""),
            phase=self._parse_phase(status.get("phase")),
            labels={str(k): str(v) for k, v in labels.items()},
            container_states=container_states,
            spec=pod.get("spec", {}),
        )

    @staticmethod
    def container_limits(instance: RunningInstance, container: str) -> dict[str, Any] | None:
        """Return the limits declared on a container, or None when it is not in the spec."""
        spec = instance.container_spec(container)
        if spec is None:
            return None
        limits = (spec.get("resources") or {}).get("limits") or {}
        if limits:
            logger.debug(
                "Container %s/%s declares limits cpu=%s memory=%s",
                instance.name,
                container,
                limits.get("cpu", "-"),
                limits.get("memory", "-"),
            )
        return limits

    @staticmethod
    def _selector_matches_labels(
        selector: dict[str, Any], labels: dict[str, str]
    ) -> bool:
        if not selector:
            return False
        return all(labels.get(key) == value for key, value in selector.items())

    @staticmethod
    def _resolve_target_port(
        port: dict[str, Any], instance: RunningInstance
    ) -> int | None:
        """Resolve a service port to the port the pod actually listens on."""
        target = port.get("targetPort")
        if isinstance(target, int) and target > 0:
            return target
        if isinstance(target, str) and target:
            if target.isdigit():
                return int(target)
            for container in instance.spec.get("containers", []):
                for container_port in container.get("ports") or []:
                    if container_port.get("name") == target:
                        return container_port.get("containerPort")
            return None
        service_port = port.get("port")
        return service_port if isinstance(service_port, int) else None

    def parse_service_ports(
        self, services: list[dict[str, Any]], instance: RunningInstance
    ) -> list[int]:
        """Collect the target ports of every service selecting this pod.

        Args:
            services: Raw service dictionaries from the pod's namespace
            instance: The pod the services should select

        Returns:
            Remote ports in service order, then port order.
        """
        ports: list[int] = []
        for service in services:
            selector = service.get("spec", {}).get("selector") or {}
            if not self._selector_matches_labels(selector, instance.labels):
                continue
            for port in service.get("spec", {}).get("ports") or []:
                resolved = self._resolve_target_port(port, instance)
                if resolved is None:
                    logger.debug(
                        "Skipping unresolvable port %s on service %s",
                        port.get("name") or port.get("port"),
                        service.get("metadata", {}).get("name"),
                    )
                    continue
                ports.append(resolved)
        return ports
