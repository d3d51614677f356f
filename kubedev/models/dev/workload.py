"""Workload and running-instance models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kubedev.constants.enums import ContainerState, PodPhase


class WorkloadRef(BaseModel):
    """Reference to a deployment and the container to develop in."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = "default"
    container: str | None = None


class WorkloadInfo(BaseModel):
    """Deployment metadata needed to resolve and describe a workload."""

    name: str
    namespace: str
    uid: str = ""
    revision: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    match_labels: dict[str, str] = Field(default_factory=dict)
    container_names: list[str] = Field(default_factory=list)


class RunningInstance(BaseModel):
    """The live pod backing a workload, resolved fresh for each inference."""

    name: str
    namespace: str
    uid: str = ""
    phase: PodPhase = PodPhase.UNKNOWN
    labels: dict[str, str] = Field(default_factory=dict)
    container_states: dict[str, ContainerState] = Field(default_factory=dict)
    spec: dict[str, Any] = Field(default_factory=dict)

    def container_state(self, container: str) -> ContainerState:
        """Return the reported state of one container."""
        return self.container_states.get(container, ContainerState.UNKNOWN)

    def is_usable(self, container: str) -> bool:
        """Both the pod and the target container must be running."""
        return (
            self.phase == PodPhase.RUNNING
            and self.container_state(container) == ContainerState.RUNNING
        )

    def container_spec(self, container: str) -> dict[str, Any] | None:
        """Return the pod spec entry for a container, if declared."""
        for entry in self.spec.get("containers", []):
            if isinstance(entry, dict) and entry.get("name") == container:
                return entry
        return None
