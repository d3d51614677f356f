"""Dev descriptor inference models."""

from kubedev.models.dev.dev_descriptor import (
    DevDescriptor,
    PortForward,
    ResourceRequirements,
    SecurityContext,
)
from kubedev.models.dev.probed_facts import ProbedFacts
from kubedev.models.dev.workload import RunningInstance, WorkloadInfo, WorkloadRef

__all__ = [
    "DevDescriptor",
    "PortForward",
    "ProbedFacts",
    "ResourceRequirements",
    "RunningInstance",
    "SecurityContext",
    "WorkloadInfo",
    "WorkloadRef",
]
