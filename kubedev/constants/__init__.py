"""Constants for kubedev.

Re-exports the most commonly used values from the submodules.
"""

from kubedev.constants.defaults import (
    LOG_LEVEL_DEFAULT,
    NAMESPACE_DEFAULT,
    PRIVILEGED_PORT_MAX,
    PRIVILEGED_PORT_OFFSET,
    RESOURCE_LIMIT_CPU_DEFAULT,
    RESOURCE_LIMIT_MEMORY_DEFAULT,
    SHELL_DEFAULT,
    SHELL_PREFERENCE,
    WORKDIR_DEFAULT,
)
from kubedev.constants.enums import ContainerState, PodPhase
from kubedev.constants.labels import (
    COMPONENT_LABELS,
    DEPLOYMENT_REVISION_ANNOTATION,
    FLUX_ANNOTATION,
    FLUX_IGNORE_ANNOTATION,
)
from kubedev.constants.timeouts import (
    CLUSTER_CHECK_TIMEOUT,
    CLUSTER_REQUEST_TIMEOUT,
    EXEC_PROBE_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)

__all__ = [
    "CLUSTER_CHECK_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "COMPONENT_LABELS",
    "DEPLOYMENT_REVISION_ANNOTATION",
    "EXEC_PROBE_TIMEOUT",
    "FLUX_ANNOTATION",
    "FLUX_IGNORE_ANNOTATION",
    "KUBECTL_COMMAND_TIMEOUT",
    "LOG_LEVEL_DEFAULT",
    "NAMESPACE_DEFAULT",
    "PRIVILEGED_PORT_MAX",
    "PRIVILEGED_PORT_OFFSET",
    "RESOURCE_LIMIT_CPU_DEFAULT",
    "RESOURCE_LIMIT_MEMORY_DEFAULT",
    "SHELL_DEFAULT",
    "SHELL_PREFERENCE",
    "WORKDIR_DEFAULT",
    "ContainerState",
    "PodPhase",
]
