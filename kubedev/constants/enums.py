"""All enum definitions for dev descriptor inference."""

from enum import Enum

# =============================================================================
# Status Enums
# =============================================================================

class PodPhase(Enum):
    """Pod phase values from Kubernetes API."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class ContainerState(Enum):
    """Container state keys reported in pod container statuses."""

    RUNNING = "running"
    WAITING = "waiting"
    TERMINATED = "terminated"
    UNKNOWN = "unknown"
