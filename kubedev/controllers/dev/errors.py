"""Errors raised while inferring a dev descriptor."""

from __future__ import annotations


class DevInferenceError(Exception):
    """Base exception for dev descriptor inference."""


class ResolutionError(DevInferenceError):
    """The deployment or its current replica set could not be found."""


class NotRunningError(DevInferenceError):
    """No running pod (or running target container) backs the deployment."""

    def __init__(self, workload_name: str) -> None:
        self.workload_name = workload_name
        super().__init__(f"no pod is running for deployment '{workload_name}'")


class SoftProbeFailure(DevInferenceError):
    """A best-effort runtime probe could not observe its value."""


class HardProbeFailure(DevInferenceError):
    """A required runtime probe failed; inference cannot continue."""
