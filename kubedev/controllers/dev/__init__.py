"""Init file for dev module."""

from kubedev.controllers.dev.controller import DevController
from kubedev.controllers.dev.errors import (
    DevInferenceError,
    HardProbeFailure,
    NotRunningError,
    ResolutionError,
    SoftProbeFailure,
)
from kubedev.controllers.dev.fetchers import RuntimeIntrospector, WorkloadResolver
from kubedev.controllers.dev.synthesizer import ConfigSynthesizer, plan_forwards

__all__ = [
    "ConfigSynthesizer",
    "DevController",
    "DevInferenceError",
    "HardProbeFailure",
    "NotRunningError",
    "ResolutionError",
    "RuntimeIntrospector",
    "SoftProbeFailure",
    "WorkloadResolver",
    "plan_forwards",
]
