"""Controllers module for kubedev.

This module provides controllers that read Kubernetes state through kubectl
and turn it into dev descriptors.
"""

from __future__ import annotations

# Base classes
from kubedev.controllers.base import BaseController, KubectlControllerMixin

# Dev domain
from kubedev.controllers.dev import (
    DevController,
    DevInferenceError,
    HardProbeFailure,
    NotRunningError,
    ResolutionError,
)

__all__ = [
    # Base
    "BaseController",
    "KubectlControllerMixin",
    # Dev domain
    "DevController",
    "DevInferenceError",
    "HardProbeFailure",
    "NotRunningError",
    "ResolutionError",
]
