"""Base controller classes."""

from kubedev.controllers.base.base_controller import (
    BaseController,
    KubectlControllerMixin,
)

__all__ = ["BaseController", "KubectlControllerMixin"]
