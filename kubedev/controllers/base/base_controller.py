"""Base controller with kubectl-backed async patterns for kubedev.

This module provides the foundation for reading cluster state through kubectl,
running each blocking command in a worker thread so several probes can be in
flight at once.
"""

from __future__ import annotations

import asyncio
import logging
import math
import subprocess
from abc import ABC, abstractmethod
from contextlib import suppress

from kubedev.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)


class KubectlControllerMixin:
    """Mixin providing a kubectl runner for controllers.

    Commands are passed as argument tuples (without the ``kubectl`` prefix)
    and return stdout. A non-zero exit raises ``RuntimeError`` carrying stderr.
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        """Initialize the kubectl controller mixin."""
        self.settings = settings or AppSettings()

    @property
    def context(self) -> str | None:
        return self.settings.context

    @staticmethod
    def _is_exec_command(args: tuple[str, ...]) -> bool:
        """Return True when args run a command inside a container."""
        return bool(args) and args[0] == "exec"

    @staticmethod
    def _request_timeout_seconds(args: tuple[str, ...]) -> int | None:
        """Parse kubectl --request-timeout value (seconds) from args."""
        prefix = "--request-timeout="
        for part in args:
            if not part.startswith(prefix):
                continue
            value = part[len(prefix):].strip().lower()
            if value.endswith("s"):
                value = value[:-1]
            if not value:
                return None
            with suppress(ValueError):
                seconds = float(value)
                if seconds > 0:
                    return max(1, math.ceil(seconds))
        return None

    def _kubectl_timeout_for_args(self, args: tuple[str, ...]) -> int:
        """Choose a process timeout based on command shape."""
        if self._is_exec_command(args):
            return self.settings.exec_timeout
        request_timeout_seconds = self._request_timeout_seconds(args)
        if request_timeout_seconds is not None:
            return min(
                self.settings.command_timeout,
                max(20, request_timeout_seconds + 10),
            )
        return self.settings.command_timeout

    def _run_kubectl_sync(
        self,
        args: tuple[str, ...],
        timeout: int | None = None,
    ) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = [self.settings.kubectl_path]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        effective_timeout = (
            timeout if timeout is not None else self._kubectl_timeout_for_args(args)
        )
        logger.debug("Running %s (timeout=%ss)", " ".join(cmd), effective_timeout)
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=effective_timeout
        )
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise RuntimeError(stderr or "kubectl command failed")
        return result.stdout

    async def _run_kubectl(self, args: tuple[str, ...]) -> str:
        """Run kubectl without blocking the event loop."""
        return await asyncio.to_thread(self._run_kubectl_sync, args)


class BaseController(KubectlControllerMixin, ABC):
    """Base controller class for kubectl-backed operations.

    Subclasses should implement the abstract methods to provide
    specific cluster read functionality.
    """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the cluster is reachable.

        Returns:
            True if connection is available, False otherwise
        """
        ...
