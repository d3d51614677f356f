"""Fetchers for the dev controller."""

from kubedev.controllers.dev.fetchers.runtime_fetcher import (
    BestEffortProbe,
    RuntimeIntrospector,
)
from kubedev.controllers.dev.fetchers.workload_fetcher import WorkloadResolver

__all__ = ["BestEffortProbe", "RuntimeIntrospector", "WorkloadResolver"]
