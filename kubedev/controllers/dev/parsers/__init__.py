"""Parsers for the dev controller."""

from kubedev.controllers.dev.parsers.pod_parser import PodParser
from kubedev.controllers.dev.parsers.workload_parser import WorkloadParser

__all__ = ["PodParser", "WorkloadParser"]
