"""Config synthesizer - merges probed runtime facts into a dev descriptor.

Every merge rule only writes fields the caller left unset, so a descriptor
that is already filled in passes through unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from kubedev.constants.defaults import (
    PRIVILEGED_PORT_MAX,
    PRIVILEGED_PORT_OFFSET,
    RESOURCE_LIMIT_CPU_DEFAULT,
    RESOURCE_LIMIT_MEMORY_DEFAULT,
)
from kubedev.constants.labels import (
    COMPONENT_LABELS,
    FLUX_ANNOTATION,
    FLUX_IGNORE_ANNOTATION,
)
from kubedev.models.dev.dev_descriptor import (
    DevDescriptor,
    PortForward,
    ResourceRequirements,
    SecurityContext,
)
from kubedev.models.dev.probed_facts import ProbedFacts
from kubedev.models.dev.workload import RunningInstance, WorkloadInfo

logger = logging.getLogger(__name__)


def plan_forwards(
    remote_ports: Iterable[int], existing: Iterable[PortForward]
) -> list[PortForward]:
    """Assign a free local port to each remote port, in order.

    Privileged remote ports are shifted by a fixed offset, then the local port
    is bumped until it no longer collides with any forward already taken.
    Repeated remote ports each get their own local port.

    Remote ports the existing forwards already cover are skipped on purpose,
    so filling the same descriptor twice leaves it unchanged.
    """
    existing = list(existing)
    seen = {f.local for f in existing}
    forwarded = {f.remote for f in existing}
    planned: list[PortForward] = []
    for remote in remote_ports:
        if remote in forwarded:
            continue
        local = remote
        if local <= PRIVILEGED_PORT_MAX:
            local += PRIVILEGED_PORT_OFFSET
        while local in seen:
            local += 1
        seen.add(local)
        planned.append(PortForward(local=local, remote=remote))
    return planned


class ConfigSynthesizer:
    """Applies merge rules that fill unset dev descriptor fields."""

    def __init__(self, component_labels: tuple[str, ...] = COMPONENT_LABELS) -> None:
        """Initialize the synthesizer.

        Args:
            component_labels: Label keys tried in order to name the descriptor
        """
        self.component_labels = component_labels

    def _component_label(self, labels: dict[str, str]) -> tuple[str, str] | None:
        for key in self.component_labels:
            value = labels.get(key)
            if value:
                return key, value
        return None

    def apply_name_and_labels(self, dev: DevDescriptor, workload: WorkloadInfo) -> None:
        match = self._component_label(workload.labels)
        if match is None:
            if dev.name is None:
                dev.name = workload.name
            return
        key, value = match
        if dev.name is None:
            dev.name = value
        if dev.labels is None:
            dev.labels = {key: value}

    def apply_annotations(self, dev: DevDescriptor, workload: WorkloadInfo) -> None:
        if dev.annotations is not None:
            return
        if workload.annotations.get(FLUX_ANNOTATION):
            dev.annotations = {FLUX_IGNORE_ANNOTATION: "true"}

    def apply_command(self, dev: DevDescriptor, facts: ProbedFacts) -> None:
        if dev.command is None:
            dev.command = list(facts.command)

    def apply_user_and_workdir(self, dev: DevDescriptor, facts: ProbedFacts) -> None:
        # A caller-provided workdir means user settings were chosen by hand too.
        if dev.workdir:
            return
        dev.workdir = facts.workdir
        if facts.user_id is not None and dev.security_context is None:
            dev.security_context = SecurityContext(run_as_user=facts.user_id)

    def apply_resources(self, dev: DevDescriptor, facts: ProbedFacts) -> None:
        if dev.resources is not None or not facts.has_resource_limits:
            return
        dev.resources = ResourceRequirements(
            limits={
                "cpu": RESOURCE_LIMIT_CPU_DEFAULT,
                "memory": RESOURCE_LIMIT_MEMORY_DEFAULT,
            }
        )

    def apply_forwards(self, dev: DevDescriptor, facts: ProbedFacts) -> None:
        dev.forward.extend(plan_forwards(facts.ports, dev.forward))

    def synthesize(
        self,
        dev: DevDescriptor,
        instance: RunningInstance,
        workload: WorkloadInfo,
        facts: ProbedFacts,
    ) -> DevDescriptor:
        """Fill the unset fields of ``dev`` in place and return it.

        Args:
            dev: Descriptor owned by the caller
            instance: Pod the facts were observed on
            workload: Deployment metadata (labels, annotations, name)
            facts: Probe results with fallbacks applied

        Returns:
            The same descriptor object.
        """
        logger.debug("Synthesizing dev descriptor from pod %s", instance.name)
        self.apply_name_and_labels(dev, workload)
        self.apply_annotations(dev, workload)
        self.apply_command(dev, facts)
        self.apply_user_and_workdir(dev, facts)
        self.apply_resources(dev, facts)
        self.apply_forwards(dev, facts)
        return dev
