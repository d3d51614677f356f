"""Workload parser for dev controller - parses deployment and replica set objects."""

from __future__ import annotations

from typing import Any

from kubedev.constants.labels import DEPLOYMENT_REVISION_ANNOTATION
from kubedev.models.dev.workload import WorkloadInfo


class WorkloadParser:
    """Parses deployment and replica set data into structured formats."""

    def __init__(self) -> None:
        """Initialize workload parser."""
        pass

    @staticmethod
    def _string_map(value: Any) -> dict[str, str]:
        """Coerce a labels/annotations mapping into ``dict[str, str]``."""
        if not isinstance(value, dict):
            return {}
        return {str(k): str(v) for k, v in value.items() if v is not None}

    def parse_workload(self, deployment: dict[str, Any]) -> WorkloadInfo:
        """Parse a deployment into WorkloadInfo.

        Args:
            deployment: Raw deployment dictionary from API

        Returns:
            WorkloadInfo object.
        """
        metadata = deployment.get("metadata", {})
        spec = deployment.get("spec", {})
        annotations = self._string_map(metadata.get("annotations"))
        template_spec = spec.get("template", {}).get("spec", {})

        return WorkloadInfo(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", "default"),
            uid=metadata.get("uid", ""),
            revision=annotations.get(DEPLOYMENT_REVISION_ANNOTATION),
            labels=self._string_map(metadata.get("labels")),
            annotations=annotations,
            match_labels=self._string_map(
                spec.get("selector", {}).get("matchLabels")
            ),
            container_names=[
                c["name"]
                for c in template_spec.get("containers", [])
                if isinstance(c, dict) and c.get("name")
            ],
        )

    @staticmethod
    def is_owned_by(item: dict[str, Any], owner_uid: str) -> bool:
        """Return True when ``item`` lists ``owner_uid`` among its owner references."""
        if not owner_uid:
            return False
        owners = item.get("metadata", {}).get("ownerReferences", [])
        return any(
            isinstance(owner, dict) and owner.get("uid") == owner_uid
            for owner in owners
        )

    def find_current_replica_set(
        self,
        replica_sets: list[dict[str, Any]],
        workload: WorkloadInfo,
    ) -> dict[str, Any] | None:
        """Pick the replica set that owns the deployment's current revision."""
        for rs in replica_sets:
            if not self.is_owned_by(rs, workload.uid):
                continue
            annotations = rs.get("metadata", {}).get("annotations") or {}
            if (
                workload.revision is not None
                and annotations.get(DEPLOYMENT_REVISION_ANNOTATION) != workload.revision
            ):
                continue
            return rs
        return None
