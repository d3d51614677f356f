"""Dev descriptor models.

The descriptor is owned by the caller and filled in place; every field starts
unset so merge rules can tell inferred values from user-provided ones.
"""

from __future__ import annotations

from typing import Any

import yaml
from pydantic import BaseModel, Field


class PortForward(BaseModel):
    """Local port on the developer machine mapped to a port in the pod."""

    local: int
    remote: int

    def __str__(self) -> str:
        return f"{self.local}:{self.remote}"


class SecurityContext(BaseModel):
    """Security settings for the dev container."""

    run_as_user: int | None = None


class ResourceRequirements(BaseModel):
    """Resource limits as Kubernetes quantity strings, keyed by resource name."""

    limits: dict[str, str] = Field(default_factory=dict)


class DevDescriptor(BaseModel):
    """Development environment descriptor inferred from a running deployment."""

    name: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    workdir: str | None = None
    command: list[str] | None = None
    security_context: SecurityContext | None = None
    resources: ResourceRequirements | None = None
    forward: list[PortForward] = Field(default_factory=list)

    def to_manifest(self) -> dict[str, Any]:
        """Render as an okteto-style manifest mapping, omitting unset fields."""
        manifest: dict[str, Any] = {}
        if self.name:
            manifest["name"] = self.name
        if self.labels:
            manifest["labels"] = dict(self.labels)
        if self.annotations:
            manifest["annotations"] = dict(self.annotations)
        if self.command:
            manifest["command"] = list(self.command)
        if self.workdir:
            manifest["workdir"] = self.workdir
        if self.security_context and self.security_context.run_as_user is not None:
            manifest["securityContext"] = {
                "runAsUser": self.security_context.run_as_user
            }
        if self.resources and self.resources.limits:
            manifest["resources"] = {"limits": dict(self.resources.limits)}
        if self.forward:
            manifest["forward"] = [str(f) for f in self.forward]
        return manifest

    def to_yaml(self) -> str:
        """Dump the manifest mapping as YAML."""
        return yaml.safe_dump(
            self.to_manifest(), default_flow_style=False, sort_keys=False
        )
