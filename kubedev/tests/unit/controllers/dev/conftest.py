"""Shared fixtures for dev controller tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

DEPLOYMENT_UID = "deploy-uid"
RS_UID = "rs-uid"


def make_deployment(
    name: str = "api",
    labels: dict[str, str] | None = None,
    annotations: dict[str, str] | None = None,
    containers: tuple[str, ...] = ("api",),
) -> dict[str, Any]:
    return {
        "metadata": {
            "name": name,
            "namespace": "dev",
            "uid": DEPLOYMENT_UID,
            "labels": labels if labels is not None else {"app": name},
            "annotations": {
                "deployment.kubernetes.io/revision": "2",
                **(annotations or {}),
            },
        },
        "spec": {
            "selector": {"matchLabels": {"app": name}},
            "template": {"spec": {"containers": [{"name": c} for c in containers]}},
        },
    }


def make_replica_set(
    name: str = "api-7d9f", uid: str = RS_UID, revision: str = "2"
) -> dict[str, Any]:
    return {
        "metadata": {
            "name": name,
            "uid": uid,
            "annotations": {"deployment.kubernetes.io/revision": revision},
            "ownerReferences": [{"kind": "Deployment", "uid": DEPLOYMENT_UID}],
        }
    }


def make_pod(
    name: str = "api-7d9f-x1",
    phase: str = "Running",
    container_state: str = "running",
    owner_uid: str = RS_UID,
    limits: dict[str, str] | None = None,
    container_ports: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    resources: dict[str, Any] = {}
    if limits is not None:
        resources["limits"] = limits
    return {
        "metadata": {
            "name": name,
            "namespace": "dev",
            "uid": f"{name}-uid",
            "labels": {"app": "api"},
            "ownerReferences": [{"kind": "ReplicaSet", "uid": owner_uid}],
        },
        "spec": {
            "containers": [
                {
                    "name": "api",
                    "resources": resources,
                    "ports": container_ports or [],
                }
            ]
        },
        "status": {
            "phase": phase,
            "containerStatuses": [
                {"name": "api", "state": {container_state: {}}},
            ],
        },
    }


def make_service(
    ports: list[dict[str, Any]], selector: dict[str, str] | None = None
) -> dict[str, Any]:
    return {
        "metadata": {"name": "api"},
        "spec": {
            "selector": selector if selector is not None else {"app": "api"},
            "ports": ports,
        },
    }


class FakeKubectl:
    """Async kubectl stand-in answering from in-memory objects."""

    def __init__(self) -> None:
        self.deployment: dict[str, Any] | None = make_deployment()
        self.replica_sets: list[dict[str, Any]] = [make_replica_set()]
        self.pods: list[dict[str, Any]] = [make_pod()]
        self.services: list[dict[str, Any]] | Exception = [
            make_service([{"port": 80, "targetPort": 8080}])
        ]
        self.exec_results: dict[tuple[str, ...], str | Exception] = {
            ("id", "-u"): "1000\n",
            ("pwd",): "/app\n",
            ("bash", "-c", "exit 0"): "",
            ("sh", "-c", "exit 0"): "",
        }
        self.calls: list[tuple[str, ...]] = []

    async def __call__(self, args: tuple[str, ...]) -> str:
        self.calls.append(args)
        if args[0] == "exec":
            command = args[args.index("--") + 1:]
            result = self.exec_results.get(
                command, RuntimeError(f"exec: {command[0]}: not found")
            )
            if isinstance(result, Exception):
                raise result
            return result

        kind = args[1]
        if kind == "deployment":
            if self.deployment is None:
                raise RuntimeError('deployments.apps "api" not found')
            return json.dumps(self.deployment)
        if kind == "deployments":
            return json.dumps({"items": [self.deployment] if self.deployment else []})
        if kind == "replicasets":
            return json.dumps({"items": self.replica_sets})
        if kind == "pods":
            return json.dumps({"items": self.pods})
        if kind == "services":
            if isinstance(self.services, Exception):
                raise self.services
            return json.dumps({"items": self.services})
        raise RuntimeError(f"unexpected kubectl call {args}")

    def exec_commands(self) -> list[tuple[str, ...]]:
        return [c[c.index("--") + 1:] for c in self.calls if c[0] == "exec"]


@pytest.fixture
def fake_kubectl() -> FakeKubectl:
    """Create a fake cluster with one running pod."""
    return FakeKubectl()
