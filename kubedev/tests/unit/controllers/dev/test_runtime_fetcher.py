"""Tests for runtime fetcher."""

from __future__ import annotations

import logging
import subprocess

import pytest
from conftest import FakeKubectl, make_pod, make_service

from kubedev.controllers.dev.errors import HardProbeFailure
from kubedev.controllers.dev.fetchers.runtime_fetcher import RuntimeIntrospector
from kubedev.controllers.dev.parsers.pod_parser import PodParser
from kubedev.models.dev.workload import RunningInstance


def _instance(**kwargs) -> RunningInstance:
    return PodParser().parse_running_instance(make_pod(**kwargs))


class TestRuntimeIntrospector:
    """Tests for RuntimeIntrospector class."""

    @pytest.fixture
    def instance(self) -> RunningInstance:
        return _instance()

    @pytest.mark.asyncio
    async def test_probe_all_success(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        facts = await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

        assert facts.user_id == 1000
        assert facts.workdir == "/app"
        assert facts.command == ["bash"]
        assert facts.has_resource_limits is False
        assert facts.ports == [8080]

    @pytest.mark.asyncio
    async def test_exec_targets_pod_namespace_and_container(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        await RuntimeIntrospector(fake_kubectl).probe_user(instance, "api")

        call = fake_kubectl.calls[0]
        assert call[:7] == ("exec", "api-7d9f-x1", "-n", "dev", "-c", "api", "--")

    @pytest.mark.asyncio
    async def test_user_probe_failure_leaves_user_unset(
        self,
        fake_kubectl: FakeKubectl,
        instance: RunningInstance,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        fake_kubectl.exec_results[("id", "-u")] = RuntimeError("id: not found")

        with caplog.at_level(logging.INFO):
            facts = await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

        assert facts.user_id is None
        assert "error getting user of the deployment" in caplog.text
        assert facts.workdir == "/app"

    @pytest.mark.asyncio
    async def test_user_probe_non_numeric_output_is_soft(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        fake_kubectl.exec_results[("id", "-u")] = "nobody\n"

        facts = await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

        assert facts.user_id is None

    @pytest.mark.asyncio
    async def test_root_user_is_not_reported(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        fake_kubectl.exec_results[("id", "-u")] = "0\n"

        assert await RuntimeIntrospector(fake_kubectl).probe_user(instance, "api") is None

    @pytest.mark.asyncio
    async def test_workdir_failure_falls_back(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        fake_kubectl.exec_results[("pwd",)] = subprocess.TimeoutExpired("kubectl", 20)

        facts = await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

        assert facts.workdir == "/okteto"

    @pytest.mark.asyncio
    async def test_relative_workdir_falls_back(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        fake_kubectl.exec_results[("pwd",)] = "\n"

        facts = await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

        assert facts.workdir == "/okteto"

    @pytest.mark.asyncio
    async def test_command_prefers_bash(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        command = await RuntimeIntrospector(fake_kubectl).probe_command(instance, "api")

        assert command == ["bash"]
        assert fake_kubectl.exec_commands() == [("bash", "-c", "exit 0")]

    @pytest.mark.asyncio
    async def test_command_uses_sh_when_bash_missing(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        del fake_kubectl.exec_results[("bash", "-c", "exit 0")]

        command = await RuntimeIntrospector(fake_kubectl).probe_command(instance, "api")

        assert command == ["sh"]

    @pytest.mark.asyncio
    async def test_command_falls_back_when_no_shell_found(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        del fake_kubectl.exec_results[("bash", "-c", "exit 0")]
        del fake_kubectl.exec_results[("sh", "-c", "exit 0")]

        facts = await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

        assert facts.command == ["sh"]

    @pytest.mark.asyncio
    async def test_resource_limits_detected(self, fake_kubectl: FakeKubectl) -> None:
        instance = _instance(limits={"cpu": "250m", "memory": "512Mi"})

        facts = await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

        assert facts.has_resource_limits is True

    @pytest.mark.asyncio
    async def test_resource_probe_unknown_container_is_soft(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        introspector = RuntimeIntrospector(fake_kubectl)

        facts = await introspector.probe_all(instance, "missing")

        assert facts.has_resource_limits is False

    @pytest.mark.asyncio
    async def test_ports_failure_is_hard(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        fake_kubectl.services = RuntimeError("forbidden")

        with pytest.raises(HardProbeFailure, match="forbidden"):
            await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

    @pytest.mark.asyncio
    async def test_ports_failure_does_not_cancel_other_probes(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        fake_kubectl.services = RuntimeError("forbidden")

        with pytest.raises(HardProbeFailure):
            await RuntimeIntrospector(fake_kubectl).probe_all(instance, "api")

        assert ("pwd",) in fake_kubectl.exec_commands()
        assert ("id", "-u") in fake_kubectl.exec_commands()

    @pytest.mark.asyncio
    async def test_ports_non_object_json_is_hard(
        self, instance: RunningInstance
    ) -> None:
        async def list_output(args: tuple[str, ...]) -> str:
            return "[]"

        with pytest.raises(HardProbeFailure, match="unexpected output"):
            await RuntimeIntrospector(list_output).probe_ports(instance)

    @pytest.mark.asyncio
    async def test_ports_follow_service_order(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        fake_kubectl.services = [
            make_service([{"port": 80}, {"port": 9000, "targetPort": 9000}]),
            make_service([{"port": 8080}], selector={"app": "other"}),
            make_service([{"port": 8080, "targetPort": "8080"}]),
        ]

        ports = await RuntimeIntrospector(fake_kubectl).probe_ports(instance)

        assert ports == [80, 9000, 8080]

    @pytest.mark.asyncio
    async def test_named_target_port_resolved_from_container(
        self, fake_kubectl: FakeKubectl
    ) -> None:
        instance = _instance(
            container_ports=[{"name": "http", "containerPort": 3000}]
        )
        fake_kubectl.services = [make_service([{"port": 80, "targetPort": "http"}])]

        ports = await RuntimeIntrospector(fake_kubectl).probe_ports(instance)

        assert ports == [3000]

    @pytest.mark.asyncio
    async def test_no_matching_service_yields_no_ports(
        self, fake_kubectl: FakeKubectl, instance: RunningInstance
    ) -> None:
        fake_kubectl.services = []

        assert await RuntimeIntrospector(fake_kubectl).probe_ports(instance) == []

    def test_best_effort_probe_table(self, fake_kubectl: FakeKubectl) -> None:
        """Every best-effort probe declares its fallback."""
        probes = RuntimeIntrospector(fake_kubectl).best_effort_probes()

        fallbacks = {p.name: p.fallback() for p in probes}
        assert fallbacks == {
            "user": None,
            "workdir": "/okteto",
            "command": ["sh"],
            "resources": False,
        }
