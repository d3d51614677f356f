"""Tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
import yaml

from kubedev.app import build_parser, main, resolve_settings
from kubedev.controllers.dev.errors import NotRunningError
from kubedev.models.dev.dev_descriptor import DevDescriptor, PortForward


def _filled(dev: DevDescriptor, ref) -> DevDescriptor:
    dev.name = ref.name
    dev.workdir = "/app"
    dev.forward.append(PortForward(local=8080, remote=80))
    return dev


class TestApp:
    """Tests for main()."""

    def test_resolve_settings_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "kubedev.yaml"
        path.write_text("namespace: base\ncontext: prod\n")
        args = build_parser().parse_args(
            ["api", "--config", str(path), "-n", "dev", "--log-level", "debug"]
        )

        settings = resolve_settings(args)

        assert settings.namespace == "dev"
        assert settings.context == "prod"
        assert settings.log_level == "debug"

    def test_main_prints_manifest(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "kubedev.app.DevController.infer",
            new=AsyncMock(side_effect=_filled),
        ) as infer:
            code = main(["api", "-n", "dev", "-c", "web"])

        assert code == 0
        ref = infer.await_args.args[1]
        assert (ref.name, ref.namespace, ref.container) == ("api", "dev", "web")
        assert yaml.safe_load(capsys.readouterr().out) == {
            "name": "api",
            "workdir": "/app",
            "forward": ["8080:80"],
        }

    def test_main_writes_output_file(self, tmp_path: Path) -> None:
        output = tmp_path / "okteto.yml"
        with patch(
            "kubedev.app.DevController.infer",
            new=AsyncMock(side_effect=_filled),
        ):
            code = main(["api", "-o", str(output)])

        assert code == 0
        assert yaml.safe_load(output.read_text())["name"] == "api"

    def test_main_reports_inference_errors(self) -> None:
        with patch(
            "kubedev.app.DevController.infer",
            new=AsyncMock(side_effect=NotRunningError("api")),
        ):
            assert main(["api"]) == 1

    def test_main_reports_config_errors(self, tmp_path: Path) -> None:
        assert main(["api", "--config", str(tmp_path / "missing.yaml")]) == 1
