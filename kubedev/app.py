"""Command-line entry point for kubedev."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from kubedev.controllers.dev import DevController, DevInferenceError
from kubedev.models.dev.dev_descriptor import DevDescriptor
from kubedev.models.dev.workload import WorkloadRef
from kubedev.models.state.app_settings import AppSettings, ConfigError, load_settings

console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubedev",
        description="Infer a dev manifest from a deployment running in Kubernetes.",
    )
    parser.add_argument("deployment", help="Deployment name")
    parser.add_argument("-n", "--namespace", help="Namespace of the deployment")
    parser.add_argument("-c", "--container", help="Container to develop in")
    parser.add_argument("--context", help="kubectl context to use")
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("-o", "--output", type=Path, help="Write the manifest here")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    """Load settings and apply command-line overrides."""
    settings = load_settings(args.config)
    overrides = {
        key: value
        for key, value in (
            ("namespace", args.namespace),
            ("context", args.context),
            ("log_level", args.log_level),
        )
        if value
    }
    return settings.model_copy(update=overrides)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except ConfigError as exc:
        console.print(f"[bold red] x [/] [red]{exc}[/]")
        return 1
    configure_logging(settings.log_level)

    ref = WorkloadRef(
        name=args.deployment,
        namespace=settings.namespace,
        container=args.container,
    )
    controller = DevController(settings)
    try:
        dev = asyncio.run(controller.infer(DevDescriptor(), ref))
    except DevInferenceError as exc:
        console.print(f"[bold red] x [/] [red]{exc}[/]")
        return 1

    manifest = dev.to_yaml()
    if args.output is None:
        print(manifest, end="")
        return 0

    try:
        args.output.write_text(manifest, encoding="utf-8")
    except OSError as exc:
        console.print(f"[bold red] x [/] [red]cannot write {args.output}: {exc}[/]")
        return 1
    console.print(f"[bold green] ✓ [/] [green]Dev manifest written to {args.output}[/]")
    return 0
