"""Application settings models."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from kubedev.constants.defaults import LOG_LEVEL_DEFAULT, NAMESPACE_DEFAULT
from kubedev.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    EXEC_PROBE_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Cluster
    context: str | None = None
    namespace: str = NAMESPACE_DEFAULT

    # kubectl
    kubectl_path: str = "kubectl"
    request_timeout: str = CLUSTER_REQUEST_TIMEOUT
    command_timeout: int = KUBECTL_COMMAND_TIMEOUT  # seconds
    exec_timeout: int = EXEC_PROBE_TIMEOUT  # seconds

    # Output
    log_level: str = LOG_LEVEL_DEFAULT


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


def load_settings(path: Path | None = None) -> AppSettings:
    """Load settings from a YAML file, or return defaults when no path is given.

    Raises:
        ConfigLoadError: The file is missing, unreadable or invalid.
    """
    if path is None:
        return AppSettings()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigLoadError(f"cannot read settings file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"malformed settings file {path}: {exc}") from exc

    if raw is None:
        return AppSettings()
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"settings file {path} must contain a mapping")

    try:
        return AppSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigLoadError(f"invalid settings in {path}: {exc}") from exc
