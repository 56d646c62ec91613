"""Harness configuration.

Settings come from an optional ``charforge.yaml`` in the working directory
(or an explicit path), with ``CHARFORGE_API_URL`` overriding the backend
URL. Command-line flags override both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from charforge.observability.logging import get_logger

log = get_logger(__name__)

CONFIG_FILENAME = "charforge.yaml"
DEFAULT_API_URL = "http://localhost:7860"
DEFAULT_CONCURRENCY = 3


class ConfigError(Exception):
    """Raised when harness configuration cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load harness config at {path}: {reason}")


@dataclass
class HarnessConfig:
    """Settings for evaluation runs."""

    api_url: str = DEFAULT_API_URL
    concurrency: int = DEFAULT_CONCURRENCY
    max_retries: int = 0
    backend_validate: bool = False
    backend_compute: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HarnessConfig:
        """Create config from dictionary.

        Args:
            data: Dictionary with any of api_url, concurrency, max_retries,
                backend_validate, backend_compute.

        Returns:
            HarnessConfig instance. Counts are clamped to their minimums.

        Raises:
            ValueError: If a count is not an integer.
        """
        return cls(
            api_url=str(data.get("api_url", DEFAULT_API_URL)),
            concurrency=max(1, int(data.get("concurrency", DEFAULT_CONCURRENCY))),
            max_retries=max(0, int(data.get("max_retries", 0))),
            backend_validate=bool(data.get("backend_validate", False)),
            backend_compute=bool(data.get("backend_compute", False)),
        )


def _apply_env(config: HarnessConfig) -> HarnessConfig:
    api_url = os.getenv("CHARFORGE_API_URL")
    if api_url:
        config.api_url = api_url
    return config


def load_harness_config(path: Path | None = None) -> HarnessConfig:
    """Load harness configuration.

    Args:
        path: Explicit config file. When None, ``charforge.yaml`` in the
            current directory is used if present, otherwise defaults.

    Returns:
        HarnessConfig instance.

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid.
    """
    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if not candidate.exists():
            return _apply_env(HarnessConfig())
        path = candidate
    elif not path.exists():
        raise ConfigError(path, "File not found")

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)

        if data is None:
            raise ConfigError(path, "Empty file")
        if not isinstance(data, dict):
            raise ConfigError(path, "Expected a mapping at the top level")

        config = HarnessConfig.from_dict(dict(data))
    except Exception as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(path, str(e)) from e

    log.debug("config_loaded", path=str(path))
    return _apply_env(config)
