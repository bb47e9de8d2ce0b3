# exportify/config.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Configuration models for exportify.

Defaults reproduce the conventional JavaScript layout (lib/dist/build/out
outputs, src/source inputs). A YAML file can override any of them.

Example YAML:
    build_dirs: [dist, lib]
    source_dirs: [src]
    package_ignore: [node_modules, dist, build, fixtures]
    batch:
      concurrency: 20
      operation_timeout: 2.5
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "exportify.yaml"

DEFAULT_BUILD_DIRS = ("lib", "dist", "build", "out")
DEFAULT_SOURCE_DIRS = ("src", "source")


class BatchConfig(BaseModel):
    """Limits for batched filesystem work.

    Attributes:
        concurrency: Maximum simultaneous operations.
        continue_on_error: Record failures and keep going (default) instead of
            aborting the batch on the first failure.
        operation_timeout: Seconds before a single operation is marked failed.
        collect_stats: Record per-operation timings.
    """

    concurrency: int = Field(default=10, ge=1)
    continue_on_error: bool = True
    operation_timeout: float = Field(default=5.0, gt=0)
    collect_stats: bool = True


class ExportifyConfig(BaseModel):
    """Top-level configuration.

    Attributes:
        build_dirs: Compiled output directories, highest priority first.
        source_dirs: Source directories searched for the `source` condition.
        package_ignore: Directory names skipped when discovering package.json files.
        scan_ignore: Directory names skipped when scanning for imports.
        scan_extensions: File extensions scanned for imports.
        batch: Concurrency limits for filesystem probing.
    """

    build_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_BUILD_DIRS))
    source_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_DIRS))
    package_ignore: list[str] = Field(
        default_factory=lambda: ["node_modules", "dist", "build"]
    )
    scan_ignore: list[str] = Field(
        default_factory=lambda: ["node_modules", "dist", "build", "lib"]
    )
    scan_extensions: list[str] = Field(
        default_factory=lambda: [
            ".ts", ".tsx", ".js", ".jsx", ".mts", ".cts", ".cjs", ".mjs"
        ]
    )
    batch: BatchConfig = Field(default_factory=BatchConfig)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "ExportifyConfig":
        """Load configuration from a YAML file.

        Raises:
            ConfigError: If the file is unreadable, not YAML, or fails validation.
        """
        try:
            with open(config_path) as f:
                config_dict = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {config_path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        try:
            return cls(**config_dict)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def load(cls, config_path: Optional[Path], cwd: Path) -> "ExportifyConfig":
        """Resolve the configuration for a command.

        An explicit path must exist. Otherwise exportify.yaml in cwd is used
        when present, and defaults apply when it is not.
        """
        if config_path is not None:
            if not config_path.exists():
                raise ConfigError(f"Config file not found: {config_path}")
            return cls.from_yaml(config_path)

        default_path = cwd / DEFAULT_CONFIG_FILENAME
        if default_path.exists():
            logger.info(f"Using configuration from {default_path}")
            return cls.from_yaml(default_path)
        return cls()
