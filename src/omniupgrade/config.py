# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Upgrade engine settings.

Settings resolve in this order (highest first):
    1. Explicit keyword arguments (CLI flags, ``from_yaml`` file values).
    2. ``UPGRADE_*`` environment variables.
    3. Field defaults.

Environment variables:
    UPGRADE_REFERENCE_MAP_PATH: path (default: bundled reference_map.yaml)
    UPGRADE_MIGRATION_SUPPORT_NAME: str (default "Migration.Analyzers")
    UPGRADE_MIGRATION_SUPPORT_VERSION: str (default "1.0.0")
    UPGRADE_SKIP_STEPS: JSON list of step ids (default [])
    UPGRADE_BACKUP_PATH: path (default: "<project dir>.backup")
    UPGRADE_SKIP_BACKUP: bool (default false)
    UPGRADE_IGNORE_UNSUPPORTED_FEATURES: bool (default false)
    UPGRADE_CONCURRENT_INITIALIZE: bool (default false)
    UPGRADE_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL (default INFO)

Example:
    settings = UpgradeSettings.from_yaml("upgrade.yaml")
    settings = UpgradeSettings(skip_steps=["backup-project"])
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from omniupgrade.enums import EnumLogLevel
from omniupgrade.errors import ConfigMalformedError, ConfigNotFoundError
from omniupgrade.models import ModelDependencyReference, ModelReadinessOptions
from omniupgrade.reference_map import DEFAULT_REFERENCE_MAP_PATH

DEFAULT_MIGRATION_SUPPORT_NAME = "Migration.Analyzers"
DEFAULT_MIGRATION_SUPPORT_VERSION = "1.0.0"


class UpgradeSettings(BaseSettings):
    """Settings for one upgrade run, loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="UPGRADE_",
        extra="ignore",
        frozen=True,
    )

    reference_map_path: Path = Field(
        default=DEFAULT_REFERENCE_MAP_PATH,
        description="Reference map file (YAML or JSON).",
    )
    migration_support_name: str = Field(
        default=DEFAULT_MIGRATION_SUPPORT_NAME,
        min_length=1,
        description="Auxiliary reference every upgraded project must declare.",
    )
    migration_support_version: str = Field(
        default=DEFAULT_MIGRATION_SUPPORT_VERSION,
        min_length=1,
        description="Version of the auxiliary reference.",
    )
    skip_steps: tuple[str, ...] = Field(
        default=(),
        description="Step ids the operator opted out of.",
    )
    backup_path: Path | None = Field(
        default=None,
        description="Backup directory; defaults to '<project dir>.backup'.",
    )
    skip_backup: bool = Field(
        default=False,
        description="Do not back up the project before mutating it.",
    )
    ignore_unsupported_features: bool = Field(
        default=False,
        description="Continue even if the project uses unsupported features.",
    )
    concurrent_initialize: bool = Field(
        default=False,
        description="Initialize independent steps concurrently.",
    )
    log_level: EnumLogLevel = Field(default=EnumLogLevel.INFO)

    @field_validator("skip_steps", mode="before")
    @classmethod
    def _split_skip_steps(cls, v: Any) -> Any:
        if isinstance(v, str):
            return tuple(part.strip() for part in v.split(",") if part.strip())
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @property
    def migration_support(self) -> ModelDependencyReference:
        return ModelDependencyReference(
            name=self.migration_support_name,
            version=self.migration_support_version,
        )

    @property
    def readiness_options(self) -> ModelReadinessOptions:
        return ModelReadinessOptions(
            ignore_unsupported_features=self.ignore_unsupported_features
        )

    def resolve_backup_path(self, project_path: Path) -> Path:
        """Return the backup directory for ``project_path``."""
        if self.backup_path is not None:
            return self.backup_path
        project_dir = project_path.resolve().parent
        return project_dir.with_name(f"{project_dir.name}.backup")

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> UpgradeSettings:
        """Load settings from a YAML file.

        Values in the file take precedence over environment variables;
        ``overrides`` take precedence over both.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigMalformedError: If the file cannot be parsed or validated.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigNotFoundError(path, "Settings file")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigMalformedError(path, f"invalid YAML: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigMalformedError(
                path, f"expected a mapping, got {type(data).__name__}"
            )

        data.update(overrides)
        try:
            return cls(**data)
        except (ValidationError, SettingsError) as exc:
            raise ConfigMalformedError(path, str(exc)) from exc


__all__ = [
    "DEFAULT_MIGRATION_SUPPORT_NAME",
    "DEFAULT_MIGRATION_SUPPORT_VERSION",
    "UpgradeSettings",
]
