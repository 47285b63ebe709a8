# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Default step set for a package-reference upgrade."""

from __future__ import annotations

from omniupgrade.config import UpgradeSettings
from omniupgrade.project import ProjectModelMsBuild, ProtocolProjectModelFactory
from omniupgrade.steps.base import UpgradeStep
from omniupgrade.steps.step_backup_project import StepBackupProject
from omniupgrade.steps.step_update_references import StepUpdatePackageReferences
from omniupgrade.steps.step_verify_readiness import StepVerifyReadiness


def build_default_steps(
    settings: UpgradeSettings | None = None,
    project_factory: ProtocolProjectModelFactory = ProjectModelMsBuild,
) -> list[UpgradeStep]:
    """Create fresh instances of the default steps.

    Order here is irrelevant; the orchestrator orders steps by dependency.
    """
    settings = settings or UpgradeSettings()
    return [
        StepVerifyReadiness(project_factory=project_factory),
        StepBackupProject(backup_path=settings.backup_path),
        StepUpdatePackageReferences(project_factory=project_factory),
    ]


__all__ = ["build_default_steps"]
