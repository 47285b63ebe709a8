# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Gate step: verify the project can be upgraded at all.

Runs the full readiness check set. A blocking issue leaves the step
INCOMPLETE after initialize; apply re-runs the checks and completes if the
operator fixed the issue in between, otherwise fails. Every other default
step depends on this one, so a failed gate blocks the rest of the run.
"""

from __future__ import annotations

from omniupgrade.models import ModelUpgradeStepResult
from omniupgrade.project import ProjectModelMsBuild, ProtocolProjectModelFactory
from omniupgrade.readiness import (
    CheckCentralPackageManagement,
    CheckProjectFileExists,
    CheckProjectWellFormed,
    CheckReferenceMapAvailable,
    ReadinessChecker,
)
from omniupgrade.steps.base import UpgradeStep
from omniupgrade.steps.context import UpgradeContext

STEP_VERIFY_READINESS = "verify-readiness"


class StepVerifyReadiness(UpgradeStep):
    """Checks project existence, validity, reference map and unsupported features."""

    def __init__(
        self,
        *,
        readiness_checker: ReadinessChecker | None = None,
        project_factory: ProtocolProjectModelFactory = ProjectModelMsBuild,
    ) -> None:
        super().__init__(
            step_id=STEP_VERIFY_READINESS,
            title="Verify project readiness",
            description="Verify that the project can be upgraded before changing it",
            readiness_checker=readiness_checker,
        )
        self._project_factory = project_factory

    def _get_readiness_checker(self, context: UpgradeContext) -> ReadinessChecker:
        if self._readiness_checker is not None:
            return self._readiness_checker
        return ReadinessChecker(
            [
                CheckProjectFileExists(),
                CheckProjectWellFormed(self._project_factory),
                CheckReferenceMapAvailable(context.settings.reference_map_path),
                CheckCentralPackageManagement(),
            ]
        )

    async def _initialize_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        return self._complete("Project is ready for upgrade")

    async def _apply_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        # Only reached once the re-run checks pass
        return self._complete("Project is ready for upgrade")


__all__ = ["STEP_VERIFY_READINESS", "StepVerifyReadiness"]
