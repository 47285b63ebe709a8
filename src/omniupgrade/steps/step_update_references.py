# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Rewrite a project's package references according to the reference map.

Initialize computes the rewrite plan and reports whether anything needs to
change. Apply reopens the project, recomputes the plan against the current
file contents, performs every edit in memory and saves once. A failure before
the save leaves the project file untouched.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from omniupgrade.models import ModelRewritePlan, ModelUpgradeStepResult
from omniupgrade.project import (
    ProjectModelMsBuild,
    ProtocolProjectModel,
    ProtocolProjectModelFactory,
)
from omniupgrade.rewriter import rewrite
from omniupgrade.steps.base import UpgradeStep
from omniupgrade.steps.context import UpgradeContext
from omniupgrade.steps.step_backup_project import STEP_BACKUP_PROJECT

logger = logging.getLogger(__name__)

STEP_UPDATE_PACKAGE_REFERENCES = "update-package-references"


class StepUpdatePackageReferences(UpgradeStep):
    """Replaces legacy package references with their modern counterparts."""

    def __init__(
        self,
        *,
        project_factory: ProtocolProjectModelFactory = ProjectModelMsBuild,
        depends_on: Iterable[str] = (STEP_BACKUP_PROJECT,),
    ) -> None:
        super().__init__(
            step_id=STEP_UPDATE_PACKAGE_REFERENCES,
            title="Update package references",
            description=(
                "Remove package references superseded by the reference map "
                "and add their replacements"
            ),
            depends_on=depends_on,
        )
        self._project_factory = project_factory

    async def _open_project(self, context: UpgradeContext) -> ProtocolProjectModel:
        context.token.raise_if_cancelled()
        return await asyncio.to_thread(self._project_factory, context.project_path)

    async def _compute_plan(
        self, context: UpgradeContext, project: ProtocolProjectModel
    ) -> ModelRewritePlan:
        reference_map = await context.get_reference_map()
        return rewrite(
            project.list_references(),
            reference_map,
            migration_support=context.settings.migration_support,
        )

    async def _initialize_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        project = await self._open_project(context)
        plan = await self._compute_plan(context, project)

        if plan.is_empty:
            return self._complete(plan.summary())
        if plan.to_remove:
            return self._incomplete(f"{len(plan.to_remove)} packages need updated")
        # Only additions left: the support reference is missing
        names = ", ".join(ref.name for ref in plan.to_add)
        return self._incomplete(f"Reference to package {names} needed")

    async def _apply_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        project = await self._open_project(context)
        plan = await self._compute_plan(context, project)
        if plan.is_empty:
            return self._complete(plan.summary())

        context.token.raise_if_cancelled()
        extra = context.log_extra(step_id=self.step_id)
        for reference in plan.to_remove:
            if project.remove_reference(reference):
                logger.info("Removing outdated package reference %s", reference, extra=extra)
            else:
                logger.warning("Package reference %s already absent", reference, extra=extra)
        removed_groups = project.remove_empty_groups()
        if removed_groups:
            logger.debug("Removed %d empty item groups", removed_groups, extra=extra)
        for reference in plan.to_add:
            logger.info("Adding package reference %s", reference, extra=extra)
            project.add_reference(reference)

        await asyncio.to_thread(project.save)
        return self._complete(f"Packages updated: {plan.summary()}")


__all__ = ["STEP_UPDATE_PACKAGE_REFERENCES", "StepUpdatePackageReferences"]
