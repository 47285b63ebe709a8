# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Back up the project directory before any step mutates it."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from omniupgrade.models import ModelUpgradeStepResult
from omniupgrade.steps.base import UpgradeStep
from omniupgrade.steps.context import UpgradeContext
from omniupgrade.steps.step_verify_readiness import STEP_VERIFY_READINESS

logger = logging.getLogger(__name__)

STEP_BACKUP_PROJECT = "backup-project"

# Build output and IDE state are not worth backing up
_IGNORED_NAMES = frozenset({"bin", "obj", ".vs"})


class StepBackupProject(UpgradeStep):
    """Copies the project directory to a backup location.

    The copy is written to a temporary sibling directory and renamed into
    place, so an interrupted backup never looks like a finished one.
    """

    def __init__(
        self,
        *,
        backup_path: Path | None = None,
        depends_on: Iterable[str] = (STEP_VERIFY_READINESS,),
    ) -> None:
        super().__init__(
            step_id=STEP_BACKUP_PROJECT,
            title="Back up project",
            description="Copy the project directory to a backup location",
            depends_on=depends_on,
        )
        self._backup_path = backup_path

    def _resolve_backup_path(self, context: UpgradeContext) -> Path:
        if self._backup_path is not None:
            return self._backup_path
        return context.settings.resolve_backup_path(context.project_path)

    async def _initialize_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        if context.settings.skip_backup:
            return self._skipped("Backup disabled by configuration")

        backup_dir = self._resolve_backup_path(context)
        backup_project = backup_dir / context.project_path.name
        if await asyncio.to_thread(backup_project.is_file):
            return self._complete(f"Existing backup found at {backup_dir}")
        return self._incomplete(f"No backup found at {backup_dir}")

    async def _apply_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        backup_dir = self._resolve_backup_path(context)
        source_dir = context.project_path.resolve().parent

        if await asyncio.to_thread(backup_dir.exists):
            return self._failed(
                f"Backup location {backup_dir} already exists and does not "
                f"contain {context.project_path.name}"
            )

        context.token.raise_if_cancelled()
        await asyncio.to_thread(self._copy_tree, source_dir, backup_dir)
        logger.info(
            "Backed up %s to %s",
            source_dir,
            backup_dir,
            extra=context.log_extra(step_id=self.step_id),
        )
        return self._complete(f"Project backed up to {backup_dir}")

    @staticmethod
    def _copy_tree(source_dir: Path, backup_dir: Path) -> None:
        staging = backup_dir.with_name(f".{backup_dir.name}.partial")
        if staging.exists():
            shutil.rmtree(staging)
        excluded = {backup_dir.resolve(), staging.resolve()}

        def _ignore(directory: str, names: list[str]) -> set[str]:
            ignored = {name for name in names if name in _IGNORED_NAMES}
            for name in names:
                if (Path(directory) / name).resolve() in excluded:
                    ignored.add(name)
            return ignored

        try:
            shutil.copytree(source_dir, staging, ignore=_ignore)
            os.replace(staging, backup_dir)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise


__all__ = ["STEP_BACKUP_PROJECT", "StepBackupProject"]
