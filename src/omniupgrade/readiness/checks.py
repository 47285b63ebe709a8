# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Concrete readiness checks.

Each check inspects project state without mutating it and returns a fresh
``ModelReadinessResult``. File system access runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from omniupgrade.cancellation import CancellationToken
from omniupgrade.errors import (
    ConfigMalformedError,
    ConfigNotFoundError,
    ProjectMalformedError,
    ProjectNotFoundError,
)
from omniupgrade.models import ModelReadinessOptions, ModelReadinessResult
from omniupgrade.project import ProjectModelMsBuild, ProtocolProjectModelFactory
from omniupgrade.reference_map import load_reference_map

logger = logging.getLogger(__name__)

CENTRAL_PACKAGE_MANAGEMENT_FILE = "Directory.Packages.props"


class CheckProjectFileExists:
    """Project file must exist."""

    check_id = "project-file-exists"
    upgrade_message = "Verify the project path points to an existing project file."

    async def is_ready(
        self,
        project_path: Path,
        options: ModelReadinessOptions,
        token: CancellationToken,
    ) -> ModelReadinessResult:
        token.raise_if_cancelled()
        exists = await asyncio.to_thread(project_path.is_file)
        if exists:
            return ModelReadinessResult.ready()
        return ModelReadinessResult.not_ready(
            self.check_id, f"Project file {project_path} not found"
        )


class CheckProjectWellFormed:
    """Project file must parse as a valid project document."""

    check_id = "project-well-formed"
    upgrade_message = "Fix the project file so that it is a valid project document."

    def __init__(
        self, project_factory: ProtocolProjectModelFactory = ProjectModelMsBuild
    ) -> None:
        self._project_factory = project_factory

    async def is_ready(
        self,
        project_path: Path,
        options: ModelReadinessOptions,
        token: CancellationToken,
    ) -> ModelReadinessResult:
        token.raise_if_cancelled()
        try:
            await asyncio.to_thread(self._project_factory, project_path)
        except ProjectNotFoundError as exc:
            return ModelReadinessResult.not_ready(self.check_id, exc.message)
        except ProjectMalformedError as exc:
            logger.debug("Project %s is malformed: %s", project_path, exc.reason)
            return ModelReadinessResult.not_ready(self.check_id, exc.message)
        return ModelReadinessResult.ready()


class CheckReferenceMapAvailable:
    """Reference map must exist and load."""

    check_id = "reference-map-available"
    upgrade_message = (
        "Provide a valid reference map with --map or UPGRADE_REFERENCE_MAP_PATH."
    )

    def __init__(self, reference_map_path: Path) -> None:
        self._reference_map_path = reference_map_path

    async def is_ready(
        self,
        project_path: Path,
        options: ModelReadinessOptions,
        token: CancellationToken,
    ) -> ModelReadinessResult:
        token.raise_if_cancelled()
        try:
            await asyncio.to_thread(load_reference_map, self._reference_map_path)
        except (ConfigNotFoundError, ConfigMalformedError) as exc:
            return ModelReadinessResult.not_ready(self.check_id, exc.message)
        return ModelReadinessResult.ready()


class CheckCentralPackageManagement:
    """Projects using central package version management are unsupported.

    With central management, versions live in ``Directory.Packages.props``
    rather than on each reference, so rewriting references inline would
    disagree with the central file. Bypassed by
    ``ignore_unsupported_features``.
    """

    check_id = "central-package-management"
    upgrade_message = (
        "Central package management is not supported; move versions onto "
        "package references or re-run with --ignore-unsupported."
    )

    @staticmethod
    def _find_props(project_path: Path) -> Path | None:
        for directory in project_path.resolve().parents:
            candidate = directory / CENTRAL_PACKAGE_MANAGEMENT_FILE
            if candidate.is_file():
                return candidate
        return None

    async def is_ready(
        self,
        project_path: Path,
        options: ModelReadinessOptions,
        token: CancellationToken,
    ) -> ModelReadinessResult:
        token.raise_if_cancelled()
        props = await asyncio.to_thread(self._find_props, project_path)
        if props is None:
            return ModelReadinessResult.ready()
        if options.ignore_unsupported_features:
            logger.warning(
                "Project %s uses central package management (%s); continuing "
                "because unsupported features are ignored",
                project_path,
                props,
            )
            return ModelReadinessResult.ready(
                f"Central package management found at {props}; ignored"
            )
        return ModelReadinessResult.not_ready(
            self.check_id,
            f"Project {project_path} uses central package management ({props})",
        )


__all__ = [
    "CENTRAL_PACKAGE_MANAGEMENT_FILE",
    "CheckCentralPackageManagement",
    "CheckProjectFileExists",
    "CheckProjectWellFormed",
    "CheckReferenceMapAvailable",
]
