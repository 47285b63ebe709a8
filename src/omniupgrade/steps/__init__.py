# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Upgrade steps: lifecycle base class, run context and the default steps."""

from omniupgrade.steps.base import ProtocolUpgradeStep, UpgradeStep
from omniupgrade.steps.context import UpgradeContext
from omniupgrade.steps.factory import build_default_steps
from omniupgrade.steps.step_backup_project import STEP_BACKUP_PROJECT, StepBackupProject
from omniupgrade.steps.step_update_references import (
    STEP_UPDATE_PACKAGE_REFERENCES,
    StepUpdatePackageReferences,
)
from omniupgrade.steps.step_verify_readiness import (
    STEP_VERIFY_READINESS,
    StepVerifyReadiness,
)

__all__ = [
    "STEP_BACKUP_PROJECT",
    "STEP_UPDATE_PACKAGE_REFERENCES",
    "STEP_VERIFY_READINESS",
    "ProtocolUpgradeStep",
    "StepBackupProject",
    "StepUpdatePackageReferences",
    "StepVerifyReadiness",
    "UpgradeContext",
    "UpgradeStep",
    "build_default_steps",
]
