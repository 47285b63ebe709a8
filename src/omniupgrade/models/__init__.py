# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pydantic models shared across the upgrade engine."""

from omniupgrade.models.model_dependency_reference import ModelDependencyReference
from omniupgrade.models.model_readiness import (
    ModelReadinessFailure,
    ModelReadinessOptions,
    ModelReadinessResult,
)
from omniupgrade.models.model_rewrite_plan import ModelRewritePlan
from omniupgrade.models.model_run_result import ModelUpgradeRunResult
from omniupgrade.models.model_step_result import (
    ModelStepReport,
    ModelUpgradeStepResult,
)

__all__ = [
    "ModelDependencyReference",
    "ModelReadinessFailure",
    "ModelReadinessOptions",
    "ModelReadinessResult",
    "ModelRewritePlan",
    "ModelStepReport",
    "ModelUpgradeRunResult",
    "ModelUpgradeStepResult",
]
