# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""OmniUpgrade - step-orchestrated project upgrade engine.

Replaces legacy package references with their modern counterparts through a
dependency-ordered sequence of resumable upgrade steps.

Quick Start:
    >>> import asyncio
    >>> from omniupgrade import UpgradeOrchestrator, UpgradeSettings, build_default_steps
    >>> settings = UpgradeSettings()
    >>> orchestrator = UpgradeOrchestrator(build_default_steps(settings), settings=settings)
    >>> result = asyncio.run(orchestrator.run("App/App.csproj"))  # doctest: +SKIP
    >>> result.outcome  # doctest: +SKIP
    <EnumUpgradeRunOutcome.ALL_COMPLETE: 'all_complete'>
"""

from omniupgrade.cancellation import CancellationToken
from omniupgrade.config import UpgradeSettings
from omniupgrade.enums import EnumUpgradeRunOutcome, EnumUpgradeStepStatus
from omniupgrade.errors import UpgradeError
from omniupgrade.models import ModelDependencyReference, ModelUpgradeRunResult
from omniupgrade.orchestrator import UpgradeOrchestrator
from omniupgrade.reference_map import ModelReferenceMap, load_reference_map
from omniupgrade.rewriter import rewrite
from omniupgrade.steps import UpgradeContext, UpgradeStep, build_default_steps

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "EnumUpgradeRunOutcome",
    "EnumUpgradeStepStatus",
    "ModelDependencyReference",
    "ModelReferenceMap",
    "ModelUpgradeRunResult",
    "UpgradeContext",
    "UpgradeError",
    "UpgradeOrchestrator",
    "UpgradeSettings",
    "UpgradeStep",
    "__version__",
    "build_default_steps",
    "load_reference_map",
    "rewrite",
]
