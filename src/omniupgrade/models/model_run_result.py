# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Aggregate result of an upgrade run."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from omniupgrade.enums import EnumUpgradeRunOutcome, EnumUpgradeStepStatus
from omniupgrade.models.model_step_result import ModelStepReport


class ModelUpgradeRunResult(BaseModel):
    """What happened during one ``UpgradeOrchestrator.run`` call.

    Attributes:
        run_id: Identifier of the run context.
        outcome: Aggregate outcome.
        execution_order: Step ids in the resolved topological order.
        steps: One report per step, in execution order.
        dry_run: True if apply was never invoked.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    run_id: UUID
    outcome: EnumUpgradeRunOutcome
    execution_order: tuple[str, ...] = ()
    steps: tuple[ModelStepReport, ...] = ()
    dry_run: bool = Field(default=False)

    @property
    def failures(self) -> tuple[ModelStepReport, ...]:
        """Reports of every FAILED step."""
        return tuple(
            s for s in self.steps if s.status == EnumUpgradeStepStatus.FAILED
        )

    @property
    def blocked(self) -> tuple[ModelStepReport, ...]:
        """Reports of every step that could not run."""
        return tuple(s for s in self.steps if s.is_blocked)

    def get(self, step_id: str) -> ModelStepReport | None:
        for report in self.steps:
            if report.step_id == step_id:
                return report
        return None


__all__ = ["ModelUpgradeRunResult"]
