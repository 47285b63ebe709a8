# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Step-level results reported to the orchestrator and reporting layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from omniupgrade.enums import EnumUpgradeStepStatus


class ModelUpgradeStepResult(BaseModel):
    """Status and details returned by ``initialize`` and ``apply``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: EnumUpgradeStepStatus
    details: str = ""


class ModelStepReport(BaseModel):
    """Snapshot of one step at the end of a run.

    Attributes:
        step_id: Step identifier.
        title: Short step title.
        status: Status the step held when the run ended.
        details: Human-readable status details.
        blocked_by: Dependency ids that prevented the step from running.
            Empty unless the step was blocked.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    step_id: str
    title: str
    status: EnumUpgradeStepStatus
    details: str = ""
    blocked_by: tuple[str, ...] = Field(default=())

    @property
    def is_blocked(self) -> bool:
        return bool(self.blocked_by)


__all__ = ["ModelStepReport", "ModelUpgradeStepResult"]
