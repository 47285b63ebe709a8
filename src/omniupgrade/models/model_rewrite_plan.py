# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Plan produced by the reference rewriter."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from omniupgrade.models.model_dependency_reference import ModelDependencyReference


class ModelRewritePlan(BaseModel):
    """Edits a rewrite would perform, computed without side effects.

    Attributes:
        to_remove: References to remove, in declared project order.
        to_add: References to add, deduplicated by name, in insertion order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    to_remove: tuple[ModelDependencyReference, ...] = Field(
        default=(),
        description="References to remove from the project.",
    )
    to_add: tuple[ModelDependencyReference, ...] = Field(
        default=(),
        description="References to add to the project.",
    )

    @property
    def is_empty(self) -> bool:
        """True when applying the plan would change nothing."""
        return not self.to_remove and not self.to_add

    def summary(self) -> str:
        """One-line human readable description of the plan."""
        if self.is_empty:
            return "No package updates needed"
        parts: list[str] = []
        if self.to_remove:
            parts.append(
                "remove " + ", ".join(str(ref) for ref in self.to_remove)
            )
        if self.to_add:
            parts.append("add " + ", ".join(str(ref) for ref in self.to_add))
        return "; ".join(parts)


__all__ = ["ModelRewritePlan"]
