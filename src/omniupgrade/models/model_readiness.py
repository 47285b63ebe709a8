# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Readiness check options and results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelReadinessOptions(BaseModel):
    """Operator options that influence readiness checks.

    Attributes:
        ignore_unsupported_features: Treat "unsupported feature" findings as
            ready. Checks that guard against data loss still fail.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ignore_unsupported_features: bool = Field(
        default=False,
        description="Continue even if the project uses unsupported features.",
    )


class ModelReadinessFailure(BaseModel):
    """A single failing readiness check."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    check_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class ModelReadinessResult(BaseModel):
    """Outcome of one or more readiness checks.

    Attributes:
        is_ready: True if every check passed.
        message: First failing message, or a short "ready" note.
        failures: Every failing check in declared order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_ready: bool
    message: str = ""
    failures: tuple[ModelReadinessFailure, ...] = ()

    @classmethod
    def ready(cls, message: str = "Ready") -> ModelReadinessResult:
        return cls(is_ready=True, message=message)

    @classmethod
    def not_ready(cls, check_id: str, message: str) -> ModelReadinessResult:
        return cls(
            is_ready=False,
            message=message,
            failures=(ModelReadinessFailure(check_id=check_id, message=message),),
        )


__all__ = [
    "ModelReadinessFailure",
    "ModelReadinessOptions",
    "ModelReadinessResult",
]
