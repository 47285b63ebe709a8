# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Aggregate outcome of an upgrade run."""

from __future__ import annotations

from enum import Enum, unique


@unique
class EnumUpgradeRunOutcome(str, Enum):
    """Run-level outcome surfaced to the CLI or any other reporting layer.

    Attributes:
        ALL_COMPLETE: Every step is COMPLETE or SKIPPED.
        SOME_FAILED: At least one step FAILED; failures are enumerated.
        BLOCKED: No failure, but some steps could not run (unsatisfied
            dependencies, pending work in a dry run, or operator exit).
        CANCELLED: A cooperative cancellation stopped the run.
    """

    ALL_COMPLETE = "all_complete"
    SOME_FAILED = "some_failed"
    BLOCKED = "blocked"
    CANCELLED = "cancelled"


__all__ = ["EnumUpgradeRunOutcome"]
