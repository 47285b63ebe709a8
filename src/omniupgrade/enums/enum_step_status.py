# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Upgrade step lifecycle status.

Lifecycle:
    UNKNOWN -> initialize -> INCOMPLETE | COMPLETE | FAILED | SKIPPED
    INCOMPLETE -> apply -> COMPLETE | FAILED
    UNKNOWN | INCOMPLETE -> skip -> SKIPPED

COMPLETE, FAILED and SKIPPED are terminal for the remainder of a run.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class EnumUpgradeStepStatus(str, Enum):
    """Status of a single upgrade step.

    Example:
        >>> from omniupgrade.enums import EnumUpgradeStepStatus
        >>> EnumUpgradeStepStatus.COMPLETE.is_terminal
        True
        >>> EnumUpgradeStepStatus.INCOMPLETE.is_terminal
        False
    """

    UNKNOWN = "unknown"
    """Step has not been initialized in the current run."""

    INCOMPLETE = "incomplete"
    """Step was initialized and has work to apply."""

    COMPLETE = "complete"
    """Step has nothing (left) to do."""

    FAILED = "failed"
    """Step could not initialize or apply; details explain why."""

    SKIPPED = "skipped"
    """Operator opted out of the step."""

    @property
    def is_terminal(self) -> bool:
        """True for statuses that never change again within a run."""
        return self in _TERMINAL_STATUSES

    @property
    def satisfies_dependents(self) -> bool:
        """True if steps depending on this one may proceed."""
        return self in (EnumUpgradeStepStatus.COMPLETE, EnumUpgradeStepStatus.SKIPPED)


_TERMINAL_STATUSES = frozenset(
    {
        EnumUpgradeStepStatus.COMPLETE,
        EnumUpgradeStepStatus.FAILED,
        EnumUpgradeStepStatus.SKIPPED,
    }
)


__all__ = ["EnumUpgradeStepStatus"]
