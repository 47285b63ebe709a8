# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Error codes for the upgrade engine.

Error Code Format: UPG_XXX
- UPG: Upgrade engine prefix
- XXX: Three-digit numeric identifier
"""

from __future__ import annotations

from enum import Enum


class EnumUpgradeErrorCode(str, Enum):
    """Error codes raised by the upgrade engine.

    Each code maps to one exception class in ``omniupgrade.errors``.
    """

    # UPG_001: Config Not Found
    CONFIG_NOT_FOUND = "UPG_001"
    """Reference map or settings file is missing."""

    # UPG_002: Config Malformed
    CONFIG_MALFORMED = "UPG_002"
    """Reference map or settings file is structurally invalid."""

    # UPG_003: Project Not Found
    PROJECT_NOT_FOUND = "UPG_003"
    """Project file does not exist."""

    # UPG_004: Project Malformed
    PROJECT_MALFORMED = "UPG_004"
    """Project file is not a valid structured document."""

    # UPG_005: Cyclic Dependency
    CYCLIC_DEPENDENCY = "UPG_005"
    """Step dependency graph contains a cycle."""

    # UPG_006: Unknown Step Dependency
    UNKNOWN_STEP_DEPENDENCY = "UPG_006"
    """A step depends on a step id that is not part of the run."""

    # UPG_007: Duplicate Step Id
    DUPLICATE_STEP_ID = "UPG_007"
    """Two steps share the same id."""

    # UPG_008: Step Failed
    STEP_FAILED = "UPG_008"
    """A step reported FAILED."""

    # UPG_009: Step Transition
    STEP_TRANSITION = "UPG_009"
    """A lifecycle method was called from a status that does not allow it."""

    # UPG_010: Cancelled
    CANCELLED = "UPG_010"
    """The run was cancelled cooperatively."""

    @property
    def is_fatal(self) -> bool:
        """True if the error aborts the whole run before or during execution."""
        fatal = {
            self.CYCLIC_DEPENDENCY,
            self.UNKNOWN_STEP_DEPENDENCY,
            self.DUPLICATE_STEP_ID,
        }
        return self in fatal


__all__ = ["EnumUpgradeErrorCode"]
