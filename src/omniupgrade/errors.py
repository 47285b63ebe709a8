# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Exception classes for the upgrade engine.

All exceptions inherit from ``UpgradeError`` and carry an
``EnumUpgradeErrorCode``. Resource and configuration errors raised while a
step runs are converted to a FAILED step status by the step base class; only
step-graph errors (cycles, unknown or duplicate ids) abort a whole run.

Error Code Format: UPG_XXX
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from omniupgrade.enums import EnumUpgradeErrorCode


class UpgradeError(Exception):
    """Base exception for all upgrade engine errors.

    Attributes:
        error_code: The UPG error code enum value.
        message: Human-readable error message.
    """

    error_code: EnumUpgradeErrorCode = EnumUpgradeErrorCode.STEP_FAILED

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def is_fatal(self) -> bool:
        """Check if this error aborts the whole run."""
        return self.error_code.is_fatal


class ConfigNotFoundError(UpgradeError):
    """Reference map or settings file does not exist (UPG_001)."""

    error_code = EnumUpgradeErrorCode.CONFIG_NOT_FOUND

    def __init__(self, path: Path | str, what: str = "Configuration file") -> None:
        self.path = Path(path)
        super().__init__(f"{what} {self.path} not found")


class ConfigMalformedError(UpgradeError):
    """Reference map or settings file is structurally invalid (UPG_002)."""

    error_code = EnumUpgradeErrorCode.CONFIG_MALFORMED

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Malformed configuration {self.path}: {reason}")


class ProjectNotFoundError(UpgradeError):
    """Project file does not exist (UPG_003)."""

    error_code = EnumUpgradeErrorCode.PROJECT_NOT_FOUND

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Project file {self.path} not found")


class ProjectMalformedError(UpgradeError):
    """Project file is not a valid structured document (UPG_004)."""

    error_code = EnumUpgradeErrorCode.PROJECT_MALFORMED

    def __init__(self, path: Path | str, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid project: {self.path}")


class CyclicDependencyError(UpgradeError):
    """Step dependency graph contains a cycle (UPG_005).

    Raised before any step executes. NOT recoverable.
    """

    error_code = EnumUpgradeErrorCode.CYCLIC_DEPENDENCY

    def __init__(self, step_ids: Sequence[str]) -> None:
        self.step_ids = tuple(step_ids)
        super().__init__(
            "Cyclic dependency between steps: " + ", ".join(self.step_ids)
        )


class UnknownStepDependencyError(UpgradeError):
    """A step declares a dependency on an id outside the run (UPG_006)."""

    error_code = EnumUpgradeErrorCode.UNKNOWN_STEP_DEPENDENCY

    def __init__(self, step_id: str, dependency_id: str) -> None:
        self.step_id = step_id
        self.dependency_id = dependency_id
        super().__init__(
            f"Step {step_id!r} depends on unknown step {dependency_id!r}"
        )


class DuplicateStepIdError(UpgradeError):
    """Two steps in a run share an id (UPG_007)."""

    error_code = EnumUpgradeErrorCode.DUPLICATE_STEP_ID

    def __init__(self, step_id: str) -> None:
        self.step_id = step_id
        super().__init__(f"Duplicate step id {step_id!r}")


class StepFailedError(UpgradeError):
    """A step implementation reports an unrecoverable condition (UPG_008).

    Step implementations may raise this from their hooks; the step base class
    turns it into a FAILED status carrying the message as details.
    """

    error_code = EnumUpgradeErrorCode.STEP_FAILED


class StepTransitionError(UpgradeError):
    """A lifecycle method was called from a status that forbids it (UPG_009)."""

    error_code = EnumUpgradeErrorCode.STEP_TRANSITION


class UpgradeCancelledError(UpgradeError):
    """Cooperative cancellation was observed before a mutation began (UPG_010)."""

    error_code = EnumUpgradeErrorCode.CANCELLED

    def __init__(self, message: str = "Upgrade cancelled") -> None:
        super().__init__(message)


__all__ = [
    "ConfigMalformedError",
    "ConfigNotFoundError",
    "CyclicDependencyError",
    "DuplicateStepIdError",
    "ProjectMalformedError",
    "ProjectNotFoundError",
    "StepFailedError",
    "StepTransitionError",
    "UnknownStepDependencyError",
    "UpgradeCancelledError",
    "UpgradeError",
]
