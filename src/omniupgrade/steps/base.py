# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Upgrade step capability and lifecycle base class.

State machine enforced by ``UpgradeStep``:

    UNKNOWN ──initialize──> INCOMPLETE | COMPLETE | FAILED | SKIPPED
    INCOMPLETE ──apply────> COMPLETE | FAILED
    UNKNOWN | INCOMPLETE ──skip──> SKIPPED

Terminal statuses do not change again within a run (identified by the
context's ``run_id``). A new run may re-initialize COMPLETE and FAILED steps;
SKIPPED persists until ``reset``.

Failures are reported as data: ``initialize`` and ``apply`` never raise for
resource, configuration or implementation errors. They only propagate
``UpgradeCancelledError`` (an interrupted initialize leaves the step
UNKNOWN, an interrupted apply leaves it INCOMPLETE) and ``MemoryError``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol, runtime_checkable

from omniupgrade.enums import EnumUpgradeStepStatus
from omniupgrade.errors import (
    StepTransitionError,
    UpgradeCancelledError,
    UpgradeError,
)
from omniupgrade.models import ModelReadinessResult, ModelUpgradeStepResult
from omniupgrade.readiness import ReadinessChecker
from omniupgrade.steps.context import UpgradeContext

logger = logging.getLogger(__name__)

_INITIALIZE_RESULTS = frozenset(
    {
        EnumUpgradeStepStatus.INCOMPLETE,
        EnumUpgradeStepStatus.COMPLETE,
        EnumUpgradeStepStatus.FAILED,
        EnumUpgradeStepStatus.SKIPPED,
    }
)
_APPLY_RESULTS = frozenset(
    {EnumUpgradeStepStatus.COMPLETE, EnumUpgradeStepStatus.FAILED}
)


@runtime_checkable
class ProtocolUpgradeStep(Protocol):
    """Capability the orchestrator depends on."""

    @property
    def step_id(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def depends_on(self) -> tuple[str, ...]: ...

    @property
    def status(self) -> EnumUpgradeStepStatus: ...

    @property
    def status_details(self) -> str: ...

    async def initialize(self, context: UpgradeContext) -> ModelUpgradeStepResult: ...

    async def apply(self, context: UpgradeContext) -> ModelUpgradeStepResult: ...

    def skip(self, reason: str = ...) -> ModelUpgradeStepResult: ...


class UpgradeStep(ABC):
    """Base class implementing the step lifecycle.

    Subclasses implement ``_initialize_impl`` and ``_apply_impl``. Both hooks
    run only when readiness checks pass; ``apply`` re-runs the checks first
    so that state changed between the two calls is caught.

    Hooks may raise any ``UpgradeError``; it becomes FAILED with the error
    message as details.
    """

    def __init__(
        self,
        *,
        step_id: str,
        title: str,
        description: str = "",
        depends_on: Iterable[str] = (),
        readiness_checker: ReadinessChecker | None = None,
    ) -> None:
        if not step_id:
            raise ValueError("step_id must be a non-empty string")
        self._step_id = step_id
        self._title = title
        self._description = description
        self._depends_on = tuple(dict.fromkeys(depends_on))
        self._readiness_checker = readiness_checker
        self._status = EnumUpgradeStepStatus.UNKNOWN
        self._status_details = ""
        self._run_id: object | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(step_id={self._step_id!r}, status={self._status.value})"

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def step_id(self) -> str:
        return self._step_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def depends_on(self) -> tuple[str, ...]:
        return self._depends_on

    @property
    def status(self) -> EnumUpgradeStepStatus:
        return self._status

    @property
    def status_details(self) -> str:
        return self._status_details

    def _result(self) -> ModelUpgradeStepResult:
        return ModelUpgradeStepResult(status=self._status, details=self._status_details)

    def _set_result(self, result: ModelUpgradeStepResult) -> ModelUpgradeStepResult:
        self._status = result.status
        self._status_details = result.details
        return result

    @staticmethod
    def _complete(details: str) -> ModelUpgradeStepResult:
        return ModelUpgradeStepResult(status=EnumUpgradeStepStatus.COMPLETE, details=details)

    @staticmethod
    def _incomplete(details: str) -> ModelUpgradeStepResult:
        return ModelUpgradeStepResult(status=EnumUpgradeStepStatus.INCOMPLETE, details=details)

    @staticmethod
    def _failed(details: str) -> ModelUpgradeStepResult:
        return ModelUpgradeStepResult(status=EnumUpgradeStepStatus.FAILED, details=details)

    @staticmethod
    def _skipped(details: str) -> ModelUpgradeStepResult:
        return ModelUpgradeStepResult(status=EnumUpgradeStepStatus.SKIPPED, details=details)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _get_readiness_checker(self, context: UpgradeContext) -> ReadinessChecker | None:
        return self._readiness_checker

    async def _check_readiness(self, context: UpgradeContext) -> ModelReadinessResult:
        checker = self._get_readiness_checker(context)
        if checker is None:
            return ModelReadinessResult.ready()
        return await checker.check(
            context.project_path,
            context.settings.readiness_options,
            context.token,
        )

    async def initialize(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        """Determine whether the step has work to do.

        Returns the current result unchanged if the step is SKIPPED or already
        terminal in this run.
        """
        if self._status == EnumUpgradeStepStatus.SKIPPED:
            return self._result()
        if self._run_id == context.run_id and self._status.is_terminal:
            logger.debug(
                "Step %s already %s in this run",
                self._step_id,
                self._status.value,
                extra=context.log_extra(step_id=self._step_id),
            )
            return self._result()

        context.token.raise_if_cancelled()
        self._run_id = context.run_id
        self._status = EnumUpgradeStepStatus.UNKNOWN
        self._status_details = ""

        logger.info(
            "Initializing step %s",
            self._step_id,
            extra=context.log_extra(step_id=self._step_id),
        )
        result = await self._guarded(context, self._run_initialize, _INITIALIZE_RESULTS)
        return self._set_result(result)

    async def _run_initialize(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        readiness = await self._check_readiness(context)
        if not readiness.is_ready:
            return self._incomplete(f"Not ready: {readiness.message}")
        return await self._initialize_impl(context)

    async def apply(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        """Perform the step's mutation.

        Raises:
            StepTransitionError: If the step is not INCOMPLETE in this run.
            UpgradeCancelledError: If cancellation was observed before the
                mutation began; the step stays INCOMPLETE.
        """
        if (
            self._status != EnumUpgradeStepStatus.INCOMPLETE
            or self._run_id != context.run_id
        ):
            raise StepTransitionError(
                f"Cannot apply step {self._step_id!r} from status "
                f"{self._status.value!r}; initialize it in this run first"
            )

        context.token.raise_if_cancelled()
        logger.info(
            "Applying step %s",
            self._step_id,
            extra=context.log_extra(step_id=self._step_id),
        )
        result = await self._guarded(context, self._run_apply, _APPLY_RESULTS)
        return self._set_result(result)

    async def _run_apply(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        readiness = await self._check_readiness(context)
        if not readiness.is_ready:
            return self._failed(readiness.message)
        async with context.write_lock:
            return await self._apply_impl(context)

    def skip(self, reason: str = "Skipped by operator") -> ModelUpgradeStepResult:
        """Opt out of the step.

        Raises:
            StepTransitionError: If the step is not UNKNOWN or INCOMPLETE.
        """
        if self._status == EnumUpgradeStepStatus.SKIPPED:
            return self._result()
        if self._status not in (
            EnumUpgradeStepStatus.UNKNOWN,
            EnumUpgradeStepStatus.INCOMPLETE,
        ):
            raise StepTransitionError(
                f"Cannot skip step {self._step_id!r} from status {self._status.value!r}"
            )
        logger.info("Skipping step %s: %s", self._step_id, reason)
        return self._set_result(self._skipped(reason))

    def reset(self) -> None:
        """Return the step to UNKNOWN, clearing a previous skip."""
        self._status = EnumUpgradeStepStatus.UNKNOWN
        self._status_details = ""
        self._run_id = None

    async def _guarded(
        self,
        context: UpgradeContext,
        phase: Callable[[UpgradeContext], Awaitable[ModelUpgradeStepResult]],
        allowed: frozenset[EnumUpgradeStepStatus],
    ) -> ModelUpgradeStepResult:
        extra = context.log_extra(step_id=self._step_id)
        try:
            result = await phase(context)
        except UpgradeCancelledError:
            raise
        except UpgradeError as exc:
            logger.error("Step %s failed: %s", self._step_id, exc.message, extra=extra)
            return self._failed(exc.message)
        except MemoryError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error in step %s", self._step_id, extra=extra)
            return self._failed(f"Unexpected error: {exc}")

        if result.status not in allowed:
            logger.error(
                "Step %s returned invalid status %s",
                self._step_id,
                result.status.value,
                extra=extra,
            )
            return self._failed(
                f"Step returned invalid status {result.status.value!r}"
            )

        logger.info(
            "Step %s is %s: %s",
            self._step_id,
            result.status.value,
            result.details,
            extra=extra,
        )
        return result

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    async def _initialize_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        """Inspect project state; return INCOMPLETE, COMPLETE, FAILED or SKIPPED."""

    @abstractmethod
    async def _apply_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        """Mutate project state; return COMPLETE or FAILED.

        Runs while holding ``context.write_lock``. Build the full edit set in
        memory, call ``context.token.raise_if_cancelled()`` before the first
        edit and persist once.
        """


__all__ = ["ProtocolUpgradeStep", "UpgradeStep"]
