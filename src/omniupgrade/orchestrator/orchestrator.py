# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Step orchestrator: orders steps by dependency and drives each through
its lifecycle.

A run proceeds wave by wave (see ``resolve_execution_waves``). For each
step:

    1. If a dependency is blocked or neither COMPLETE nor SKIPPED, the step
       is blocked for this run. Its own status is not touched. In a dry run
       an INCOMPLETE dependency does not block.
    2. Steps named in ``settings.skip_steps`` are skipped.
    3. Otherwise the step is initialized. An INCOMPLETE step is handed to
       the command selector (apply, skip or exit).

Step graph errors are raised before any step runs. Every other failure is
reported in the returned ``ModelUpgradeRunResult``.

Example:
    orchestrator = UpgradeOrchestrator(build_default_steps(settings), settings=settings)
    result = await orchestrator.run(Path("App/App.csproj"))
    for report in result.failures:
        print(report.step_id, report.details)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from omniupgrade.cancellation import CancellationToken
from omniupgrade.config import UpgradeSettings
from omniupgrade.enums import EnumUpgradeRunOutcome, EnumUpgradeStepStatus
from omniupgrade.errors import UpgradeCancelledError
from omniupgrade.models import ModelStepReport, ModelUpgradeRunResult
from omniupgrade.orchestrator.commands import (
    ApplyAllCommandSelector,
    ProtocolCommandSelector,
)
from omniupgrade.orchestrator.ordering import resolve_execution_waves
from omniupgrade.orchestrator.run import UpgradeRun
from omniupgrade.steps import ProtocolUpgradeStep, UpgradeContext

logger = logging.getLogger(__name__)

_SKIPPABLE_STATUSES = frozenset(
    {EnumUpgradeStepStatus.UNKNOWN, EnumUpgradeStepStatus.INCOMPLETE}
)


class UpgradeOrchestrator:
    """Runs a fixed set of upgrade steps against a project.

    The orchestrator holds the step instances, so calling ``run`` again
    resumes where the previous run left off: SKIPPED steps stay skipped,
    COMPLETE steps are re-checked and FAILED steps are retried.
    """

    def __init__(
        self,
        steps: Sequence[ProtocolUpgradeStep],
        *,
        settings: UpgradeSettings | None = None,
        command_selector: ProtocolCommandSelector | None = None,
    ) -> None:
        self._steps = list(steps)
        self._steps_by_id = {step.step_id: step for step in self._steps}
        self._settings = settings or UpgradeSettings()
        self._command_selector = command_selector or ApplyAllCommandSelector()

    @property
    def steps(self) -> tuple[ProtocolUpgradeStep, ...]:
        return tuple(self._steps)

    @property
    def settings(self) -> UpgradeSettings:
        return self._settings

    def _blockers(self, step: ProtocolUpgradeStep, run: UpgradeRun) -> tuple[str, ...]:
        return tuple(
            dependency
            for dependency in step.depends_on
            if dependency in run.blocked
            or not self._satisfies(self._steps_by_id[dependency], run)
        )

    @staticmethod
    def _satisfies(dependency: ProtocolUpgradeStep, run: UpgradeRun) -> bool:
        if dependency.status.satisfies_dependents:
            return True
        # A dry run previews dependents of steps it declined to apply
        return (
            run.dry_run
            and dependency.status == EnumUpgradeStepStatus.INCOMPLETE
            and dependency.step_id in run.initialized
        )

    async def _initialize_wave(
        self, wave: list[ProtocolUpgradeStep], run: UpgradeRun
    ) -> None:
        candidates = [
            step
            for step in wave
            if not self._blockers(step, run)
            and step.step_id not in self._settings.skip_steps
        ]
        if len(candidates) < 2:
            return
        results = await asyncio.gather(
            *(step.initialize(run.context) for step in candidates),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        run.initialized.update(step.step_id for step in candidates)

    async def run(
        self,
        project_path: Path | str,
        *,
        token: CancellationToken | None = None,
        dry_run: bool = False,
    ) -> ModelUpgradeRunResult:
        """Run every step against ``project_path``.

        Args:
            project_path: Project file to upgrade.
            token: Cancellation token; a fresh one is created if omitted.
            dry_run: Initialize steps but never apply them. Dependents of
                actionable steps are still initialized so that their
                pending changes are reported; failed steps block as usual.

        Returns:
            The aggregate run result.

        Raises:
            CyclicDependencyError: If the step graph has a cycle.
            UnknownStepDependencyError: If a step depends on an unknown id.
            DuplicateStepIdError: If two steps share an id.
        """
        waves = resolve_execution_waves(self._steps)

        context = UpgradeContext(
            project_path=Path(project_path),
            settings=self._settings,
            token=token or CancellationToken(),
        )
        run = UpgradeRun(waves, context, dry_run=dry_run)
        extra = context.log_extra()
        logger.info(
            "Starting upgrade of %s (%d steps%s)",
            context.project_path,
            len(run.steps),
            ", dry run" if dry_run else "",
            extra=extra,
        )

        try:
            while (step := run.current_step) is not None:
                wave = run.current_wave
                if wave is not None and self._settings.concurrent_initialize:
                    await self._initialize_wave(wave, run)
                await self._process_step(step, run)
                run.advance()
        except UpgradeCancelledError as exc:
            run.cancelled = True
            logger.warning("Upgrade cancelled: %s", exc.message, extra=extra)

        reports = tuple(
            self._report(step, run.blocked.get(step.step_id, ()))
            for step in run.steps
        )
        outcome = self._outcome(reports, run)
        logger.info("Upgrade finished: %s", outcome.value, extra=extra)
        return ModelUpgradeRunResult(
            run_id=context.run_id,
            outcome=outcome,
            execution_order=tuple(step.step_id for step in run.steps),
            steps=reports,
            dry_run=dry_run,
        )

    async def _process_step(self, step: ProtocolUpgradeStep, run: UpgradeRun) -> None:
        context = run.context
        extra = context.log_extra(step_id=step.step_id)

        blockers = self._blockers(step, run)
        if blockers:
            run.block(step.step_id, blockers)
            logger.warning(
                "Step %s blocked by %s", step.step_id, ", ".join(blockers), extra=extra
            )
            return

        run.visited.add(step.step_id)
        if step.step_id in self._settings.skip_steps:
            if step.status in _SKIPPABLE_STATUSES:
                step.skip("Skipped by configuration")
            elif step.status != EnumUpgradeStepStatus.SKIPPED:
                logger.warning(
                    "Cannot skip step %s; it is already %s",
                    step.step_id,
                    step.status.value,
                    extra=extra,
                )
            return

        if step.step_id not in run.initialized:
            await step.initialize(context)
            run.initialized.add(step.step_id)
        if step.status != EnumUpgradeStepStatus.INCOMPLETE or run.dry_run:
            return

        command = await self._command_selector.select(step, context)
        if not await command.execute(step, context):
            run.exit_requested = True

    @staticmethod
    def _report(
        step: ProtocolUpgradeStep, blocked_by: tuple[str, ...]
    ) -> ModelStepReport:
        details = step.status_details
        if blocked_by:
            details = f"Blocked by {', '.join(blocked_by)}"
        return ModelStepReport(
            step_id=step.step_id,
            title=step.title,
            status=step.status,
            details=details,
            blocked_by=blocked_by,
        )

    @staticmethod
    def _outcome(
        reports: Sequence[ModelStepReport], run: UpgradeRun
    ) -> EnumUpgradeRunOutcome:
        if run.cancelled:
            return EnumUpgradeRunOutcome.CANCELLED
        # Blocked steps keep a status from an earlier run; ignore it here
        active = [report for report in reports if not report.is_blocked]
        if any(r.status == EnumUpgradeStepStatus.FAILED for r in active):
            return EnumUpgradeRunOutcome.SOME_FAILED
        if len(active) != len(reports) or any(
            r.step_id not in run.visited or not r.status.satisfies_dependents
            for r in active
        ):
            return EnumUpgradeRunOutcome.BLOCKED
        return EnumUpgradeRunOutcome.ALL_COMPLETE


__all__ = ["UpgradeOrchestrator"]
