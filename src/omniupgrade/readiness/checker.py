# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Composite readiness checker.

Composition policy: every check runs (concurrently; they are read-only), all
must pass for the project to be ready, the first failing message in declared
order is surfaced as ``message`` and every failure is listed in ``failures``
so callers can log each blocking issue.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from omniupgrade.cancellation import CancellationToken
from omniupgrade.models import (
    ModelReadinessFailure,
    ModelReadinessOptions,
    ModelReadinessResult,
)
from omniupgrade.readiness.protocols import ProtocolReadinessCheck

logger = logging.getLogger(__name__)


class ReadinessChecker:
    """Runs a fixed set of readiness checks and aggregates their results.

    Usage::

        checker = ReadinessChecker([CheckProjectFileExists(), CheckProjectWellFormed()])
        result = await checker.check(project_path, options, token)
        if not result.is_ready:
            for failure in result.failures:
                print(failure.check_id, failure.message)
    """

    def __init__(self, checks: Sequence[ProtocolReadinessCheck] = ()) -> None:
        self._checks = tuple(checks)

    @property
    def checks(self) -> tuple[ProtocolReadinessCheck, ...]:
        return self._checks

    async def check(
        self,
        project_path: Path,
        options: ModelReadinessOptions,
        token: CancellationToken,
    ) -> ModelReadinessResult:
        """Run every check and aggregate the results."""
        if not self._checks:
            return ModelReadinessResult.ready()

        token.raise_if_cancelled()
        results = await asyncio.gather(
            *(c.is_ready(project_path, options, token) for c in self._checks)
        )

        failures: list[ModelReadinessFailure] = []
        for check, result in zip(self._checks, results, strict=True):
            if result.is_ready:
                continue
            if result.failures:
                failures.extend(result.failures)
            else:
                failures.append(
                    ModelReadinessFailure(
                        check_id=check.check_id,
                        message=result.message or check.upgrade_message,
                    )
                )
            logger.info(
                "Readiness check %s failed: %s",
                check.check_id,
                result.message,
            )

        if not failures:
            return ModelReadinessResult.ready()
        return ModelReadinessResult(
            is_ready=False,
            message=failures[0].message,
            failures=tuple(failures),
        )


__all__ = ["ReadinessChecker"]
