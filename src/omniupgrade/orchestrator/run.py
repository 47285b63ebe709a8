# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Cursor over the ordered steps of a single orchestrator run."""

from __future__ import annotations

from collections.abc import Sequence

from omniupgrade.steps import ProtocolUpgradeStep, UpgradeContext


class UpgradeRun:
    """Ordered steps plus a cursor to the next step.

    Owned by ``UpgradeOrchestrator`` for the duration of one ``run`` call and
    discarded afterwards. Tracks which steps were blocked in this run and
    whether the operator asked to stop.
    """

    def __init__(
        self,
        waves: Sequence[Sequence[ProtocolUpgradeStep]],
        context: UpgradeContext,
        *,
        dry_run: bool = False,
    ) -> None:
        self.context = context
        self.dry_run = dry_run
        self.blocked: dict[str, tuple[str, ...]] = {}
        self.visited: set[str] = set()
        self.initialized: set[str] = set()
        self.exit_requested = False
        self.cancelled = False
        self._steps: list[ProtocolUpgradeStep] = []
        self._wave_starts: dict[int, list[ProtocolUpgradeStep]] = {}
        for wave in waves:
            self._wave_starts[len(self._steps)] = list(wave)
            self._steps.extend(wave)
        self._position = 0

    @property
    def steps(self) -> tuple[ProtocolUpgradeStep, ...]:
        return tuple(self._steps)

    @property
    def position(self) -> int:
        return self._position

    @property
    def current_step(self) -> ProtocolUpgradeStep | None:
        """Step under the cursor, or None once the run is finished."""
        if self.exit_requested or self._position >= len(self._steps):
            return None
        return self._steps[self._position]

    @property
    def current_wave(self) -> list[ProtocolUpgradeStep] | None:
        """The wave starting at the cursor, if the cursor is on a wave boundary."""
        return self._wave_starts.get(self._position)

    def advance(self) -> None:
        self._position += 1

    def block(self, step_id: str, blockers: tuple[str, ...]) -> None:
        self.blocked[step_id] = blockers
        self.visited.add(step_id)


__all__ = ["UpgradeRun"]
