# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Dependency ordering of upgrade steps (Kahn's algorithm).

Steps are grouped into waves: every step in a wave depends only on steps in
earlier waves. Within a wave, steps keep the order in which they were
declared, so the resulting order is deterministic for a given input.
"""

from __future__ import annotations

from collections.abc import Sequence

from omniupgrade.errors import (
    CyclicDependencyError,
    DuplicateStepIdError,
    UnknownStepDependencyError,
)
from omniupgrade.steps import ProtocolUpgradeStep


def _validate_graph(steps: Sequence[ProtocolUpgradeStep]) -> None:
    known: set[str] = set()
    for step in steps:
        if step.step_id in known:
            raise DuplicateStepIdError(step.step_id)
        known.add(step.step_id)
    for step in steps:
        for dependency in step.depends_on:
            if dependency not in known:
                raise UnknownStepDependencyError(step.step_id, dependency)


def resolve_execution_waves(
    steps: Sequence[ProtocolUpgradeStep],
) -> list[list[ProtocolUpgradeStep]]:
    """Group ``steps`` into dependency waves.

    Raises:
        DuplicateStepIdError: If two steps share an id.
        UnknownStepDependencyError: If a dependency names no step in ``steps``.
        CyclicDependencyError: If the dependency graph contains a cycle. The
            error lists the ids of every step that could not be ordered.
    """
    _validate_graph(steps)

    in_degree = {step.step_id: len(step.depends_on) for step in steps}
    dependents: dict[str, list[str]] = {step.step_id: [] for step in steps}
    for step in steps:
        for dependency in step.depends_on:
            dependents[dependency].append(step.step_id)

    waves: list[list[ProtocolUpgradeStep]] = []
    remaining = list(steps)
    while remaining:
        wave = [step for step in remaining if in_degree[step.step_id] == 0]
        if not wave:
            raise CyclicDependencyError([step.step_id for step in remaining])
        waves.append(wave)
        wave_ids = {step.step_id for step in wave}
        remaining = [step for step in remaining if step.step_id not in wave_ids]
        for step in wave:
            for dependent in dependents[step.step_id]:
                in_degree[dependent] -= 1
    return waves


def resolve_execution_order(
    steps: Sequence[ProtocolUpgradeStep],
) -> list[ProtocolUpgradeStep]:
    """Flatten ``resolve_execution_waves`` into a single topological order."""
    return [step for wave in resolve_execution_waves(steps) for step in wave]


__all__ = ["resolve_execution_order", "resolve_execution_waves"]
