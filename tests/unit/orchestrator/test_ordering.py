# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for dependency ordering of steps."""

from __future__ import annotations

import pytest

from omniupgrade.errors import (
    CyclicDependencyError,
    DuplicateStepIdError,
    UnknownStepDependencyError,
)
from omniupgrade.orchestrator import resolve_execution_order, resolve_execution_waves


def _ids(steps) -> list[str]:
    return [step.step_id for step in steps]


@pytest.mark.unit
class TestResolveExecutionOrder:
    def test_empty(self) -> None:
        assert resolve_execution_order([]) == []

    def test_independent_steps_keep_declared_order(self, make_step) -> None:
        steps = [make_step("c"), make_step("a"), make_step("b")]
        assert _ids(resolve_execution_order(steps)) == ["c", "a", "b"]

    def test_dependencies_come_first(self, make_step) -> None:
        steps = [
            make_step("update", depends_on=["backup"]),
            make_step("backup", depends_on=["verify"]),
            make_step("verify"),
        ]
        assert _ids(resolve_execution_order(steps)) == ["verify", "backup", "update"]

    def test_every_dependency_precedes_its_dependent(self, make_step) -> None:
        steps = [
            make_step("e", depends_on=["c", "d"]),
            make_step("d", depends_on=["b"]),
            make_step("c", depends_on=["a", "b"]),
            make_step("b"),
            make_step("a"),
        ]
        order = _ids(resolve_execution_order(steps))
        position = {step_id: index for index, step_id in enumerate(order)}
        for step in steps:
            for dependency in step.depends_on:
                assert position[dependency] < position[step.step_id]
        assert sorted(order) == ["a", "b", "c", "d", "e"]

    def test_waves(self, make_step) -> None:
        steps = [
            make_step("a"),
            make_step("b"),
            make_step("c", depends_on=["a"]),
            make_step("d", depends_on=["a", "b"]),
            make_step("e", depends_on=["d"]),
        ]
        waves = resolve_execution_waves(steps)
        assert [_ids(wave) for wave in waves] == [["a", "b"], ["c", "d"], ["e"]]

    def test_cycle_raises(self, make_step) -> None:
        steps = [
            make_step("a", depends_on=["c"]),
            make_step("b", depends_on=["a"]),
            make_step("c", depends_on=["b"]),
            make_step("free"),
        ]
        with pytest.raises(CyclicDependencyError) as exc_info:
            resolve_execution_order(steps)
        assert set(exc_info.value.step_ids) == {"a", "b", "c"}
        assert exc_info.value.is_fatal

    def test_self_dependency_is_a_cycle(self, make_step) -> None:
        with pytest.raises(CyclicDependencyError):
            resolve_execution_order([make_step("a", depends_on=["a"])])

    def test_unknown_dependency(self, make_step) -> None:
        with pytest.raises(UnknownStepDependencyError) as exc_info:
            resolve_execution_order([make_step("a", depends_on=["ghost"])])
        assert exc_info.value.dependency_id == "ghost"

    def test_duplicate_step_id(self, make_step) -> None:
        with pytest.raises(DuplicateStepIdError):
            resolve_execution_order([make_step("a"), make_step("a")])
