# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the UpgradeRun cursor."""

from __future__ import annotations

import pytest

from omniupgrade.orchestrator import UpgradeRun, resolve_execution_waves


@pytest.mark.unit
class TestUpgradeRun:
    def test_cursor_walks_steps_in_order(self, make_step, make_context) -> None:
        steps = [make_step("b", depends_on=["a"]), make_step("a"), make_step("c")]
        run = UpgradeRun(resolve_execution_waves(steps), make_context())

        seen = []
        while (step := run.current_step) is not None:
            seen.append(step.step_id)
            run.advance()

        assert seen == ["a", "c", "b"]
        assert run.position == 3

    def test_wave_boundaries(self, make_step, make_context) -> None:
        steps = [make_step("a"), make_step("c"), make_step("b", depends_on=["a"])]
        run = UpgradeRun(resolve_execution_waves(steps), make_context())

        assert [s.step_id for s in run.current_wave] == ["a", "c"]
        run.advance()
        assert run.current_wave is None
        run.advance()
        assert [s.step_id for s in run.current_wave] == ["b"]

    def test_exit_finishes_the_cursor(self, make_step, make_context) -> None:
        run = UpgradeRun([[make_step("a"), make_step("b")]], make_context())
        run.exit_requested = True
        assert run.current_step is None

    def test_block_marks_visited(self, make_step, make_context) -> None:
        run = UpgradeRun([[make_step("a")]], make_context())
        run.block("a", ("x",))
        assert run.blocked == {"a": ("x",)}
        assert "a" in run.visited
