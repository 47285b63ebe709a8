# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Operator commands offered for each actionable step.

When a step initializes to INCOMPLETE the orchestrator asks a command
selector what to do with it. A command acts on the step and tells the
orchestrator whether the run should continue.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from omniupgrade.steps import ProtocolUpgradeStep, UpgradeContext

logger = logging.getLogger(__name__)


class UpgradeCommand(ABC):
    """One operator choice for the step under the cursor."""

    command_text: str = ""

    @abstractmethod
    async def execute(self, step: ProtocolUpgradeStep, context: UpgradeContext) -> bool:
        """Act on ``step``; return False to stop the run."""


class ApplyNextCommand(UpgradeCommand):
    command_text = "Apply next step"

    async def execute(self, step: ProtocolUpgradeStep, context: UpgradeContext) -> bool:
        await step.apply(context)
        return True


class SkipNextCommand(UpgradeCommand):
    command_text = "Skip next step"

    def __init__(self, reason: str = "Skipped by operator") -> None:
        self.reason = reason

    async def execute(self, step: ProtocolUpgradeStep, context: UpgradeContext) -> bool:
        step.skip(self.reason)
        return True


class ExitCommand(UpgradeCommand):
    command_text = "Exit"

    async def execute(self, step: ProtocolUpgradeStep, context: UpgradeContext) -> bool:
        logger.info(
            "Operator exited before step %s",
            step.step_id,
            extra=context.log_extra(step_id=step.step_id),
        )
        return False


@runtime_checkable
class ProtocolCommandSelector(Protocol):
    """Chooses the command to run for an INCOMPLETE step."""

    async def select(
        self, step: ProtocolUpgradeStep, context: UpgradeContext
    ) -> UpgradeCommand: ...


class ApplyAllCommandSelector:
    """Non-interactive selector: apply every actionable step."""

    async def select(
        self, step: ProtocolUpgradeStep, context: UpgradeContext
    ) -> UpgradeCommand:
        return ApplyNextCommand()


class ConsoleCommandSelector:
    """Prompts the operator on the console for each actionable step.

    End of input is treated as a request to exit. A cancellation requested
    while the prompt is open is raised once the operator presses Enter.
    """

    def __init__(
        self,
        commands: Sequence[UpgradeCommand] | None = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ) -> None:
        self._commands = list(
            commands or (ApplyNextCommand(), SkipNextCommand(), ExitCommand())
        )
        self._input = input_func
        self._output = output_func

    async def select(
        self, step: ProtocolUpgradeStep, context: UpgradeContext
    ) -> UpgradeCommand:
        self._output(f"Next step: {step.title} ({step.status_details})")
        for index, command in enumerate(self._commands, start=1):
            self._output(f"  {index}. {command.command_text}")

        while True:
            context.token.raise_if_cancelled()
            try:
                answer = await self._read_answer(context)
            except EOFError:
                return ExitCommand()
            answer = answer.strip()
            if answer.isdigit() and 1 <= int(answer) <= len(self._commands):
                return self._commands[int(answer) - 1]
            self._output(f"Please enter a number between 1 and {len(self._commands)}")

    async def _read_answer(self, context: UpgradeContext) -> str:
        # input() cannot be interrupted; cancellation takes effect once it returns
        read = asyncio.ensure_future(asyncio.to_thread(self._input, "> "))
        cancelled = asyncio.ensure_future(context.token.wait())
        try:
            await asyncio.wait({read, cancelled}, return_when=asyncio.FIRST_COMPLETED)
            if not read.done():
                self._output("Cancelling; press Enter to finish")
                await asyncio.wait({read})
        finally:
            cancelled.cancel()
        context.token.raise_if_cancelled()
        return read.result()


__all__ = [
    "ApplyAllCommandSelector",
    "ApplyNextCommand",
    "ConsoleCommandSelector",
    "ExitCommand",
    "ProtocolCommandSelector",
    "SkipNextCommand",
    "UpgradeCommand",
]
