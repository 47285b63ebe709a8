# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Step ordering, operator commands and the upgrade orchestrator."""

from omniupgrade.orchestrator.commands import (
    ApplyAllCommandSelector,
    ApplyNextCommand,
    ConsoleCommandSelector,
    ExitCommand,
    ProtocolCommandSelector,
    SkipNextCommand,
    UpgradeCommand,
)
from omniupgrade.orchestrator.orchestrator import UpgradeOrchestrator
from omniupgrade.orchestrator.run import UpgradeRun
from omniupgrade.orchestrator.ordering import (
    resolve_execution_order,
    resolve_execution_waves,
)

__all__ = [
    "ApplyAllCommandSelector",
    "ApplyNextCommand",
    "ConsoleCommandSelector",
    "ExitCommand",
    "ProtocolCommandSelector",
    "SkipNextCommand",
    "UpgradeCommand",
    "UpgradeOrchestrator",
    "UpgradeRun",
    "resolve_execution_order",
    "resolve_execution_waves",
]
