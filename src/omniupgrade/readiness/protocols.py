# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Readiness check protocol.

A readiness check verifies that a project can be upgraded, so known issues
are caught before a step mutates anything. Checks must be read-only and
idempotent.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from omniupgrade.cancellation import CancellationToken
from omniupgrade.models import ModelReadinessOptions, ModelReadinessResult


@runtime_checkable
class ProtocolReadinessCheck(Protocol):
    """Capability implemented by every readiness check."""

    @property
    def check_id(self) -> str:
        """Identifier of this check."""
        ...

    @property
    def upgrade_message(self) -> str:
        """What the user can do when the project is not ready."""
        ...

    async def is_ready(
        self,
        project_path: Path,
        options: ModelReadinessOptions,
        token: CancellationToken,
    ) -> ModelReadinessResult:
        """Verify that the project at ``project_path`` can be upgraded."""
        ...


__all__ = ["ProtocolReadinessCheck"]
