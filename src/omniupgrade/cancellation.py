# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Cooperative cancellation for upgrade runs.

Steps poll the token at safe points (before loading resources and before a
mutation begins). Once a mutation has started it runs to completion; the
token is not consulted again until the edit set has been persisted.
"""

from __future__ import annotations

import asyncio

from omniupgrade.errors import UpgradeCancelledError


class CancellationToken:
    """Cancellation signal shared by the orchestrator and its steps.

    Usage::

        token = CancellationToken()
        loop.add_signal_handler(signal.SIGINT, token.cancel)
        ...
        token.raise_if_cancelled()
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason = ""

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str:
        return self._reason

    def cancel(self, reason: str = "Upgrade cancelled") -> None:
        """Request cancellation. Idempotent; the first reason is kept."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise ``UpgradeCancelledError`` if cancellation was requested."""
        if self._event.is_set():
            raise UpgradeCancelledError(self._reason)

    async def wait(self) -> None:
        await self._event.wait()


__all__ = ["CancellationToken"]
