# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Per-run upgrade context.

One ``UpgradeContext`` is created when a run starts and discarded when it
ends. It carries everything steps share during the run: settings, the
cancellation token, the single-writer lock guarding project mutations and the
reference maps loaded so far. Nothing here outlives the run.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

from omniupgrade.cancellation import CancellationToken
from omniupgrade.config import UpgradeSettings
from omniupgrade.reference_map import ModelReferenceMap, load_reference_map_async

logger = logging.getLogger(__name__)


@dataclass
class UpgradeContext:
    """State shared by the steps of a single run.

    Attributes:
        project_path: Project file being upgraded.
        settings: Effective settings for the run.
        token: Cooperative cancellation token.
        run_id: Unique id of this run; steps use it to tell runs apart.
        correlation_id: Tracing id attached to log records.
        write_lock: Held by every apply; one mutation at a time.
    """

    project_path: Path
    settings: UpgradeSettings = field(default_factory=UpgradeSettings)
    token: CancellationToken = field(default_factory=CancellationToken)
    run_id: UUID = field(default_factory=uuid4)
    correlation_id: str = field(default_factory=lambda: str(uuid4()))
    write_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _reference_maps: dict[Path, ModelReferenceMap] = field(
        default_factory=dict, init=False, repr=False
    )
    _map_lock: asyncio.Lock = field(
        default_factory=asyncio.Lock, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.project_path = Path(self.project_path)

    async def get_reference_map(self, path: Path | None = None) -> ModelReferenceMap:
        """Return the reference map at ``path``, loading it once per run.

        Raises:
            ConfigNotFoundError: If the map file does not exist.
            ConfigMalformedError: If the map file is invalid.
        """
        map_path = Path(path or self.settings.reference_map_path).resolve()
        async with self._map_lock:
            cached = self._reference_maps.get(map_path)
            if cached is not None:
                return cached
            self.token.raise_if_cancelled()
            reference_map = await load_reference_map_async(map_path)
            self._reference_maps[map_path] = reference_map
            logger.debug(
                "Cached reference map %s (%d entries)",
                map_path,
                len(reference_map),
                extra=self.log_extra(),
            )
            return reference_map

    def log_extra(self, **fields: Any) -> dict[str, Any]:
        """Build the ``extra`` mapping for log records emitted during the run."""
        return {
            "correlation_id": self.correlation_id,
            "run_id": str(self.run_id),
            **fields,
        }


__all__ = ["UpgradeContext"]
