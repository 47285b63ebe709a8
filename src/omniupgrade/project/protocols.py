# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Project model protocols.

The engine never parses project files itself. Steps depend on these
protocols; ``ProjectModelMsBuild`` is the shipped implementation and tests
may inject in-memory fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from omniupgrade.models import ModelDependencyReference


@runtime_checkable
class ProtocolProjectModel(Protocol):
    """Editable, persistable view of a project's declared dependencies.

    Edits are held in memory until ``save`` is called, so a caller can build
    a complete edit set and persist it once.
    """

    @property
    def path(self) -> Path:
        """Path of the backing project file."""
        ...

    def reload(self) -> None:
        """Discard in-memory state and re-read the project from disk."""
        ...

    def list_references(self) -> list[ModelDependencyReference]:
        """Return declared package references in document order."""
        ...

    def remove_reference(self, reference: ModelDependencyReference) -> bool:
        """Remove the first item declaring ``reference``.

        Returns:
            True if an item was removed.
        """
        ...

    def add_reference(self, reference: ModelDependencyReference) -> None:
        """Declare ``reference``, grouping it with existing references."""
        ...

    def remove_empty_groups(self) -> int:
        """Drop item groups emptied by removals; return how many."""
        ...

    def save(self) -> None:
        """Persist the in-memory document atomically."""
        ...


@runtime_checkable
class ProtocolProjectModelFactory(Protocol):
    """Opens project models from a path."""

    def __call__(self, path: Path) -> ProtocolProjectModel:
        """Open the project at ``path``.

        Raises:
            ProjectNotFoundError: If the file does not exist.
            ProjectMalformedError: If the file is not a valid project.
        """
        ...


__all__ = ["ProtocolProjectModel", "ProtocolProjectModelFactory"]
