# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Declared project dependency (package reference).

Equality is deliberately looser than field equality: two references are equal
when their names match case-insensitively and their versions either match
exactly or one side leaves the version unspecified. An unversioned reference
therefore acts as a wildcard. The hash only covers the case-folded name so
that it stays consistent with this relation.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ModelDependencyReference(BaseModel):
    """A named, optionally versioned dependency.

    Attributes:
        name: Package name as declared by the project.
        version: Version string, or None when the project does not pin one.

    Example:
        >>> a = ModelDependencyReference(name="PackageA", version="1.0")
        >>> a == ModelDependencyReference(name="packagea")
        True
        >>> a == ModelDependencyReference(name="PackageA", version="2.0")
        False
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("name", "Name"),
        description="Package name as declared by the project.",
    )
    version: str | None = Field(
        default=None,
        validation_alias=AliasChoices("version", "Version"),
        description="Pinned version, or None when unspecified.",
    )

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("version", mode="before")
    @classmethod
    def _normalize_version(cls, v: Any) -> Any:
        # YAML reads unquoted 2.10 as the float 2.1
        if isinstance(v, int | float) and not isinstance(v, bool):
            raise ValueError(f"version {v!r} must be a quoted string")
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @property
    def key(self) -> str:
        """Case-folded name used for comparisons and deduplication."""
        return self.name.casefold()

    def same_name(self, other: ModelDependencyReference) -> bool:
        """True if both references name the same package."""
        return self.key == other.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelDependencyReference):
            return NotImplemented
        if self.key != other.key:
            return False
        if self.version is None or other.version is None:
            return True
        return self.version == other.version

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        if self.version is None:
            return self.name
        return f"{self.name}@{self.version}"


__all__ = ["ModelDependencyReference"]
