# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Reference map models: old -> new dependency mappings.

Reference map file structure (YAML or JSON)::

    - name: ASP.NET MVC
      match:
        - name: Microsoft.AspNet.Mvc
          version: "[5.0,6.0)"
      replacements:
        - name: Microsoft.AspNetCore.Mvc.NewtonsoftJson
          version: "3.1.0"

Legacy package-map key names (``PackageSetName``,
``NetFrameworkPackages``, ``NetCorePackages``, ``Name``, ``Version``) are
accepted as aliases so existing map files load unchanged.

All models are frozen; a loaded map is shared read-only by every step.
"""

from __future__ import annotations

import fnmatch
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from omniupgrade.models import ModelDependencyReference
from omniupgrade.reference_map.version_range import VersionRange, parse_version_range

_GLOB_CHARS = frozenset("*?[")


class ModelMatchRule(BaseModel):
    """A ``(name pattern, version range)`` predicate.

    Attributes:
        name: Exact package name or glob pattern, case-insensitive.
        version: Version range notation; None matches any version.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("name", "Name"),
        description="Package name or glob pattern.",
    )
    version: str | None = Field(
        default=None,
        validation_alias=AliasChoices("version", "Version"),
        description="Version range the rule accepts.",
    )

    @field_validator("version", mode="before")
    @classmethod
    def _reject_numeric_version(cls, v: Any) -> Any:
        if isinstance(v, int | float) and not isinstance(v, bool):
            raise ValueError(f"version {v!r} must be a quoted string")
        return v

    @field_validator("version")
    @classmethod
    def _validate_range(cls, v: str | None) -> str | None:
        parse_version_range(v)
        return v

    @property
    def version_range(self) -> VersionRange:
        return parse_version_range(self.version)

    @property
    def is_pattern(self) -> bool:
        return any(ch in _GLOB_CHARS for ch in self.name)

    def accepts(self, name: str, version: str | None) -> bool:
        """Return True if ``(name, version)`` satisfies this rule."""
        folded = name.casefold()
        pattern = self.name.casefold()
        if self.is_pattern:
            name_ok = fnmatch.fnmatchcase(folded, pattern)
        else:
            name_ok = folded == pattern
        return name_ok and self.version_range.contains(version)


class ModelReferenceMapEntry(BaseModel):
    """One mapping from outdated references to their replacements.

    Attributes:
        source_set_name: Display name of the mapped package set.
        match_rules: Rules identifying outdated references.
        replacements: References that replace any matched reference, in
            order. Names are unique within an entry.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_set_name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("name", "source_set_name", "PackageSetName"),
    )
    match_rules: tuple[ModelMatchRule, ...] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("match", "match_rules", "NetFrameworkPackages"),
    )
    replacements: tuple[ModelDependencyReference, ...] = Field(
        default=(),
        validation_alias=AliasChoices(
            "replacements", "replace_with", "NetCorePackages"
        ),
    )

    @model_validator(mode="after")
    def _unique_replacement_names(self) -> ModelReferenceMapEntry:
        seen: set[str] = set()
        for ref in self.replacements:
            if ref.key in seen:
                raise ValueError(
                    f"Entry {self.source_set_name!r} lists replacement "
                    f"{ref.name!r} more than once"
                )
            seen.add(ref.key)
        return self

    def matches(self, name: str, version: str | None) -> bool:
        """Return True if any match rule accepts ``(name, version)``."""
        return any(rule.accepts(name, version) for rule in self.match_rules)


class ModelReferenceMap(BaseModel):
    """Ordered, immutable sequence of mapping entries."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    entries: tuple[ModelReferenceMapEntry, ...] = ()

    def find_match(
        self, name: str, version: str | None = None
    ) -> ModelReferenceMapEntry | None:
        """Return the first entry, in declared order, accepting the reference.

        Matching short-circuits: later entries are never consulted once one
        entry accepts.
        """
        for entry in self.entries:
            if entry.matches(name, version):
                return entry
        return None

    def find_reference_match(
        self, reference: ModelDependencyReference
    ) -> ModelReferenceMapEntry | None:
        return self.find_match(reference.name, reference.version)

    def __len__(self) -> int:
        return len(self.entries)


__all__ = [
    "ModelMatchRule",
    "ModelReferenceMap",
    "ModelReferenceMapEntry",
]
