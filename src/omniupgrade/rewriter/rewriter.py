# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Declarative reference rewrite.

Computes which declared references must be removed and which replacements
added, given a reference map. Pure computation: no I/O, no mutation. The same
function backs both step inspection (initialize) and mutation (apply).

Algorithm:
    1. Scan current references in declared order. Each reference matched by
       the map is marked for removal and the matching entry's replacements
       are appended to a candidate list, preserving entry order.
    2. Deduplicate candidates by case-insensitive name; first occurrence wins.
    3. Drop candidates whose name is already declared by a kept reference.
    4. Ensure the migration-support reference is present, adding it only if
       neither kept nor already queued.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from omniupgrade.models import ModelDependencyReference, ModelRewritePlan
from omniupgrade.reference_map import ModelReferenceMap

logger = logging.getLogger(__name__)


def rewrite(
    current_references: Iterable[ModelDependencyReference],
    reference_map: ModelReferenceMap,
    migration_support: ModelDependencyReference | None = None,
) -> ModelRewritePlan:
    """Compute the rewrite plan for a project's declared references.

    Args:
        current_references: Declared references in project order.
        reference_map: Loaded reference map.
        migration_support: Auxiliary reference that must always be present.
            None disables step 4.

    Returns:
        The plan. Empty when the project is already upgraded.
    """
    to_remove: list[ModelDependencyReference] = []
    kept: list[ModelDependencyReference] = []
    candidates: list[ModelDependencyReference] = []

    for reference in current_references:
        entry = reference_map.find_reference_match(reference)
        if entry is None:
            kept.append(reference)
            continue
        logger.debug(
            "Reference %s matched map entry %r", reference, entry.source_set_name
        )
        to_remove.append(reference)
        candidates.extend(entry.replacements)

    kept_names = {ref.key for ref in kept}
    queued: set[str] = set()
    to_add: list[ModelDependencyReference] = []
    for candidate in candidates:
        if candidate.key in queued or candidate.key in kept_names:
            continue
        queued.add(candidate.key)
        to_add.append(candidate)

    if (
        migration_support is not None
        and migration_support.key not in kept_names
        and migration_support.key not in queued
    ):
        to_add.append(migration_support)

    return ModelRewritePlan(to_remove=tuple(to_remove), to_add=tuple(to_add))


def apply_plan_to_references(
    current_references: Iterable[ModelDependencyReference],
    plan: ModelRewritePlan,
) -> list[ModelDependencyReference]:
    """Return the reference list a project would declare after ``plan``.

    Removal is by identity with the planned references so that a wildcard
    reference never removes more than the rewriter selected.
    """
    removed_ids = {id(ref) for ref in plan.to_remove}
    result = [ref for ref in current_references if id(ref) not in removed_ids]
    result.extend(plan.to_add)
    return result


__all__ = ["apply_plan_to_references", "rewrite"]
