# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Reference map: immutable table of old -> new dependency mappings."""

from omniupgrade.reference_map.loader import (
    DEFAULT_REFERENCE_MAP_PATH,
    load_reference_map,
    load_reference_map_async,
    parse_reference_map,
)
from omniupgrade.reference_map.model_reference_map import (
    ModelMatchRule,
    ModelReferenceMap,
    ModelReferenceMapEntry,
)
from omniupgrade.reference_map.version_range import VersionRange, parse_version_range

__all__ = [
    "DEFAULT_REFERENCE_MAP_PATH",
    "ModelMatchRule",
    "ModelReferenceMap",
    "ModelReferenceMapEntry",
    "VersionRange",
    "load_reference_map",
    "load_reference_map_async",
    "parse_reference_map",
    "parse_version_range",
]
