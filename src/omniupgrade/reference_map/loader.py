# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Reference map loading.

Parses a YAML (or JSON, which is a YAML subset) file into a frozen
``ModelReferenceMap``. The document is either a list of entries or a mapping
with an ``entries`` key.

Usage::

    reference_map = load_reference_map("reference_map.yaml")
    entry = reference_map.find_match("Microsoft.AspNet.Mvc", "5.2.7")
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from omniupgrade.errors import ConfigMalformedError, ConfigNotFoundError
from omniupgrade.reference_map.model_reference_map import ModelReferenceMap

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_MAP_PATH = (
    Path(__file__).resolve().parent.parent / "data" / "reference_map.yaml"
)


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def parse_reference_map(data: Any, source: Path | str = "<memory>") -> ModelReferenceMap:
    """Validate already-parsed data into a ``ModelReferenceMap``.

    Args:
        data: Parsed YAML/JSON document.
        source: Path used in error messages.

    Raises:
        ConfigMalformedError: If the document is not a valid reference map.
    """
    if data is None:
        data = []
    if isinstance(data, dict):
        if "entries" not in data:
            raise ConfigMalformedError(
                source, "expected a list of entries or a mapping with 'entries'"
            )
        data = data["entries"] or []
    if not isinstance(data, list):
        raise ConfigMalformedError(
            source, f"expected a list of entries, got {type(data).__name__}"
        )

    try:
        return ModelReferenceMap.model_validate({"entries": data})
    except ValidationError as exc:
        raise ConfigMalformedError(source, _format_validation_error(exc)) from exc


def load_reference_map(path: Path | str) -> ModelReferenceMap:
    """Load a reference map file.

    Args:
        path: Filesystem path to the YAML or JSON map.

    Returns:
        The loaded, immutable reference map.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigMalformedError: If the file cannot be parsed or validated.
    """
    map_path = Path(path)
    if not map_path.is_file():
        raise ConfigNotFoundError(map_path, "Reference map file")

    logger.info("Loading reference map from %s", map_path)
    try:
        content = map_path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise ConfigMalformedError(map_path, f"cannot read file: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        line_hint = ""
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            line_hint = f" (line {mark.line + 1})"
        raise ConfigMalformedError(
            map_path, f"invalid YAML/JSON syntax{line_hint}"
        ) from exc

    reference_map = parse_reference_map(data, source=map_path)
    logger.debug("Loaded %d reference map entries", len(reference_map))
    return reference_map


async def load_reference_map_async(path: Path | str) -> ModelReferenceMap:
    """Load a reference map without blocking the event loop."""
    return await asyncio.to_thread(load_reference_map, path)


__all__ = [
    "DEFAULT_REFERENCE_MAP_PATH",
    "load_reference_map",
    "load_reference_map_async",
    "parse_reference_map",
]
