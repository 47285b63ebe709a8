# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""MSBuild-style XML project model.

Reads and edits ``<PackageReference>`` items of a project file such as::

    <Project Sdk="Microsoft.NET.Sdk.Web">
      <ItemGroup>
        <PackageReference Include="Microsoft.AspNet.Mvc" Version="5.2.7" />
        <PackageReference Include="Newtonsoft.Json">
          <Version>12.0.3</Version>
        </PackageReference>
      </ItemGroup>
    </Project>

Edits stay in memory until ``save``, which writes a temporary sibling file and
atomically replaces the project file. Legacy projects declaring the MSBuild
2003 namespace are supported; comments are preserved.
"""

from __future__ import annotations

import logging
import os
import tempfile
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from omniupgrade.errors import ProjectMalformedError, ProjectNotFoundError
from omniupgrade.models import ModelDependencyReference

logger = logging.getLogger(__name__)

PACKAGE_REFERENCE_ITEM_TYPE = "PackageReference"
VERSION_METADATA_NAME = "Version"
ITEM_GROUP_ELEMENT = "ItemGroup"
PROJECT_ELEMENT = "Project"


def _split_tag(tag: str) -> tuple[str, str]:
    """Split ``{namespace}local`` into ``(namespace, local)``."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


def _local_name(element: ET.Element) -> str:
    if not isinstance(element.tag, str):
        # comments and processing instructions
        return ""
    return _split_tag(element.tag)[1]


class ProjectModelMsBuild:
    """Project model backed by an MSBuild-style XML file.

    Usage::

        project = ProjectModelMsBuild.open("src/Web/Web.csproj")
        for reference in project.list_references():
            print(reference)
        project.add_reference(ModelDependencyReference(name="Foo", version="1.0"))
        project.save()
    """

    def __init__(
        self, path: Path | str, item_type: str = PACKAGE_REFERENCE_ITEM_TYPE
    ) -> None:
        self._path = Path(path)
        self._item_type = item_type
        self._tree: ET.ElementTree | None = None
        self._namespace = ""
        self._has_declaration = False
        self._touched_groups: list[ET.Element] = []
        self.reload()

    @classmethod
    def open(cls, path: Path | str) -> ProjectModelMsBuild:
        """Open the project at ``path``.

        Raises:
            ProjectNotFoundError: If the file does not exist.
            ProjectMalformedError: If the file is not a valid project.
        """
        return cls(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def _root(self) -> ET.Element:
        assert self._tree is not None
        return self._tree.getroot()

    def _tag(self, local: str) -> str:
        return f"{{{self._namespace}}}{local}" if self._namespace else local

    def reload(self) -> None:
        if not self._path.is_file():
            raise ProjectNotFoundError(self._path)
        try:
            raw = self._path.read_bytes()
        except OSError as exc:
            raise ProjectMalformedError(self._path, str(exc)) from exc

        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            parser.feed(raw)
            root = parser.close()
        except ET.ParseError as exc:
            raise ProjectMalformedError(self._path, str(exc)) from exc

        namespace, local = _split_tag(root.tag)
        if local != PROJECT_ELEMENT:
            raise ProjectMalformedError(
                self._path, f"root element is <{local}>, expected <Project>"
            )

        self._tree = ET.ElementTree(root)
        self._namespace = namespace
        self._has_declaration = raw.lstrip().startswith(b"<?xml")
        self._touched_groups = []

    def _item_groups(self) -> list[ET.Element]:
        return [
            child
            for child in self._root
            if _local_name(child) == ITEM_GROUP_ELEMENT
        ]

    def _iter_items(self) -> Iterator[tuple[ET.Element, ET.Element]]:
        wanted = self._item_type.casefold()
        for group in self._item_groups():
            for item in group:
                if _local_name(item).casefold() == wanted:
                    yield group, item

    @staticmethod
    def _item_version(item: ET.Element) -> str | None:
        wanted = VERSION_METADATA_NAME.casefold()
        for key, value in item.attrib.items():
            if key.casefold() == wanted:
                return value
        for child in item:
            if _local_name(child).casefold() == wanted:
                return (child.text or "").strip() or None
        return None

    def _item_reference(self, item: ET.Element) -> ModelDependencyReference | None:
        include = item.get("Include")
        if not include or not include.strip():
            # Update/Remove items do not declare a dependency
            return None
        return ModelDependencyReference(name=include, version=self._item_version(item))

    def list_references(self) -> list[ModelDependencyReference]:
        references: list[ModelDependencyReference] = []
        for _, item in self._iter_items():
            reference = self._item_reference(item)
            if reference is not None:
                references.append(reference)
        return references

    def remove_reference(self, reference: ModelDependencyReference) -> bool:
        for group, item in self._iter_items():
            declared = self._item_reference(item)
            if (
                declared is not None
                and declared.same_name(reference)
                and declared.version == reference.version
            ):
                group.remove(item)
                if group not in self._touched_groups:
                    self._touched_groups.append(group)
                logger.debug("Removed %s from %s", reference, self._path)
                return True
        return False

    def add_reference(self, reference: ModelDependencyReference) -> None:
        group = next((g for g, _ in self._iter_items()), None)
        if group is None:
            logger.debug("Creating a new ItemGroup for package references")
            group = ET.SubElement(self._root, self._tag(ITEM_GROUP_ELEMENT))
        item = ET.SubElement(
            group, self._tag(self._item_type), {"Include": reference.name}
        )
        if reference.version is not None:
            item.set(VERSION_METADATA_NAME, reference.version)
        logger.debug("Added %s to %s", reference, self._path)

    def remove_empty_groups(self) -> int:
        """Drop item groups emptied by ``remove_reference``.

        Groups that were already empty when the project was loaded stay.
        """
        removed = 0
        candidates, self._touched_groups = self._touched_groups, []
        for group in candidates:
            if len(group) == 0 and any(child is group for child in self._root):
                self._root.remove(group)
                removed += 1
        if removed:
            logger.debug("Removed %d empty ItemGroup(s)", removed)
        return removed

    def save(self) -> None:
        assert self._tree is not None
        if self._namespace:
            ET.register_namespace("", self._namespace)
        ET.indent(self._tree, space="  ")

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                self._tree.write(
                    handle,
                    encoding="utf-8",
                    xml_declaration=self._has_declaration,
                )
                handle.write(b"\n")
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved project %s", self._path)


__all__ = [
    "PACKAGE_REFERENCE_ITEM_TYPE",
    "VERSION_METADATA_NAME",
    "ProjectModelMsBuild",
]
