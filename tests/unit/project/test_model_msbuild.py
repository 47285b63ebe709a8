# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the MSBuild-style project model."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from omniupgrade.errors import ProjectMalformedError, ProjectNotFoundError
from omniupgrade.models import ModelDependencyReference
from omniupgrade.project import ProjectModelMsBuild, ProtocolProjectModel

LEGACY_PROJECT = """<?xml version="1.0" encoding="utf-8"?>
<Project ToolsVersion="15.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <!-- packages -->
  <ItemGroup>
    <PackageReference Include="Microsoft.AspNet.Mvc">
      <Version>5.2.7</Version>
    </PackageReference>
  </ItemGroup>
</Project>
"""


def _ref(name: str, version: str | None = None) -> ModelDependencyReference:
    return ModelDependencyReference(name=name, version=version)


@pytest.mark.unit
class TestProjectModelMsBuild:
    def test_satisfies_protocol(self, write_project: Callable[..., Path]) -> None:
        project = ProjectModelMsBuild.open(write_project())
        assert isinstance(project, ProtocolProjectModel)

    def test_lists_references_in_document_order(
        self, write_project: Callable[..., Path]
    ) -> None:
        path = write_project([("PackageA", "1.0"), ("Unpinned", None)])
        project = ProjectModelMsBuild.open(path)
        assert [(r.name, r.version) for r in project.list_references()] == [
            ("PackageA", "1.0"),
            ("Unpinned", None),
        ]

    def test_reads_version_child_element_in_namespaced_project(
        self, write_project: Callable[..., Path]
    ) -> None:
        project = ProjectModelMsBuild.open(write_project(content=LEGACY_PROJECT))
        refs = project.list_references()
        assert [(r.name, r.version) for r in refs] == [("Microsoft.AspNet.Mvc", "5.2.7")]

    def test_skips_items_without_include(
        self, write_project: Callable[..., Path]
    ) -> None:
        content = (
            "<Project><ItemGroup>"
            '<PackageReference Update="Foo" Version="1.0" />'
            '<PackageReference Include="Bar" Version="2.0" />'
            "</ItemGroup></Project>"
        )
        project = ProjectModelMsBuild.open(write_project(content=content))
        assert [r.name for r in project.list_references()] == ["Bar"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectNotFoundError):
            ProjectModelMsBuild.open(tmp_path / "Missing.csproj")

    def test_malformed_xml(self, write_project: Callable[..., Path]) -> None:
        path = write_project(content="<Project><ItemGroup></Project>")
        with pytest.raises(ProjectMalformedError) as exc_info:
            ProjectModelMsBuild.open(path)
        assert str(path) in exc_info.value.message

    def test_wrong_root_element(self, write_project: Callable[..., Path]) -> None:
        path = write_project(content="<packages />")
        with pytest.raises(ProjectMalformedError, match="Invalid project"):
            ProjectModelMsBuild.open(path)

    def test_remove_requires_exact_version(
        self, write_project: Callable[..., Path]
    ) -> None:
        project = ProjectModelMsBuild.open(write_project([("PackageA", "1.0")]))
        assert not project.remove_reference(_ref("PackageA", "2.0"))
        assert project.remove_reference(_ref("packagea", "1.0"))
        assert project.list_references() == []

    def test_add_joins_existing_reference_group(
        self, write_project: Callable[..., Path]
    ) -> None:
        path = write_project([("PackageA", "1.0")])
        project = ProjectModelMsBuild.open(path)
        project.add_reference(_ref("PackageB", "2.0"))
        project.save()

        reloaded = ProjectModelMsBuild.open(path)
        assert [str(r) for r in reloaded.list_references()] == [
            "PackageA@1.0",
            "PackageB@2.0",
        ]
        assert path.read_text().count("<ItemGroup>") == 1

    def test_add_creates_group_when_none_exists(
        self, write_project: Callable[..., Path]
    ) -> None:
        path = write_project([])
        project = ProjectModelMsBuild.open(path)
        project.add_reference(_ref("PackageB", "2.0"))
        project.save()

        text = path.read_text()
        assert '<PackageReference Include="PackageB" Version="2.0" />' in text

    def test_remove_empty_groups(self, write_project: Callable[..., Path]) -> None:
        project = ProjectModelMsBuild.open(write_project([("PackageA", "1.0")]))
        project.remove_reference(_ref("PackageA", "1.0"))
        assert project.remove_empty_groups() == 1
        assert project.remove_empty_groups() == 0

    def test_remove_empty_groups_keeps_preexisting_empty_groups(
        self, write_project: Callable[..., Path]
    ) -> None:
        path = write_project(
            content=(
                '<Project Sdk="Microsoft.NET.Sdk">\n'
                '  <ItemGroup Condition="x" />\n'
                "  <ItemGroup>\n"
                '    <PackageReference Include="PackageA" Version="1.0" />\n'
                "  </ItemGroup>\n"
                "</Project>\n"
            )
        )
        project = ProjectModelMsBuild.open(path)
        project.remove_reference(_ref("PackageA", "1.0"))

        assert project.remove_empty_groups() == 1
        project.save()
        assert '<ItemGroup Condition="x" />' in path.read_text()

    def test_edits_stay_in_memory_until_save(
        self, write_project: Callable[..., Path]
    ) -> None:
        path = write_project([("PackageA", "1.0")])
        before = path.read_bytes()
        project = ProjectModelMsBuild.open(path)
        project.remove_reference(_ref("PackageA", "1.0"))
        assert path.read_bytes() == before

        project.reload()
        assert len(project.list_references()) == 1

    def test_save_preserves_namespace_declaration_and_comments(
        self, write_project: Callable[..., Path]
    ) -> None:
        path = write_project(content=LEGACY_PROJECT)
        project = ProjectModelMsBuild.open(path)
        project.add_reference(_ref("Migration.Analyzers", "1.0.0"))
        project.save()

        text = path.read_text()
        assert text.startswith("<?xml")
        assert 'xmlns="http://schemas.microsoft.com/developer/msbuild/2003"' in text
        assert "ns0:" not in text
        assert "<!-- packages -->" in text
        assert [r.name for r in ProjectModelMsBuild.open(path).list_references()] == [
            "Microsoft.AspNet.Mvc",
            "Migration.Analyzers",
        ]

    def test_save_leaves_no_temporary_files(
        self, write_project: Callable[..., Path]
    ) -> None:
        path = write_project([("PackageA", "1.0")])
        ProjectModelMsBuild.open(path).save()
        assert sorted(p.name for p in path.parent.iterdir()) == ["App.csproj"]
