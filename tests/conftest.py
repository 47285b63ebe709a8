"""
Pytest configuration and fixtures for omniupgrade tests.

Shared fixtures write temporary project files and reference maps under
``tmp_path``; nothing touches the real filesystem outside it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
import yaml

from omniupgrade.cancellation import CancellationToken
from omniupgrade.config import UpgradeSettings
from omniupgrade.enums import EnumUpgradeStepStatus
from omniupgrade.models import ModelDependencyReference, ModelUpgradeStepResult
from omniupgrade.readiness import ReadinessChecker
from omniupgrade.reference_map import ModelReferenceMap, parse_reference_map
from omniupgrade.steps import UpgradeContext, UpgradeStep

# =========================================================================
# Sample Data
# =========================================================================

MIGRATION_SUPPORT_NAME = "Migration.Analyzers"
MIGRATION_SUPPORT_VERSION = "1.0.0"

SAMPLE_MAP_ENTRIES: list[dict] = [
    {
        "name": "Package A",
        "match": [{"name": "PackageA", "version": "1.0"}],
        "replacements": [{"name": "PackageB", "version": "2.0"}],
    },
    {
        "name": "Legacy Web",
        "match": [{"name": "Legacy.Web*"}],
        "replacements": [
            {"name": "Modern.Web", "version": "3.0"},
            {"name": "PackageB", "version": "9.9"},
        ],
    },
]


def render_project(
    references: Sequence[tuple[str, str | None]],
    *,
    declaration: bool = False,
) -> str:
    """Render an MSBuild-style project declaring ``references``."""
    lines = []
    if declaration:
        lines.append('<?xml version="1.0" encoding="utf-8"?>')
    lines.append('<Project Sdk="Microsoft.NET.Sdk">')
    lines.append("  <PropertyGroup>")
    lines.append("    <TargetFramework>net8.0</TargetFramework>")
    lines.append("  </PropertyGroup>")
    if references:
        lines.append("  <ItemGroup>")
        for name, version in references:
            if version is None:
                lines.append(f'    <PackageReference Include="{name}" />')
            else:
                lines.append(
                    f'    <PackageReference Include="{name}" Version="{version}" />'
                )
        lines.append("  </ItemGroup>")
    lines.append("</Project>")
    return "\n".join(lines) + "\n"


# =========================================================================
# Fixtures
# =========================================================================


@pytest.fixture
def correlation_id() -> str:
    """Provide a valid UUID test correlation ID for distributed tracing."""
    return "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
def token() -> CancellationToken:
    return CancellationToken()


@pytest.fixture
def migration_support() -> ModelDependencyReference:
    return ModelDependencyReference(
        name=MIGRATION_SUPPORT_NAME, version=MIGRATION_SUPPORT_VERSION
    )


@pytest.fixture
def sample_reference_map() -> ModelReferenceMap:
    return parse_reference_map(SAMPLE_MAP_ENTRIES)


@pytest.fixture
def reference_map_file(tmp_path: Path) -> Path:
    """Write the sample reference map to a YAML file."""
    path = tmp_path / "reference_map.yaml"
    path.write_text(yaml.safe_dump(SAMPLE_MAP_ENTRIES, sort_keys=False))
    return path


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing ``<tmp>/App/App.csproj`` with the given references."""

    def _write(
        references: Sequence[tuple[str, str | None]] = (),
        *,
        content: str | None = None,
        declaration: bool = False,
    ) -> Path:
        project_dir = tmp_path / "App"
        project_dir.mkdir(exist_ok=True)
        path = project_dir / "App.csproj"
        if content is None:
            content = render_project(references, declaration=declaration)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(reference_map_file: Path) -> UpgradeSettings:
    """Settings pointing at the sample map, with backups disabled."""
    return UpgradeSettings(
        reference_map_path=reference_map_file,
        migration_support_name=MIGRATION_SUPPORT_NAME,
        migration_support_version=MIGRATION_SUPPORT_VERSION,
        skip_backup=True,
    )


# =========================================================================
# Scripted Steps
# =========================================================================


class ScriptedStep(UpgradeStep):
    """Step with scripted results that records every hook call.

    Once applied successfully, later initializations report COMPLETE, the
    way a real step sees its own persisted changes.
    """

    def __init__(
        self,
        step_id: str,
        *,
        depends_on: Sequence[str] = (),
        init_status: EnumUpgradeStepStatus = EnumUpgradeStepStatus.INCOMPLETE,
        apply_status: EnumUpgradeStepStatus = EnumUpgradeStepStatus.COMPLETE,
        init_error: BaseException | None = None,
        apply_error: BaseException | None = None,
        calls: list[str] | None = None,
        readiness_checker: ReadinessChecker | None = None,
    ) -> None:
        super().__init__(
            step_id=step_id,
            title=f"Step {step_id}",
            depends_on=depends_on,
            readiness_checker=readiness_checker,
        )
        self.init_status = init_status
        self.apply_status = apply_status
        self.init_error = init_error
        self.apply_error = apply_error
        self.calls = calls if calls is not None else []
        self.applied = False

    async def _initialize_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        self.calls.append(f"initialize:{self.step_id}")
        if self.init_error is not None:
            raise self.init_error
        if self.applied:
            return ModelUpgradeStepResult(
                status=EnumUpgradeStepStatus.COMPLETE, details="Already applied"
            )
        return ModelUpgradeStepResult(
            status=self.init_status, details=f"{self.step_id} {self.init_status.value}"
        )

    async def _apply_impl(self, context: UpgradeContext) -> ModelUpgradeStepResult:
        self.calls.append(f"apply:{self.step_id}")
        if self.apply_error is not None:
            raise self.apply_error
        if self.apply_status == EnumUpgradeStepStatus.COMPLETE:
            self.applied = True
        return ModelUpgradeStepResult(
            status=self.apply_status, details=f"{self.step_id} applied"
        )


@pytest.fixture
def make_step() -> Callable[..., ScriptedStep]:
    return ScriptedStep


@pytest.fixture
def make_context(tmp_path: Path) -> Callable[..., UpgradeContext]:
    """Factory for a fresh run context on a placeholder project path."""

    def _make(**kwargs) -> UpgradeContext:
        kwargs.setdefault("project_path", tmp_path / "App" / "App.csproj")
        return UpgradeContext(**kwargs)

    return _make
