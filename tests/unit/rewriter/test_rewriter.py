# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the declarative reference rewrite."""

from __future__ import annotations

import pytest

from omniupgrade.models import ModelDependencyReference
from omniupgrade.reference_map import ModelReferenceMap, parse_reference_map
from omniupgrade.rewriter import apply_plan_to_references, rewrite


def _ref(name: str, version: str | None = None) -> ModelDependencyReference:
    return ModelDependencyReference(name=name, version=version)


def _names(refs) -> list[str]:
    return [ref.name for ref in refs]


@pytest.mark.unit
class TestRewrite:
    def test_replaces_matched_reference(
        self,
        sample_reference_map: ModelReferenceMap,
        migration_support: ModelDependencyReference,
    ) -> None:
        plan = rewrite([_ref("PackageA", "1.0")], sample_reference_map, migration_support)

        assert _names(plan.to_remove) == ["PackageA"]
        assert plan.to_add == (_ref("PackageB", "2.0"), migration_support)

    def test_rerun_after_apply_is_empty(
        self,
        sample_reference_map: ModelReferenceMap,
        migration_support: ModelDependencyReference,
    ) -> None:
        current = [_ref("PackageA", "1.0"), _ref("Unrelated", "4.0")]
        plan = rewrite(current, sample_reference_map, migration_support)
        upgraded = apply_plan_to_references(current, plan)

        second = rewrite(upgraded, sample_reference_map, migration_support)

        assert second.is_empty
        assert _names(upgraded) == ["Unrelated", "PackageB", "Migration.Analyzers"]

    def test_first_replacement_wins_when_deduplicating(
        self,
        sample_reference_map: ModelReferenceMap,
    ) -> None:
        # PackageA maps to PackageB@2.0, Legacy.Web to PackageB@9.9
        plan = rewrite(
            [_ref("PackageA", "1.0"), _ref("Legacy.Web.Core", "1.0")],
            sample_reference_map,
        )
        package_b = [ref for ref in plan.to_add if ref.key == "packageb"]
        assert len(package_b) == 1
        assert package_b[0].version == "2.0"
        assert _names(plan.to_add) == ["PackageB", "Modern.Web"]

    def test_dedup_ignores_name_case(self) -> None:
        reference_map = parse_reference_map(
            [
                {
                    "name": "X",
                    "match": [{"name": "X"}],
                    "replacements": [{"name": "Shared", "version": "1.0"}],
                },
                {
                    "name": "Y",
                    "match": [{"name": "Y"}],
                    "replacements": [{"name": "SHARED", "version": "2.0"}],
                },
            ]
        )
        plan = rewrite([_ref("X", "1"), _ref("Y", "1")], reference_map)
        assert plan.to_add == (_ref("Shared", "1.0"),)

    def test_replacement_already_kept_is_not_added(
        self,
        sample_reference_map: ModelReferenceMap,
        migration_support: ModelDependencyReference,
    ) -> None:
        plan = rewrite(
            [_ref("PackageA", "1.0"), _ref("packageb", "5.0")],
            sample_reference_map,
            migration_support,
        )
        assert _names(plan.to_remove) == ["PackageA"]
        assert plan.to_add == (migration_support,)

    def test_no_references_only_needs_migration_support(
        self,
        sample_reference_map: ModelReferenceMap,
        migration_support: ModelDependencyReference,
    ) -> None:
        plan = rewrite([], sample_reference_map, migration_support)
        assert plan.to_remove == ()
        assert plan.to_add == (migration_support,)

    def test_migration_support_already_present(
        self,
        sample_reference_map: ModelReferenceMap,
        migration_support: ModelDependencyReference,
    ) -> None:
        plan = rewrite(
            [_ref("Migration.Analyzers", "0.9")], sample_reference_map, migration_support
        )
        assert plan.is_empty

    def test_migration_support_present_once_after_repeated_applies(
        self,
        sample_reference_map: ModelReferenceMap,
        migration_support: ModelDependencyReference,
    ) -> None:
        current = [_ref("PackageA", "1.0"), _ref("Legacy.Web", "2.0")]
        for _ in range(3):
            plan = rewrite(current, sample_reference_map, migration_support)
            current = apply_plan_to_references(current, plan)
        assert sum(1 for ref in current if ref.same_name(migration_support)) == 1

    def test_unmatched_references_are_kept(
        self, sample_reference_map: ModelReferenceMap
    ) -> None:
        plan = rewrite([_ref("Newtonsoft.Json", "13.0.1")], sample_reference_map)
        assert plan.is_empty

    def test_version_outside_rule_is_kept(
        self, sample_reference_map: ModelReferenceMap
    ) -> None:
        plan = rewrite([_ref("PackageA", "3.0")], sample_reference_map)
        assert plan.to_remove == ()

    def test_unversioned_reference_matches(
        self, sample_reference_map: ModelReferenceMap
    ) -> None:
        plan = rewrite([_ref("PackageA")], sample_reference_map)
        assert _names(plan.to_remove) == ["PackageA"]

    def test_removals_keep_declared_order(
        self, sample_reference_map: ModelReferenceMap
    ) -> None:
        plan = rewrite(
            [_ref("Legacy.Web.Mvc", "1"), _ref("Keep", "1"), _ref("PackageA", "1.0")],
            sample_reference_map,
        )
        assert _names(plan.to_remove) == ["Legacy.Web.Mvc", "PackageA"]
        assert _names(plan.to_add) == ["Modern.Web", "PackageB"]

    def test_does_not_mutate_input(
        self, sample_reference_map: ModelReferenceMap
    ) -> None:
        current = [_ref("PackageA", "1.0")]
        rewrite(current, sample_reference_map)
        assert current == [_ref("PackageA", "1.0")]
