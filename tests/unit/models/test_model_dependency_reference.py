# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for ModelDependencyReference equality and normalization."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from omniupgrade.models import ModelDependencyReference, ModelRewritePlan


@pytest.mark.unit
class TestModelDependencyReference:
    def test_names_compare_case_insensitively(self) -> None:
        a = ModelDependencyReference(name="PackageA", version="1.0")
        b = ModelDependencyReference(name="packagea", version="1.0")
        assert a == b
        assert hash(a) == hash(b)

    def test_unversioned_reference_matches_any_version(self) -> None:
        pinned = ModelDependencyReference(name="PackageA", version="1.0")
        unpinned = ModelDependencyReference(name="PackageA")
        assert pinned == unpinned
        assert unpinned == pinned

    def test_different_versions_are_not_equal(self) -> None:
        assert ModelDependencyReference(
            name="PackageA", version="1.0"
        ) != ModelDependencyReference(name="PackageA", version="2.0")

    def test_accepts_capitalized_aliases(self) -> None:
        ref = ModelDependencyReference.model_validate({"Name": "Foo", "Version": "3.1"})
        assert ref.name == "Foo"
        assert ref.version == "3.1"

    def test_numeric_version_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match="quoted string"):
            ModelDependencyReference.model_validate({"name": "Foo", "version": 2.1})

    def test_blank_version_becomes_none(self) -> None:
        ref = ModelDependencyReference(name="  Foo  ", version="  ")
        assert ref.name == "Foo"
        assert ref.version is None

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelDependencyReference(name="")

    def test_str_includes_version_when_pinned(self) -> None:
        assert str(ModelDependencyReference(name="Foo", version="1.0")) == "Foo@1.0"
        assert str(ModelDependencyReference(name="Foo")) == "Foo"

    def test_is_frozen(self) -> None:
        ref = ModelDependencyReference(name="Foo")
        with pytest.raises(ValidationError):
            ref.name = "Bar"  # type: ignore[misc]


@pytest.mark.unit
class TestModelRewritePlan:
    def test_empty_plan_summary(self) -> None:
        plan = ModelRewritePlan()
        assert plan.is_empty
        assert plan.summary() == "No package updates needed"

    def test_summary_lists_removals_and_additions(self) -> None:
        plan = ModelRewritePlan(
            to_remove=(ModelDependencyReference(name="A", version="1.0"),),
            to_add=(ModelDependencyReference(name="B", version="2.0"),),
        )
        assert not plan.is_empty
        assert plan.summary() == "remove A@1.0; add B@2.0"
