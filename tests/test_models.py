"""Tests for models.py."""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from dependency_blame.models import (
    Dependency,
    DependencyAnalysis,
    DependencyQuery,
    DependencyType,
    EcosystemType,
    GitInfo,
    ImportLocation,
    UsageInfo,
)


def _location(n: int = 1) -> ImportLocation:
    return ImportLocation(file_path=Path("src/main.py"), line_number=n, line_content="import requests")


class TestEnums:
    def test_ecosystem_display_names(self):
        assert EcosystemType.Rust.display_name == "Rust"
        assert EcosystemType.Node.display_name == "Node.js"
        assert EcosystemType.Python.display_name == "Python"
        assert EcosystemType.Go.display_name == "Go"

    def test_dependency_type_display_names(self):
        assert DependencyType.Direct.display_name == "Direct"
        assert DependencyType.Dev.display_name == "Development"
        assert DependencyType.Peer.display_name == "Peer"

    def test_values_are_strings(self):
        assert EcosystemType("Go") is EcosystemType.Go
        assert DependencyType("Build") is DependencyType.Build


class TestDependency:
    def test_defaults(self):
        dep = Dependency(name="serde", ecosystem=EcosystemType.Rust)
        assert dep.version == "*"
        assert dep.dependency_type is DependencyType.Direct

    def test_identity_is_name_and_ecosystem(self):
        a = Dependency(name="x", version="1.0", ecosystem=EcosystemType.Node)
        b = Dependency(
            name="x", version="2.0", ecosystem=EcosystemType.Node, dependency_type=DependencyType.Dev
        )
        assert a == b
        assert len({a, b}) == 1

    def test_different_ecosystems_differ(self):
        a = Dependency(name="x", ecosystem=EcosystemType.Node)
        b = Dependency(name="x", ecosystem=EcosystemType.Python)
        assert a != b


class TestGitInfo:
    def test_short_hash(self):
        info = GitInfo(
            commit_hash="0123456789abcdef",
            author="Jane <jane@example.com>",
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            message="Add serde",
            file_path=Path("Cargo.toml"),
        )
        assert info.short_hash == "01234567"
        assert info.line_number is None

    def test_frozen(self):
        info = GitInfo(
            commit_hash="abc",
            author="a <b>",
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            message="m",
            file_path=Path("go.mod"),
        )
        with pytest.raises(ValidationError):
            info.message = "changed"


class TestUsageInfo:
    def test_empty(self):
        usage = UsageInfo()
        assert usage.is_used is False
        assert usage.usage_count == 0

    def test_count_derived_from_locations(self):
        usage = UsageInfo.with_locations([_location(1), _location(5)])
        assert usage.usage_count == 2
        assert usage.is_used is True

    def test_inconsistent_input_is_corrected(self):
        usage = UsageInfo(is_used=True, usage_count=7, import_locations=[])
        assert usage.usage_count == 0
        assert usage.is_used is False


class TestDependencyAnalysis:
    def test_defaults(self):
        analysis = DependencyAnalysis(dependency=Dependency(name="x", ecosystem=EcosystemType.Go))
        assert analysis.git_info is None
        assert analysis.usage_info.is_used is False

    def test_json_round_trip(self):
        analysis = DependencyAnalysis(
            dependency=Dependency(name="requests", ecosystem=EcosystemType.Python),
            usage_info=UsageInfo.with_locations([_location(3)]),
        )
        restored = DependencyAnalysis.model_validate_json(analysis.model_dump_json())
        assert restored.usage_info.usage_count == 1
        assert restored.dependency.ecosystem is EcosystemType.Python


class TestDependencyQuery:
    def test_defaults(self):
        query = DependencyQuery(dependency_name="serde", repo_path=Path("."))
        assert query.include_git_history is True
        assert query.scan_usage is True
