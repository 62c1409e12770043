"""Tests for presentation.py — text reports and JSON output."""

import json
from datetime import datetime, timezone
from pathlib import Path

from dependency_blame.models import (
    Dependency,
    DependencyAnalysis,
    DependencyType,
    EcosystemType,
    GitInfo,
    ImportLocation,
    UsageInfo,
)
from dependency_blame.presentation import (
    render_analysis,
    render_dependency_list,
    render_history,
    to_json,
)

SERDE = Dependency(name="serde", version="1.0", ecosystem=EcosystemType.Rust)


def _git_info(message: str = "Add serde") -> GitInfo:
    return GitInfo(
        commit_hash="abcdef0123456789",
        author="Jane Doe <jane@example.com>",
        date=datetime(2024, 3, 1, 12, 30, 0, tzinfo=timezone.utc),
        message=message,
        file_path=Path("Cargo.toml"),
    )


def _locations(count: int) -> list[ImportLocation]:
    return [
        ImportLocation(file_path=Path(f"src/m{i}.rs"), line_number=i, line_content="use serde::Serialize;")
        for i in range(1, count + 1)
    ]


class TestRenderAnalysis:
    def test_with_git_info_and_usage(self):
        analysis = DependencyAnalysis(
            dependency=SERDE,
            git_info=_git_info(),
            usage_info=UsageInfo.with_locations(_locations(2)),
        )

        text = render_analysis(analysis)

        assert "Dependency Analysis: serde v1.0" in text
        assert "Type: Direct" in text
        assert "Ecosystem: Rust" in text
        assert "Added in: abcdef01" in text
        assert "Author: Jane Doe <jane@example.com>" in text
        assert "Date: 2024-03-01 12:30:00 UTC" in text
        assert "Message:\nAdd serde" in text
        assert "Status: USED (2 imports found)" in text
        assert "  1. src/m1.rs:1" in text
        assert "     use serde::Serialize;" in text

    def test_without_git_info(self):
        text = render_analysis(DependencyAnalysis(dependency=SERDE))
        assert "Git History: Not available" in text
        assert "Status: UNUSED (no imports found)" in text
        assert "  - A transitive dependency" in text

    def test_locations_truncated(self):
        analysis = DependencyAnalysis(dependency=SERDE, usage_info=UsageInfo.with_locations(_locations(13)))

        text = render_analysis(analysis)

        assert "  10. src/m10.rs:10" in text
        assert "src/m11.rs" not in text
        assert "  ... and 3 more locations" in text

    def test_display_names(self):
        dep = Dependency(
            name="jest", version="^29", ecosystem=EcosystemType.Node, dependency_type=DependencyType.Dev
        )
        text = render_analysis(DependencyAnalysis(dependency=dep))
        assert "Type: Development" in text
        assert "Ecosystem: Node.js" in text


class TestRenderDependencyList:
    def test_groups(self):
        deps = [
            Dependency(name="express", version="^4", ecosystem=EcosystemType.Node),
            Dependency(name="jest", version="^29", ecosystem=EcosystemType.Node, dependency_type=DependencyType.Dev),
            Dependency(name="react", version=">=18", ecosystem=EcosystemType.Node, dependency_type=DependencyType.Peer),
        ]

        text = render_dependency_list(deps)

        assert "Dependencies (3 total)" in text
        assert "Direct Dependencies (1):" in text
        assert "  express (^4)" in text
        assert "Development Dependencies (1):" in text
        assert "Other Dependencies (1):" in text
        assert "  react (>=18) - Peer" in text

    def test_empty_groups_omitted(self):
        text = render_dependency_list([Dependency(name="a", ecosystem=EcosystemType.Go)])
        assert "Development Dependencies" not in text
        assert "Other Dependencies" not in text

    def test_empty(self):
        assert "Dependencies (0 total)" in render_dependency_list([])


class TestRenderHistory:
    def test_entries(self):
        text = render_history([_git_info("Add serde\n\nlong body")])
        assert "Dependency file history (1 commits):" in text
        assert "abcdef01  2024-03-01  Jane Doe <jane@example.com>" in text
        assert "    Add serde" in text
        assert "long body" not in text

    def test_empty(self):
        assert render_history([]) == "No commits touching the dependency file were found."


class TestToJson:
    def test_single_model(self):
        analysis = DependencyAnalysis(dependency=SERDE, git_info=_git_info())
        data = json.loads(to_json(analysis))
        assert data["dependency"]["ecosystem"] == "Rust"
        assert data["git_info"]["commit_hash"] == "abcdef0123456789"
        assert data["usage_info"]["is_used"] is False

    def test_list(self):
        data = json.loads(to_json([SERDE]))
        assert data == [
            {"name": "serde", "version": "1.0", "ecosystem": "Rust", "dependency_type": "Direct"}
        ]
