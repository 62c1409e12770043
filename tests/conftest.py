"""Pytest configuration and fixtures."""

from pathlib import Path

import git  # GitPython
import pytest

BASE_TIMESTAMP = 1_700_000_000


class GitProject:
    """A throwaway repository whose commits get strictly increasing dates."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.repo = git.Repo.init(root)
        self.actor = git.Actor("Jane Doe", "jane@example.com")
        self._ticks = 0

    def write(self, rel_path: str, text: str) -> Path:
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    def commit(self, message: str, *rel_paths: str) -> git.Commit:
        if rel_paths:
            self.repo.index.add(list(rel_paths))
        self._ticks += 1
        date = f"{BASE_TIMESTAMP + self._ticks * 60} +0000"
        return self.repo.index.commit(
            message,
            author=self.actor,
            committer=self.actor,
            author_date=date,
            commit_date=date,
        )

    def remove(self, rel_path: str) -> None:
        self.repo.index.remove([rel_path], working_tree=True)


@pytest.fixture
def git_project(tmp_path):
    """An empty git repository in ``tmp_path``."""
    return GitProject(tmp_path)


@pytest.fixture
def cargo_toml():
    return """\
[package]
name = "demo"
version = "0.1.0"

[dependencies]
serde = "1.0"
tokio = { version = "1.35", features = ["full"] }
local-crate = { path = "../local" }

[dev-dependencies]
criterion = "0.5"

[build-dependencies]
cc = "1.0"
"""


@pytest.fixture
def package_json():
    return """\
{
  "name": "demo",
  "dependencies": {"express": "^4.18.2", "@types/node": "^20.0.0"},
  "devDependencies": {"jest": "^29.0.0"},
  "peerDependencies": {"react": ">=18"},
  "optionalDependencies": {"fsevents": "^2.3.0"}
}
"""
