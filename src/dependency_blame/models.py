"""Data models for dependency-blame."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Ecosystems ─────────────────────────────────────────────────────────────

class EcosystemType(str, Enum):
    """A language / package-manager convention."""

    Rust = "Rust"
    Node = "Node"
    Python = "Python"
    Go = "Go"

    @property
    def display_name(self) -> str:
        return {
            EcosystemType.Rust: "Rust",
            EcosystemType.Node: "Node.js",
            EcosystemType.Python: "Python",
            EcosystemType.Go: "Go",
        }[self]


class DependencyType(str, Enum):
    """Which manifest section a dependency was declared in."""

    Direct = "Direct"
    Dev = "Dev"
    Optional = "Optional"
    Peer = "Peer"
    Build = "Build"

    @property
    def display_name(self) -> str:
        if self is DependencyType.Dev:
            return "Development"
        return self.value


# ── Declared dependencies ─────────────────────────────────────────────────

class Dependency(BaseModel):
    """A single declared dependency.

    Two dependencies are the same if they share name and ecosystem; version
    and kind are attributes only.
    """

    name: str
    version: str = "*"
    ecosystem: EcosystemType
    dependency_type: DependencyType = DependencyType.Direct

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dependency):
            return NotImplemented
        return (self.name, self.ecosystem) == (other.name, other.ecosystem)

    def __hash__(self) -> int:
        return hash((self.name, self.ecosystem))


# ── Git history ───────────────────────────────────────────────────────────

class GitInfo(BaseModel):
    """Commit that introduced (or modified) a manifest entry."""

    model_config = ConfigDict(frozen=True)

    commit_hash: str
    author: str  # "name <email>"
    date: datetime  # UTC
    message: str
    file_path: Path
    line_number: Optional[int] = None

    @property
    def short_hash(self) -> str:
        return self.commit_hash[:8]


# ── Usage ─────────────────────────────────────────────────────────────────

class ImportLocation(BaseModel):
    """One source line where the dependency is imported."""

    file_path: Path
    line_number: int  # 1-indexed
    line_content: str


class UsageInfo(BaseModel):
    """Aggregated import locations for one dependency.

    ``usage_count`` and ``is_used`` are always derived from
    ``import_locations``.
    """

    is_used: bool = False
    import_locations: list[ImportLocation] = Field(default_factory=list)
    usage_count: int = 0

    def model_post_init(self, _ctx: object) -> None:
        self.usage_count = len(self.import_locations)
        self.is_used = self.usage_count > 0

    @classmethod
    def with_locations(cls, locations: list[ImportLocation]) -> "UsageInfo":
        return cls(import_locations=list(locations))


# ── Query / result ────────────────────────────────────────────────────────

class DependencyAnalysis(BaseModel):
    """Complete answer to one analyze() call."""

    dependency: Dependency
    git_info: Optional[GitInfo] = None
    usage_info: UsageInfo = Field(default_factory=UsageInfo)


class DependencyQuery(BaseModel):
    """Everything needed to run one analysis."""

    model_config = ConfigDict(frozen=True)

    dependency_name: str
    repo_path: Path
    include_git_history: bool = True
    scan_usage: bool = True
