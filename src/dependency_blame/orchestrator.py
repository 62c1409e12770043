"""Ties registry, parsers, git history and usage scan into one analysis."""

import logging
from pathlib import Path
from typing import Optional, Union

import git  # GitPython

from dependency_blame.ecosystems.base import EcosystemAdapter
from dependency_blame.ecosystems.registry import EcosystemRegistry, create_default_registry
from dependency_blame.errors import DependencyBlameError, DependencyNotFound, UnsupportedEcosystem
from dependency_blame.git_analyzer import GitAnalyzer
from dependency_blame.models import (
    Dependency,
    DependencyAnalysis,
    DependencyQuery,
    EcosystemType,
    GitInfo,
    UsageInfo,
)
from dependency_blame.usage_scanner import UsageScanner

logger = logging.getLogger(__name__)


class DependencyOrchestrator:
    """Runs analyze / list requests. Holds no state between calls."""

    def __init__(
        self,
        registry: Optional[EcosystemRegistry] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.registry = registry or create_default_registry()
        self.max_workers = max_workers

    def _resolve(self, repo_path: Path) -> tuple[EcosystemType, Path, EcosystemAdapter]:
        ecosystem = self.registry.detect_from_directory(repo_path)
        dep_file = self.registry.get_dependency_file(repo_path, ecosystem)
        adapter = self.registry.get_adapter(ecosystem)
        if adapter is None:
            raise UnsupportedEcosystem(ecosystem)
        return ecosystem, dep_file, adapter

    def analyze(self, query: DependencyQuery) -> DependencyAnalysis:
        """Locate the dependency, then optionally add git and usage data.

        Git failures never abort the analysis; they leave ``git_info`` empty.
        """
        _, dep_file, adapter = self._resolve(query.repo_path)

        dependency = adapter.parser.find_dependency(dep_file, query.dependency_name)
        if dependency is None:
            raise DependencyNotFound(query.dependency_name)

        git_info: Optional[GitInfo] = None
        if query.include_git_history:
            git_info = self._introduction(query.repo_path, dep_file, query.dependency_name)

        if query.scan_usage:
            # fresh registry: scanners never share state with this request's parsers
            scanner = UsageScanner(create_default_registry(), max_workers=self.max_workers)
            usage_info = scanner.scan_usage(query.repo_path, dependency)
        else:
            usage_info = UsageInfo()

        return DependencyAnalysis(
            dependency=dependency,
            git_info=git_info,
            usage_info=usage_info,
        )

    def _introduction(self, repo_path: Path, dep_file: Path, name: str) -> Optional[GitInfo]:
        try:
            return GitAnalyzer(repo_path).find_dependency_introduction(dep_file, name)
        except (DependencyBlameError, git.exc.GitError) as e:
            logger.debug("No git information for %s: %s", name, e)
            return None

    def list_all_dependencies(self, repo_path: Union[str, Path]) -> list[Dependency]:
        _, dep_file, adapter = self._resolve(Path(repo_path))
        return adapter.parser.parse_dependencies(dep_file)

    def dependency_history(self, repo_path: Union[str, Path]) -> list[GitInfo]:
        """Every first-parent commit that touched the manifest, newest first.

        Unlike :meth:`analyze`, git errors propagate: history is the whole
        answer here.
        """
        repo_path = Path(repo_path)
        _, dep_file, _ = self._resolve(repo_path)
        return GitAnalyzer(repo_path).get_dependency_history(dep_file)
