"""Codebase scan for import statements that reference a dependency."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Union

import git  # GitPython

from dependency_blame.ecosystems.base import ImportScanner
from dependency_blame.ecosystems.registry import EcosystemRegistry
from dependency_blame.errors import UnsupportedEcosystem
from dependency_blame.models import Dependency, ImportLocation, UsageInfo

logger = logging.getLogger(__name__)

MAX_WORKERS_ENV = "DEPENDENCY_BLAME_MAX_WORKERS"


def _workers_from_env() -> Optional[int]:
    raw = os.environ.get(MAX_WORKERS_ENV, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", MAX_WORKERS_ENV, raw)
        return None
    return value if value > 0 else None


class UsageScanner:
    """Walks a project tree and records every line that imports a dependency."""

    def __init__(self, registry: EcosystemRegistry, max_workers: Optional[int] = None) -> None:
        self.registry = registry
        self.max_workers = max_workers or _workers_from_env()

    # ── File discovery ────────────────────────────────────────────────────

    def collect_files(self, root: Union[str, Path], extensions: list[str]) -> list[Path]:
        """Non-ignored regular files under ``root`` with one of ``extensions``."""
        root = Path(root)
        candidates = _git_visible_files(root)
        if candidates is None:
            candidates = _walk_files(root)
        wanted = set(extensions)
        return sorted(
            p for p in candidates
            if p.suffix[1:] in wanted and _is_regular_file(p)
        )

    # ── Scanning ──────────────────────────────────────────────────────────

    def scan_usage(self, repo_path: Union[str, Path], dependency: Dependency) -> UsageInfo:
        adapter = self.registry.get_adapter(dependency.ecosystem)
        if adapter is None:
            raise UnsupportedEcosystem(dependency.ecosystem)
        scanner = adapter.scanner

        files = self.collect_files(repo_path, scanner.file_extensions())
        logger.debug("Scanning %d %s files for %s", len(files), dependency.ecosystem.value, dependency.name)

        locations: list[ImportLocation] = []
        if not files:
            return UsageInfo.with_locations(locations)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_path = {
                executor.submit(self.scan_file, path, dependency, scanner): path
                for path in files
            }
            for future in as_completed(future_to_path):
                try:
                    locations.extend(future.result())
                except (OSError, UnicodeDecodeError) as e:
                    logger.debug("Skipping unreadable file %s: %s", future_to_path[future], e)

        return UsageInfo.with_locations(locations)

    @staticmethod
    def scan_file(
        file_path: Path, dependency: Dependency, scanner: ImportScanner
    ) -> list[ImportLocation]:
        """Import locations in one file, in ascending line order."""
        content = file_path.read_text(encoding="utf-8")
        return [
            ImportLocation(
                file_path=file_path,
                line_number=number,
                line_content=line.strip(),
            )
            for number, line in scanner.matching_lines(content, dependency.name)
        ]


def _git_visible_files(root: Path) -> Optional[list[Path]]:
    """Files git does not ignore, or None when ``root`` is not in a work tree.

    Uses ``git ls-files`` so that ``.gitignore`` files at every level,
    ``.git/info/exclude`` and the global excludes file all apply.
    """
    try:
        repo = git.Repo(str(root), search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
        return None
    if repo.bare:
        return None
    try:
        output = git.Git(str(root)).ls_files("--cached", "--others", "--exclude-standard", "-z")
    except git.exc.GitCommandError as e:
        logger.debug("git ls-files failed in %s, walking the tree instead: %s", root, e)
        return None
    return [root / rel for rel in output.split("\0") if rel]


def _is_regular_file(path: Path) -> bool:
    """Regular, non-symlinked file; unreachable paths are skipped."""
    try:
        return path.is_file() and not path.is_symlink()
    except OSError as e:
        logger.debug("Skipping inaccessible path %s: %s", path, e)
        return False


def _walk_files(root: Path) -> list[Path]:
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d != ".git"]
        files.extend(Path(dirpath) / name for name in filenames)
    return files
