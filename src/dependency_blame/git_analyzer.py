"""Git history analysis for manifest files (GitPython)."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import git  # GitPython

from dependency_blame.errors import GitOperationError, GitRepoNotFound
from dependency_blame.models import GitInfo

logger = logging.getLogger(__name__)


class GitAnalyzer:
    """Answers "when did this manifest entry appear?" for one repository."""

    def __init__(self, repo_path: Union[str, Path]) -> None:
        try:
            self.repo = git.Repo(str(repo_path), search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise GitRepoNotFound(repo_path) from e
        if self.repo.bare or not self.repo.working_tree_dir:
            raise GitRepoNotFound(repo_path)
        self.workdir = Path(self.repo.working_tree_dir).resolve()

    # ── Path helpers ──────────────────────────────────────────────────────

    def relative_path(self, file_path: Union[str, Path]) -> str:
        """Repository-relative POSIX path of a file in the work tree."""
        path = Path(file_path)
        try:
            return path.resolve().relative_to(self.workdir).as_posix()
        except ValueError:
            return path.as_posix()

    @staticmethod
    def _blob(commit: git.Commit, rel_path: str) -> Optional[git.Blob]:
        try:
            obj = commit.tree / rel_path
        except KeyError:
            return None
        return obj if isinstance(obj, git.Blob) else None

    @staticmethod
    def _blob_text(blob: git.Blob) -> str:
        return blob.data_stream.read().decode("utf-8", errors="replace")

    # ── Introduction search ───────────────────────────────────────────────

    def find_dependency_introduction(
        self, dependency_file: Union[str, Path], dependency_name: str
    ) -> Optional[GitInfo]:
        """First commit, oldest first, whose manifest text contains the name.

        The check is a plain substring test on the raw file, not a parse.
        Returns None if no historical version of the manifest mentions it.
        """
        rel_path = self.relative_path(dependency_file)
        last_without: Optional[git.Commit] = None
        first_with: Optional[git.Commit] = None

        try:
            for commit in self.repo.iter_commits("HEAD", date_order=True, reverse=True):
                blob = self._blob(commit, rel_path)
                if blob is not None and dependency_name in self._blob_text(blob):
                    first_with = commit
                    # present from the first commit examined, or right
                    # after a commit without it: either way we are done
                    break
                last_without = commit

            if first_with is None:
                return None
            logger.debug(
                "%s introduced in %s (previous commit without it: %s)",
                dependency_name,
                first_with.hexsha[:8],
                last_without.hexsha[:8] if last_without else "none",
            )
            return self.extract_commit_info(first_with, rel_path)
        except (git.exc.GitError, ValueError) as e:
            raise GitOperationError(str(e)) from e

    # ── Full audit trail ──────────────────────────────────────────────────

    def get_dependency_history(self, dependency_file: Union[str, Path]) -> list[GitInfo]:
        """Every first-parent commit that touched the manifest, newest first."""
        rel_path = self.relative_path(dependency_file)
        history: list[GitInfo] = []
        try:
            for commit in self.repo.iter_commits("HEAD", first_parent=True):
                if self.commit_modified_file(commit, rel_path):
                    history.append(self.extract_commit_info(commit, rel_path))
        except (git.exc.GitError, ValueError) as e:
            raise GitOperationError(str(e)) from e
        return history

    def commit_modified_file(self, commit: git.Commit, rel_path: str) -> bool:
        """True if the commit changed ``rel_path`` relative to its first parent.

        A root commit counts as modifying every file it contains.
        """
        blob = self._blob(commit, rel_path)
        if not commit.parents:
            return blob is not None
        parent_blob = self._blob(commit.parents[0], rel_path)
        if blob is None or parent_blob is None:
            return (blob is None) != (parent_blob is None)
        return (blob.binsha, blob.mode) != (parent_blob.binsha, parent_blob.mode)

    # ── Commit metadata ───────────────────────────────────────────────────

    @staticmethod
    def extract_commit_info(commit: git.Commit, rel_path: str) -> GitInfo:
        author = commit.author
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        return GitInfo(
            commit_hash=commit.hexsha,
            author=f"{author.name or 'Unknown'} <{author.email or 'unknown@unknown.com'}>",
            date=datetime.fromtimestamp(commit.committed_date, tz=timezone.utc),
            message=message.strip() or "No commit message",
            file_path=Path(rel_path),
            line_number=None,
        )
