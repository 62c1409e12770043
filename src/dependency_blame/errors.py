"""Exceptions raised by dependency-blame."""

from pathlib import Path
from typing import Union


class DependencyBlameError(Exception):
    """Base class for every error surfaced to the user."""


class GitRepoNotFound(DependencyBlameError):
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"Git repository not found at path: {self.path}")


class DependencyFileNotFound(DependencyBlameError):
    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Dependency file not found: {file_name}")


class ParseError(DependencyBlameError):
    """A manifest could not be read or decoded."""

    def __init__(self, file: Union[str, Path], reason: str) -> None:
        self.file = str(file)
        self.reason = reason
        super().__init__(f"Failed to parse dependency file '{self.file}': {reason}")


class DependencyNotFound(DependencyBlameError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Dependency '{name}' not found in project")


class UnsupportedEcosystem(DependencyBlameError):
    def __init__(self, ecosystem: object = None) -> None:
        self.ecosystem = ecosystem
        msg = "Unsupported ecosystem"
        if ecosystem is not None:
            msg += f": {getattr(ecosystem, 'value', ecosystem)}"
        super().__init__(msg)


class EcosystemDetectionFailed(DependencyBlameError):
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"Could not detect ecosystem from path: {self.path}")


class GitOperationError(DependencyBlameError):
    """Wraps a GitPython failure while walking history."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Git operation failed: {reason}")
