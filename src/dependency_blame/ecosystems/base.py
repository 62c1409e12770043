"""Contracts shared by every ecosystem: manifest parser, import scanner, adapter."""

import re
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from dependency_blame.errors import ParseError
from dependency_blame.models import Dependency, EcosystemType


# ── Manifest parsing ──────────────────────────────────────────────────────

class DependencyParser(ABC):
    """Reads one kind of manifest into normalized Dependency records."""

    ecosystem_type: EcosystemType

    @abstractmethod
    def supported_files(self) -> list[str]:
        """Manifest file names this parser understands."""

    @abstractmethod
    def parse_dependencies(self, file_path: Path) -> list[Dependency]:
        """Parse every declared dependency, in file order.

        Raises:
            ParseError: the file is unreadable or malformed.
        """

    def can_parse(self, file_path: Path) -> bool:
        return Path(file_path).name in self.supported_files()

    def find_dependency(self, file_path: Path, name: str) -> Optional[Dependency]:
        """Return the first declared dependency named exactly ``name``."""
        for dep in self.parse_dependencies(file_path):
            if dep.name == name:
                return dep
        return None


def read_manifest(file_path: Path) -> str:
    """Read a manifest as text, turning IO failures into ParseError."""
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(file_path, str(e)) from e


def load_toml(file_path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(read_manifest(file_path))
    except tomllib.TOMLDecodeError as e:
        raise ParseError(file_path, str(e)) from e


def table_version(value: Any) -> str:
    """Version of a TOML dependency entry: ``"1.0"`` or ``{ version = "1.0" }``."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        version = value.get("version")
        if isinstance(version, str):
            return version
    return "*"


# ── Import scanning ───────────────────────────────────────────────────────

def findall_in_order(content: str, *patterns: re.Pattern[str]) -> list[str]:
    """First capture group of every match of every pattern, in text order."""
    found: list[tuple[int, str]] = []
    for pattern in patterns:
        for match in pattern.finditer(content):
            found.append((match.start(), match.group(1)))
    found.sort(key=lambda item: item[0])
    return [name for _, name in found]


def source_lines(content: str) -> list[str]:
    """Lines split on ``\\n`` only, trailing ``\\r`` removed.

    ``str.splitlines`` also breaks on form feeds and Unicode separators,
    which would shift every later line number.
    """
    return [line.removesuffix("\r") for line in content.split("\n")]


class ImportScanner(ABC):
    """Finds import statements in source text and matches them to a dependency."""

    ecosystem_type: EcosystemType

    @abstractmethod
    def file_extensions(self) -> list[str]:
        """Source extensions to scan, without the leading dot."""

    @abstractmethod
    def extract_imports(self, content: str) -> list[str]:
        """Raw import targets found in ``content``."""

    def extract_package_name(self, import_path: str) -> str:
        """Reduce an import target to its top-level package identity."""
        return import_path

    def normalize_package_name(self, name: str) -> str:
        return name.strip().lower()

    def names_match(self, first: str, second: str) -> bool:
        """Bidirectional substring match on normalized names.

        Tolerates scoped and sub-path imports, at the cost of false
        positives on very short names (``io`` matches ``ioutil``).
        """
        a = self.normalize_package_name(first)
        b = self.normalize_package_name(second)
        return a in b or b in a

    def is_dependency_imported(self, content: str, dependency_name: str) -> bool:
        return any(
            self.names_match(imp, dependency_name)
            for imp in self.extract_imports(content)
        )

    def matching_lines(self, content: str, dependency_name: str) -> list[tuple[int, str]]:
        """1-indexed ``(line_number, line)`` pairs that import the dependency."""
        return [
            (number, line)
            for number, line in enumerate(source_lines(content), start=1)
            if self.is_dependency_imported(line, dependency_name)
        ]


# ── Adapter ───────────────────────────────────────────────────────────────

class EcosystemAdapter:
    """Bundles the parser and scanner of one ecosystem."""

    def __init__(self, parser: DependencyParser, scanner: ImportScanner) -> None:
        if parser.ecosystem_type is not scanner.ecosystem_type:
            raise ValueError(
                f"parser is for {parser.ecosystem_type.value}, "
                f"scanner is for {scanner.ecosystem_type.value}"
            )
        self._parser = parser
        self._scanner = scanner

    @property
    def parser(self) -> DependencyParser:
        return self._parser

    @property
    def scanner(self) -> ImportScanner:
        return self._scanner

    @property
    def ecosystem_type(self) -> EcosystemType:
        return self._parser.ecosystem_type
