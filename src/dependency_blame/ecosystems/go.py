"""Go modules support."""

import re
from collections.abc import Iterator
from pathlib import Path

from dependency_blame.ecosystems.base import (
    DependencyParser,
    EcosystemAdapter,
    ImportScanner,
    read_manifest,
    source_lines,
)
from dependency_blame.models import Dependency, DependencyType, EcosystemType

_REQUIRE_RE = re.compile(r"^require\s+(\S+)\s+(\S+)")
_SINGLE_IMPORT_RE = re.compile(r'^import\s+(?:[\w.]+\s+)?"([^"]+)"')
_BLOCK_IMPORT_RE = re.compile(r'^(?:[\w.]+\s+)?"([^"]+)"')


class GoParser(DependencyParser):
    """Parses ``go.mod`` ``require`` directives, single-line and block form."""

    ecosystem_type = EcosystemType.Go

    def supported_files(self) -> list[str]:
        return ["go.mod"]

    def parse_dependencies(self, file_path: Path) -> list[Dependency]:
        deps: list[Dependency] = []
        in_require_block = False

        for line in read_manifest(file_path).splitlines():
            trimmed = line.strip()
            if not trimmed or trimmed.startswith("//"):
                continue

            if in_require_block:
                if ")" in trimmed:
                    in_require_block = False
                    continue
                parts = trimmed.split()
                if len(parts) >= 2:
                    deps.append(self._dependency(parts[0], parts[1]))
                continue

            if trimmed.startswith("require") and "(" in trimmed:
                in_require_block = True
                continue

            match = _REQUIRE_RE.match(trimmed)
            if match:
                deps.append(self._dependency(match.group(1), match.group(2)))

        return deps

    @staticmethod
    def _dependency(module: str, version: str) -> Dependency:
        return Dependency(
            name=module,
            version=version,
            ecosystem=EcosystemType.Go,
            dependency_type=DependencyType.Direct,
        )


class GoScanner(ImportScanner):
    """Finds ``import "x"`` and ``import ( ... )`` blocks.

    Block entries only make sense with the surrounding ``import (`` line,
    so line matching tracks the block state instead of testing each line
    in isolation.
    """

    ecosystem_type = EcosystemType.Go

    def file_extensions(self) -> list[str]:
        return ["go"]

    def _iter_line_imports(self, content: str) -> Iterator[tuple[int, str, str]]:
        """Yield ``(line_number, line, import_path)`` for every import."""
        in_import_block = False
        for number, line in enumerate(source_lines(content), start=1):
            trimmed = line.strip()

            match = _SINGLE_IMPORT_RE.match(trimmed)
            if match:
                yield number, line, match.group(1)
                continue

            if trimmed.startswith("import") and "(" in trimmed:
                in_import_block = True
                continue

            if in_import_block:
                if ")" in trimmed:
                    in_import_block = False
                    continue
                match = _BLOCK_IMPORT_RE.match(trimmed)
                if match:
                    yield number, line, match.group(1)

    def extract_imports(self, content: str) -> list[str]:
        return [path for _, _, path in self._iter_line_imports(content)]

    def matching_lines(self, content: str, dependency_name: str) -> list[tuple[int, str]]:
        return [
            (number, line)
            for number, line, path in self._iter_line_imports(content)
            if self.names_match(path, dependency_name)
        ]

    def extract_package_name(self, import_path: str) -> str:
        # standard library: "fmt", "net/http"
        if "." not in import_path:
            return import_path
        parts = import_path.split("/")
        if len(parts) >= 3:
            last = parts[-1]
            if last.startswith("v") and len(last) <= 3:
                # major-version suffix: github.com/user/repo/v2
                return "/".join(parts[:4])
            return "/".join(parts[:3])
        return import_path


class GoAdapter(EcosystemAdapter):
    def __init__(self) -> None:
        super().__init__(GoParser(), GoScanner())
