"""Node.js / npm support."""

import json
import re
from pathlib import Path

from dependency_blame.ecosystems.base import (
    DependencyParser,
    EcosystemAdapter,
    ImportScanner,
    findall_in_order,
    read_manifest,
)
from dependency_blame.errors import ParseError
from dependency_blame.models import Dependency, DependencyType, EcosystemType

_SECTIONS = (
    ("dependencies", DependencyType.Direct),
    ("devDependencies", DependencyType.Dev),
    ("peerDependencies", DependencyType.Peer),
    ("optionalDependencies", DependencyType.Optional),
)

_REQUIRE_RE = re.compile(r"""require\s*\(\s*['"]([^'"]+)['"]\s*\)""")
_IMPORT_FROM_RE = re.compile(r"""^\s*import\s+.*?from\s+['"]([^'"]+)['"]""", re.MULTILINE)
_DYNAMIC_IMPORT_RE = re.compile(r"""import\s*\(\s*['"]([^'"]+)['"]\s*\)""")


class NodeParser(DependencyParser):
    """Parses ``package.json``."""

    ecosystem_type = EcosystemType.Node

    def supported_files(self) -> list[str]:
        return ["package.json"]

    def parse_dependencies(self, file_path: Path) -> list[Dependency]:
        try:
            package = json.loads(read_manifest(file_path))
        except json.JSONDecodeError as e:
            raise ParseError(file_path, str(e)) from e
        if not isinstance(package, dict):
            raise ParseError(file_path, "top-level value is not a JSON object")

        deps: list[Dependency] = []
        for section, dep_type in _SECTIONS:
            entries = package.get(section)
            if not isinstance(entries, dict):
                continue
            for name, value in entries.items():
                deps.append(
                    Dependency(
                        name=name,
                        version=value if isinstance(value, str) else "*",
                        ecosystem=EcosystemType.Node,
                        dependency_type=dep_type,
                    )
                )
        return deps


class NodeScanner(ImportScanner):
    """Finds ``require()``, ``import ... from`` and dynamic ``import()``."""

    ecosystem_type = EcosystemType.Node

    def file_extensions(self) -> list[str]:
        return ["js", "ts", "jsx", "tsx", "mjs", "cjs"]

    def extract_imports(self, content: str) -> list[str]:
        return findall_in_order(content, _REQUIRE_RE, _IMPORT_FROM_RE, _DYNAMIC_IMPORT_RE)

    def extract_package_name(self, import_path: str) -> str:
        # relative or absolute file import, not a package
        if import_path.startswith((".", "/")):
            return import_path
        parts = import_path.split("/")
        if import_path.startswith("@") and len(parts) >= 2:
            return f"{parts[0]}/{parts[1]}"
        return parts[0]

    def normalize_package_name(self, name: str) -> str:
        return self.extract_package_name(name).strip().lower()


class NodeAdapter(EcosystemAdapter):
    def __init__(self) -> None:
        super().__init__(NodeParser(), NodeScanner())
