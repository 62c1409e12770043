"""Rust / Cargo support."""

import re
from pathlib import Path

from dependency_blame.ecosystems.base import (
    DependencyParser,
    EcosystemAdapter,
    ImportScanner,
    findall_in_order,
    load_toml,
    table_version,
)
from dependency_blame.models import Dependency, DependencyType, EcosystemType

_SECTIONS = (
    ("dependencies", DependencyType.Direct),
    ("dev-dependencies", DependencyType.Dev),
    ("build-dependencies", DependencyType.Build),
)

_USE_RE = re.compile(r"^\s*use\s+([a-zA-Z0-9_]+)", re.MULTILINE)
_EXTERN_CRATE_RE = re.compile(r"^\s*extern\s+crate\s+([a-zA-Z0-9_]+)", re.MULTILINE)


class RustParser(DependencyParser):
    """Parses ``Cargo.toml``."""

    ecosystem_type = EcosystemType.Rust

    def supported_files(self) -> list[str]:
        return ["Cargo.toml"]

    def parse_dependencies(self, file_path: Path) -> list[Dependency]:
        manifest = load_toml(file_path)
        deps: list[Dependency] = []
        for section, dep_type in _SECTIONS:
            table = manifest.get(section)
            if not isinstance(table, dict):
                continue
            for name, value in table.items():
                deps.append(
                    Dependency(
                        name=name,
                        version=table_version(value),
                        ecosystem=EcosystemType.Rust,
                        dependency_type=dep_type,
                    )
                )
        return deps


class RustScanner(ImportScanner):
    """Finds ``use`` and ``extern crate`` statements."""

    ecosystem_type = EcosystemType.Rust

    def file_extensions(self) -> list[str]:
        return ["rs"]

    def extract_imports(self, content: str) -> list[str]:
        return findall_in_order(content, _USE_RE, _EXTERN_CRATE_RE)

    def extract_package_name(self, import_path: str) -> str:
        return import_path.split("::", 1)[0]

    def normalize_package_name(self, name: str) -> str:
        # crates.io names use hyphens, in-source identifiers use underscores
        return name.strip().lower().replace("-", "_")


class RustAdapter(EcosystemAdapter):
    def __init__(self) -> None:
        super().__init__(RustParser(), RustScanner())
