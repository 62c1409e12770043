"""Python support: requirements.txt, poetry and PEP 621 pyproject.toml."""

import re
from pathlib import Path

from dependency_blame.ecosystems.base import (
    DependencyParser,
    EcosystemAdapter,
    ImportScanner,
    findall_in_order,
    load_toml,
    read_manifest,
    table_version,
)
from dependency_blame.errors import ParseError
from dependency_blame.models import Dependency, DependencyType, EcosystemType

# Checked in this order; the first operator present wins, even if a
# later one occurs earlier in the line.
_VERSION_OPERATORS = ("==", ">=", "<=", "~=", ">", "<", "!=")

_IMPORT_RE = re.compile(r"^\s*import\s+([a-zA-Z0-9_]+)", re.MULTILINE)
_FROM_IMPORT_RE = re.compile(r"^\s*from\s+([a-zA-Z0-9_]+)[\w.]*\s+import", re.MULTILINE)


def parse_requirement_line(line: str) -> tuple[str, str]:
    """Split a requirement specifier into ``(name, version)``.

    >>> parse_requirement_line("requests>=2.25.0")
    ('requests', '>=2.25.0')
    >>> parse_requirement_line("uvicorn[standard]")
    ('uvicorn', '*')
    """
    for op in _VERSION_OPERATORS:
        pos = line.find(op)
        if pos != -1:
            return line[:pos].strip(), line[pos:].strip()
    bracket = line.find("[")
    if bracket != -1:
        return line[:bracket].strip(), "*"
    return line.strip(), "*"


class PythonParser(DependencyParser):
    """Parses ``requirements.txt`` and ``pyproject.toml``."""

    ecosystem_type = EcosystemType.Python

    def supported_files(self) -> list[str]:
        return ["requirements.txt", "pyproject.toml"]

    def parse_dependencies(self, file_path: Path) -> list[Dependency]:
        name = Path(file_path).name
        if name == "requirements.txt":
            return self.parse_requirements_txt(file_path)
        if name == "pyproject.toml":
            return self.parse_pyproject_toml(file_path)
        raise ParseError(file_path, "Unsupported file type")

    def parse_requirements_txt(self, file_path: Path) -> list[Dependency]:
        deps: list[Dependency] = []
        for line in read_manifest(file_path).splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            name, version = parse_requirement_line(line)
            deps.append(self._dependency(name, version, DependencyType.Direct))
        return deps

    def parse_pyproject_toml(self, file_path: Path) -> list[Dependency]:
        pyproject = load_toml(file_path)
        deps: list[Dependency] = []

        tool = pyproject.get("tool")
        poetry = tool.get("poetry") if isinstance(tool, dict) else None
        if not isinstance(poetry, dict):
            poetry = {}

        poetry_deps = poetry.get("dependencies")
        if isinstance(poetry_deps, dict):
            for name, value in poetry_deps.items():
                if name == "python":
                    continue
                deps.append(self._dependency(name, table_version(value), DependencyType.Direct))

        poetry_dev = poetry.get("dev-dependencies")
        if isinstance(poetry_dev, dict):
            for name, value in poetry_dev.items():
                version = value if isinstance(value, str) else "*"
                deps.append(self._dependency(name, version, DependencyType.Dev))

        project = pyproject.get("project", {})
        project_deps = project.get("dependencies") if isinstance(project, dict) else None
        if isinstance(project_deps, list):
            for spec in project_deps:
                if isinstance(spec, str):
                    name, version = parse_requirement_line(spec)
                    deps.append(self._dependency(name, version, DependencyType.Direct))

        return deps

    @staticmethod
    def _dependency(name: str, version: str, dep_type: DependencyType) -> Dependency:
        return Dependency(
            name=name,
            version=version,
            ecosystem=EcosystemType.Python,
            dependency_type=dep_type,
        )


class PythonScanner(ImportScanner):
    """Finds ``import x`` and ``from x import y``."""

    ecosystem_type = EcosystemType.Python

    def file_extensions(self) -> list[str]:
        return ["py", "pyw"]

    def extract_imports(self, content: str) -> list[str]:
        return findall_in_order(content, _IMPORT_RE, _FROM_IMPORT_RE)

    def extract_package_name(self, import_path: str) -> str:
        return import_path.split(".", 1)[0]

    def normalize_package_name(self, name: str) -> str:
        # PyPI names may use hyphens where the import name has underscores
        return name.strip().lower().replace("-", "_")


class PythonAdapter(EcosystemAdapter):
    def __init__(self) -> None:
        super().__init__(PythonParser(), PythonScanner())
