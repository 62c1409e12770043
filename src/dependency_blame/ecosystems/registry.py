"""Registry of ecosystem adapters and manifest discovery."""

from pathlib import Path
from typing import Optional

from dependency_blame.ecosystems.base import EcosystemAdapter
from dependency_blame.ecosystems.go import GoAdapter
from dependency_blame.ecosystems.node import NodeAdapter
from dependency_blame.ecosystems.python import PythonAdapter
from dependency_blame.ecosystems.rust import RustAdapter
from dependency_blame.errors import DependencyFileNotFound, EcosystemDetectionFailed
from dependency_blame.models import EcosystemType

# Priority order for polyglot repos: the first manifest found wins.
DETECTION_ORDER: list[tuple[EcosystemType, tuple[str, ...]]] = [
    (EcosystemType.Rust, ("Cargo.toml",)),
    (EcosystemType.Node, ("package.json",)),
    (EcosystemType.Python, ("requirements.txt", "pyproject.toml")),
    (EcosystemType.Go, ("go.mod",)),
]

MANIFEST_FILES: dict[EcosystemType, str] = {
    EcosystemType.Rust: "Cargo.toml",
    EcosystemType.Node: "package.json",
    EcosystemType.Python: "requirements.txt",
    EcosystemType.Go: "go.mod",
}


class EcosystemRegistry:
    """Maps an ecosystem tag to its adapter.

    Build one per operation with :func:`create_default_registry`; it is not
    meant to be shared or mutated once in use.
    """

    def __init__(self) -> None:
        self._adapters: dict[EcosystemType, EcosystemAdapter] = {}

    def register(self, adapter: EcosystemAdapter) -> None:
        self._adapters[adapter.ecosystem_type] = adapter

    def get_adapter(self, ecosystem: EcosystemType) -> Optional[EcosystemAdapter]:
        return self._adapters.get(ecosystem)

    @property
    def ecosystems(self) -> list[EcosystemType]:
        return list(self._adapters)

    def detect_ecosystem(self, file_path: Path) -> Optional[EcosystemType]:
        """Ecosystem whose parser accepts this manifest file name."""
        for ecosystem, adapter in self._adapters.items():
            if adapter.parser.can_parse(file_path):
                return ecosystem
        return None

    def detect_from_directory(self, dir_path: Path) -> EcosystemType:
        dir_path = Path(dir_path)
        for ecosystem, names in DETECTION_ORDER:
            if any((dir_path / name).exists() for name in names):
                return ecosystem
        raise EcosystemDetectionFailed(dir_path)

    def get_dependency_file(self, dir_path: Path, ecosystem: EcosystemType) -> Path:
        dir_path = Path(dir_path)
        if ecosystem is EcosystemType.Python:
            pyproject = dir_path / "pyproject.toml"
            if pyproject.exists():
                return pyproject

        file_name = MANIFEST_FILES[ecosystem]
        file_path = dir_path / file_name
        if not file_path.exists():
            raise DependencyFileNotFound(file_name)
        return file_path


def create_default_registry() -> EcosystemRegistry:
    """A fresh registry with every built-in ecosystem."""
    registry = EcosystemRegistry()
    registry.register(RustAdapter())
    registry.register(NodeAdapter())
    registry.register(PythonAdapter())
    registry.register(GoAdapter())
    return registry
