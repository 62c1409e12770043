"""Per-ecosystem manifest parsers and import scanners."""

from dependency_blame.ecosystems.base import DependencyParser, EcosystemAdapter, ImportScanner
from dependency_blame.ecosystems.registry import EcosystemRegistry, create_default_registry

__all__ = [
    "DependencyParser",
    "EcosystemAdapter",
    "EcosystemRegistry",
    "ImportScanner",
    "create_default_registry",
]
