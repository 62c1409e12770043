"""Dependency Blame — find out why a dependency exists in a project.

Combines manifest parsing, git history and an import scan of the source
tree to report when a dependency was added, by whom, and where it is used.
"""

__version__ = "0.1.0"
