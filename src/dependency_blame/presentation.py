"""Text and JSON rendering of analysis results."""

import json
from collections.abc import Sequence
from typing import Union

from pydantic import BaseModel

from dependency_blame.models import Dependency, DependencyAnalysis, DependencyType, GitInfo

WIDTH = 60
MAX_LOCATIONS = 10


def _rule(char: str = "-") -> str:
    return char * WIDTH


def render_analysis(analysis: DependencyAnalysis) -> str:
    """Human-readable report for one analyzed dependency."""
    dep = analysis.dependency
    lines: list[str] = [
        "",
        _rule("="),
        f"Dependency Analysis: {dep.name} v{dep.version}",
        _rule("="),
        "",
        f"Type: {dep.dependency_type.display_name}",
        f"Ecosystem: {dep.ecosystem.display_name}",
        "",
        _rule(),
    ]

    info = analysis.git_info
    if info:
        lines += [
            "Git History:",
            _rule(),
            f"Added in: {info.short_hash}",
            f"Author: {info.author}",
            f"Date: {info.date:%Y-%m-%d %H:%M:%S} UTC",
            f"Message:\n{info.message.strip()}",
        ]
    else:
        lines += [
            "Git History: Not available (not a git repository or dependency history not found)",
            _rule(),
        ]

    usage = analysis.usage_info
    lines += ["", _rule(), "Usage Analysis:", _rule()]
    if usage.is_used:
        lines += [f"Status: USED ({usage.usage_count} imports found)", "", "Locations:"]
        for i, loc in enumerate(usage.import_locations[:MAX_LOCATIONS], start=1):
            lines.append(f"  {i}. {loc.file_path}:{loc.line_number}")
            lines.append(f"     {loc.line_content}")
        if usage.usage_count > MAX_LOCATIONS:
            lines += ["", f"  ... and {usage.usage_count - MAX_LOCATIONS} more locations"]
    else:
        lines += [
            "Status: UNUSED (no imports found)",
            "",
            "This dependency might be:",
            "  - Unused and safe to remove",
            "  - A transitive dependency",
            "  - Used in a way not detected by import scanning",
        ]

    lines += ["", _rule("="), ""]
    return "\n".join(lines)


def render_dependency_list(dependencies: Sequence[Dependency]) -> str:
    """Dependencies grouped as Direct, Development and everything else."""
    direct = [d for d in dependencies if d.dependency_type is DependencyType.Direct]
    dev = [d for d in dependencies if d.dependency_type is DependencyType.Dev]
    other = [
        d for d in dependencies
        if d.dependency_type not in (DependencyType.Direct, DependencyType.Dev)
    ]

    lines: list[str] = ["", _rule("="), f"Dependencies ({len(dependencies)} total)", _rule("="), ""]

    for title, group in (("Direct Dependencies", direct), ("Development Dependencies", dev)):
        if not group:
            continue
        lines += [f"{title} ({len(group)}):", _rule()]
        lines += [f"  {d.name} ({d.version})" for d in group]
        lines.append("")

    if other:
        lines += [f"Other Dependencies ({len(other)}):", _rule()]
        lines += [
            f"  {d.name} ({d.version}) - {d.dependency_type.display_name}" for d in other
        ]
        lines.append("")

    lines += [_rule("="), ""]
    return "\n".join(lines)


def render_history(history: Sequence[GitInfo]) -> str:
    """Manifest audit trail, newest commit first."""
    if not history:
        return "No commits touching the dependency file were found."
    lines: list[str] = [f"Dependency file history ({len(history)} commits):", _rule()]
    for info in history:
        subject = info.message.splitlines()[0] if info.message else ""
        lines.append(f"{info.short_hash}  {info.date:%Y-%m-%d}  {info.author}")
        lines.append(f"    {subject}")
    return "\n".join(lines)


def to_json(data: Union[BaseModel, Sequence[BaseModel]]) -> str:
    """Pretty JSON using the models' field names as the contract."""
    if isinstance(data, BaseModel):
        return data.model_dump_json(indent=2)
    return json.dumps([item.model_dump(mode="json") for item in data], indent=2)
