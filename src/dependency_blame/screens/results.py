"""Results screen — git introduction and import locations for one dependency."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label, Static

from dependency_blame.models import DependencyAnalysis


class ResultsScreen(Screen):
    """Analysis of a single dependency."""

    CSS = """
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    .commit-message {
        border: round $primary-lighten-2;
        padding: 0 1;
        height: auto;
    }
    #usage-table {
        height: auto;
        max-height: 25;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("b", "go_back", "Back"),
    ]

    def __init__(self, analysis: DependencyAnalysis, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.analysis = analysis

    def compose(self) -> ComposeResult:
        dep = self.analysis.dependency
        yield Header(show_clock=True)
        yield Static(
            f"  📦  {dep.name} {dep.version}  ·  "
            f"{dep.dependency_type.display_name}  ·  {dep.ecosystem.display_name}  ",
            id="results-header",
            markup=False,
        )
        with VerticalScroll():
            yield from self._compose_git()
            yield from self._compose_usage()
        yield Footer()

    # ── Git history ────────────────────────────────────────────────────────

    def _compose_git(self) -> ComposeResult:
        yield Static("INTRODUCED IN", classes="section-title")
        info = self.analysis.git_info
        if info is None:
            yield Label("Not available (not a git repository or dependency history not found)")
            return
        yield Label(f"Commit: {info.short_hash}", markup=False)
        yield Label(f"Author: {info.author}", markup=False)
        yield Label(f"Date:   {info.date:%Y-%m-%d %H:%M:%S} UTC")
        yield Static(info.message, classes="commit-message", markup=False)

    # ── Usage ─────────────────────────────────────────────────────────────

    def _compose_usage(self) -> ComposeResult:
        usage = self.analysis.usage_info
        yield Static("USAGE", classes="section-title")
        if not usage.is_used:
            yield Label(
                "UNUSED — no imports found. It may be safe to remove, a transitive "
                "dependency, or used in a way import scanning cannot see."
            )
            return
        yield Label(f"USED — {usage.usage_count} imports found")
        table = DataTable(id="usage-table")
        table.add_columns("File", "Line", "Code")
        for loc in sorted(usage.import_locations, key=lambda l: (str(l.file_path), l.line_number)):
            table.add_row(Text(str(loc.file_path)), str(loc.line_number), Text(loc.line_content))
        yield table

    def action_go_back(self) -> None:
        self.app.pop_screen()
