"""Home screen — the project's declared dependencies."""

from pathlib import Path

from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label, Static

from dependency_blame.errors import DependencyBlameError
from dependency_blame.orchestrator import DependencyOrchestrator


class HomeScreen(Screen):
    """Lists every dependency; Enter on a row analyzes it."""

    CSS = """
    #home-container {
        padding: 1 2;
    }
    #repo-label {
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }
    #deps-table {
        height: 1fr;
    }
    #error-label {
        color: $error;
        margin-top: 1;
    }
    """

    def __init__(self, repo_path: Path, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.repo_path = repo_path

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="home-container"):
            yield Static(f"📦  {self.repo_path.resolve()}", id="repo-label", markup=False)
            yield DataTable(id="deps-table", cursor_type="row")
            yield Label("", id="error-label", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#deps-table", DataTable)
        table.add_columns("Name", "Version", "Type", "Ecosystem")
        try:
            dependencies = DependencyOrchestrator().list_all_dependencies(self.repo_path)
        except DependencyBlameError as e:
            self.query_one("#error-label", Label).update(f"⚠  {e}")
            return

        for dep in dependencies:
            # the same name can appear in two sections; keep the first row
            if dep.name in table.rows:
                continue
            table.add_row(
                Text(dep.name),
                Text(dep.version),
                dep.dependency_type.display_name,
                dep.ecosystem.display_name,
                key=dep.name,
            )
        if not dependencies:
            self.query_one("#error-label", Label).update("No dependencies declared.")
        table.focus()

    @on(DataTable.RowSelected, "#deps-table")
    def analyze_selected(self, event: DataTable.RowSelected) -> None:
        name = event.row_key.value
        if name:
            self.app.run_analysis(name)  # type: ignore[attr-defined]
