"""Textual TUI for dependency-blame."""

from pathlib import Path

from textual import work
from textual.app import App

from dependency_blame.errors import DependencyBlameError
from dependency_blame.models import DependencyAnalysis, DependencyQuery
from dependency_blame.orchestrator import DependencyOrchestrator
from dependency_blame.screens.home import HomeScreen
from dependency_blame.screens.loading import LoadingScreen
from dependency_blame.screens.results import ResultsScreen


class DependencyBlameApp(App):
    """Browse a project's dependencies and analyze one at a time."""

    TITLE = "Dependency Blame"
    SUB_TITLE = "When · Who · Where"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, repo_path: Path = Path("."), **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.repo_path = Path(repo_path)

    def on_mount(self) -> None:
        self.push_screen(HomeScreen(self.repo_path))

    def run_analysis(self, dependency_name: str) -> None:
        """Kick off an analysis — called from HomeScreen."""
        loading = LoadingScreen(dependency_name)
        self.push_screen(loading)
        self._analyze(dependency_name, loading)

    @work(thread=True, exclusive=True)
    def _analyze(self, dependency_name: str, loading: LoadingScreen) -> None:
        query = DependencyQuery(dependency_name=dependency_name, repo_path=self.repo_path)
        try:
            analysis = DependencyOrchestrator().analyze(query)
        except DependencyBlameError as e:
            self.call_from_thread(loading.update_status, f"❌ {e}")
            self.call_from_thread(loading.set_phase, "Press  b  to go back.")
            return
        self.call_from_thread(self._show_results, analysis)

    def _show_results(self, analysis: DependencyAnalysis) -> None:
        """Replace loading screen with results."""
        if not isinstance(self.screen, LoadingScreen):
            return  # user went back while the analysis was running
        self.pop_screen()
        self.push_screen(ResultsScreen(analysis))
