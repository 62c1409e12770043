"""Loading screen — shown while one dependency is analyzed."""

from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, LoadingIndicator, Static


class LoadingScreen(Screen):
    """Displayed while git history and the usage scan run."""

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #loading-container {
        width: 72;
        height: auto;
        padding: 2 4;
        border: round $primary;
        background: $surface;
    }
    #loading-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    #status-label {
        text-align: center;
        margin-top: 1;
    }
    #phase-label {
        text-align: center;
        color: $text-muted;
    }
    LoadingIndicator {
        height: 3;
    }
    """

    def __init__(self, dependency_name: str, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.dependency_name = dependency_name

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="loading-container"):
                yield Static(f"🔍  Analyzing {self.dependency_name} …", id="loading-title", markup=False)
                yield LoadingIndicator()
                yield Label("Reading git history and scanning imports …", id="status-label", markup=False)
                yield Label("", id="phase-label")
        yield Footer()

    def update_status(self, message: str) -> None:
        self.query_one("#status-label", Label).update(message)
        self.query_one(LoadingIndicator).display = False

    def set_phase(self, phase: str) -> None:
        self.query_one("#phase-label", Label).update(phase)

    def action_go_back(self) -> None:
        """Return to the dependency list."""
        self.app.pop_screen()
