"""CLI entry point for dependency-blame."""

import logging
import os
from enum import Enum
from pathlib import Path

import typer

from dependency_blame.errors import DependencyBlameError
from dependency_blame.models import DependencyQuery
from dependency_blame.orchestrator import DependencyOrchestrator
from dependency_blame.presentation import (
    render_analysis,
    render_dependency_list,
    render_history,
    to_json,
)

LOG_LEVEL_ENV = "DEPENDENCY_BLAME_LOG_LEVEL"

app = typer.Typer(
    name="dependency-blame",
    help="Analyze why dependencies exist in your project.",
    no_args_is_help=True,
    add_completion=False,
)


class OutputFormat(str, Enum):
    text = "text"
    json = "json"


RepoOption = typer.Option(Path("."), "--repo", "-r", help="Path to the repository.")
FormatOption = typer.Option(OutputFormat.text, "--format", "-f", help="Output format.")


def configure_logging(verbose: bool = False) -> None:
    """Log to stderr; ``--verbose`` wins over the environment."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper()
        level = logging.getLevelNamesMapping().get(name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging(verbose)


@app.command()
def analyze(
    dependency: str = typer.Argument(..., help="Name of the dependency to analyze."),
    repo: Path = RepoOption,
    output_format: OutputFormat = FormatOption,
    no_git: bool = typer.Option(False, "--no-git", help="Skip git history analysis."),
    no_scan: bool = typer.Option(False, "--no-scan", help="Skip usage scanning."),
) -> None:
    """Analyze a specific dependency."""
    query = DependencyQuery(
        dependency_name=dependency,
        repo_path=repo,
        include_git_history=not no_git,
        scan_usage=not no_scan,
    )
    try:
        analysis = DependencyOrchestrator().analyze(query)
    except DependencyBlameError as e:
        _fail(e)
        return

    if output_format is OutputFormat.json:
        typer.echo(to_json(analysis))
    else:
        typer.echo(render_analysis(analysis))


@app.command("list")
def list_dependencies(
    repo: Path = RepoOption,
    output_format: OutputFormat = FormatOption,
) -> None:
    """List all dependencies in the project."""
    try:
        dependencies = DependencyOrchestrator().list_all_dependencies(repo)
    except DependencyBlameError as e:
        _fail(e)
        return

    if output_format is OutputFormat.json:
        typer.echo(to_json(dependencies))
    else:
        typer.echo(render_dependency_list(dependencies))


@app.command()
def history(
    repo: Path = RepoOption,
    output_format: OutputFormat = FormatOption,
) -> None:
    """Show every commit that modified the dependency file."""
    try:
        commits = DependencyOrchestrator().dependency_history(repo)
    except DependencyBlameError as e:
        _fail(e)
        return

    if output_format is OutputFormat.json:
        typer.echo(to_json(commits))
    else:
        typer.echo(render_history(commits))


@app.command()
def tui(repo: Path = RepoOption) -> None:
    """Interactive mode."""
    from dependency_blame.app import DependencyBlameApp

    DependencyBlameApp(repo_path=repo).run()


def main() -> None:
    """Load ``.env`` and run the CLI."""
    from dotenv import load_dotenv

    load_dotenv()  # e.g. DEPENDENCY_BLAME_LOG_LEVEL, DEPENDENCY_BLAME_MAX_WORKERS

    app()


if __name__ == "__main__":
    main()
