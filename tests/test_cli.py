"""Tests for the CLI entry point."""

import json
import logging
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from dependency_blame.cli import LOG_LEVEL_ENV, app, configure_logging

runner = CliRunner()


@pytest.fixture
def python_repo(git_project):
    git_project.write("requirements.txt", "requests>=2.25.0\nflask\n")
    git_project.write("app.py", "import requests\n")
    git_project.commit("Add requirements", "requirements.txt", "app.py")
    return git_project


class TestAnalyzeCommand:
    def test_text_output(self, python_repo):
        result = runner.invoke(app, ["analyze", "requests", "--repo", str(python_repo.root)])
        assert result.exit_code == 0
        assert "Dependency Analysis: requests v>=2.25.0" in result.output
        assert "Message:\nAdd requirements" in result.output
        assert "Status: USED (1 imports found)" in result.output

    def test_json_output(self, python_repo):
        result = runner.invoke(
            app, ["analyze", "flask", "-r", str(python_repo.root), "--format", "json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["dependency"]["name"] == "flask"
        assert data["usage_info"]["usage_count"] == 0

    def test_no_git_no_scan(self, python_repo):
        result = runner.invoke(
            app,
            ["analyze", "requests", "-r", str(python_repo.root), "-f", "json", "--no-git", "--no-scan"],
        )
        data = json.loads(result.output)
        assert data["git_info"] is None
        assert data["usage_info"]["is_used"] is False

    def test_unknown_dependency(self, python_repo):
        result = runner.invoke(app, ["analyze", "django", "-r", str(python_repo.root)])
        assert result.exit_code == 1
        assert "Error: Dependency 'django' not found in project" in result.output

    def test_no_manifest(self, tmp_path):
        result = runner.invoke(app, ["analyze", "x", "-r", str(tmp_path)])
        assert result.exit_code == 1
        assert "Could not detect ecosystem" in result.output


class TestListCommand:
    def test_text_output(self, python_repo):
        result = runner.invoke(app, ["list", "--repo", str(python_repo.root)])
        assert result.exit_code == 0
        assert "Dependencies (2 total)" in result.output
        assert "  requests (>=2.25.0)" in result.output

    def test_json_output(self, python_repo):
        result = runner.invoke(app, ["list", "-r", str(python_repo.root), "-f", "json"])
        assert [d["name"] for d in json.loads(result.output)] == ["requests", "flask"]

    def test_unparseable_manifest(self, tmp_path):
        (tmp_path / "package.json").write_text("{broken")
        result = runner.invoke(app, ["list", "-r", str(tmp_path)])
        assert result.exit_code == 1
        assert "Error: Failed to parse dependency file" in result.output


class TestHistoryCommand:
    def test_text_output(self, python_repo):
        result = runner.invoke(app, ["history", "-r", str(python_repo.root)])
        assert result.exit_code == 0
        assert "Dependency file history (1 commits):" in result.output
        assert "    Add requirements" in result.output

    def test_json_output(self, python_repo):
        result = runner.invoke(app, ["history", "-r", str(python_repo.root), "-f", "json"])
        data = json.loads(result.output)
        assert data[0]["file_path"] == "requirements.txt"

    def test_not_a_repository(self, tmp_path):
        (tmp_path / "requirements.txt").write_text("flask\n")
        result = runner.invoke(app, ["history", "-r", str(tmp_path)])
        assert result.exit_code == 1
        assert "Git repository not found" in result.output


class TestTuiCommand:
    def test_launches_app(self, tmp_path):
        mock_app_instance = MagicMock()
        with patch("dependency_blame.app.DependencyBlameApp", return_value=mock_app_instance) as mock_cls:
            result = runner.invoke(app, ["tui", "-r", str(tmp_path)])
        assert result.exit_code == 0
        mock_cls.assert_called_once_with(repo_path=tmp_path)
        mock_app_instance.run.assert_called_once()


class TestMain:
    def test_main_loads_env_and_runs(self):
        with patch("dotenv.load_dotenv") as mock_ld:
            with patch("dependency_blame.cli.app") as mock_app:
                from dependency_blame.cli import main
                main()
        mock_ld.assert_called_once()
        mock_app.assert_called_once()


class TestConfigureLogging:
    def test_verbose(self):
        with patch("logging.basicConfig") as mock_config:
            configure_logging(verbose=True)
        assert mock_config.call_args.kwargs["level"] == logging.DEBUG

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "info")
        with patch("logging.basicConfig") as mock_config:
            configure_logging()
        assert mock_config.call_args.kwargs["level"] == logging.INFO

    def test_unknown_level_falls_back_to_warning(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
        with patch("logging.basicConfig") as mock_config:
            configure_logging()
        assert mock_config.call_args.kwargs["level"] == logging.WARNING
