"""Unit tests for the roster command line."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from roster import __version__, get_version
from roster.cli import main


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "roster.yaml"
    path.write_text(
        f"database_url: sqlite:///{tmp_path / 'db' / 'roster.db'}\n"
        f"log_dir: {tmp_path / 'logs'}\n"
        "port: 8123\n"
    )
    return path


@pytest.mark.unit
class TestCli:
    """Tests for the click commands."""

    def test_version_matches_package(self) -> None:
        """--version reports the package version, which is plain semver."""
        result = CliRunner().invoke(main, ["--version"])

        assert result.exit_code == 0
        assert result.output.strip().endswith(__version__)
        assert get_version() == __version__
        assert all(part.isdigit() for part in __version__.split("."))

    def test_init_db_creates_database(self, config_file: Path, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["init-db", "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Students table ready" in result.output
        assert (tmp_path / "db" / "roster.db").exists()

    def test_invalid_config_exits_with_error(self, tmp_path: Path) -> None:
        path = tmp_path / "roster.yaml"
        path.write_text("colour: blue\n")

        result = CliRunner().invoke(main, ["init-db", "-c", str(path)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_serve_runs_uvicorn_with_config(self, config_file: Path) -> None:
        with patch("roster.cli.uvicorn.run") as run:
            result = CliRunner().invoke(
                main, ["serve", "-c", str(config_file), "--host", "0.0.0.0"]
            )

        assert result.exit_code == 0, result.output
        _, kwargs = run.call_args
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 8123
