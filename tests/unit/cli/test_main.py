"""Unit tests for the main CLI application."""

import logging

from nsprune import __version__
from nsprune.cli.main import app, configure_logging
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"nsprune version {__version__}" in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without a command shows usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_lists_commands(self) -> None:
        """Help lists every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("prune", "stale", "config"):
            assert command in result.stdout


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_default_level(self) -> None:
        """INFO by default, with engine notices left to the CLI."""
        assert configure_logging() == logging.INFO
        assert logging.getLogger("nsprune.core.engine").level == logging.WARNING

    def test_verbose(self) -> None:
        """--verbose enables DEBUG everywhere."""
        assert configure_logging(verbose=True) == logging.DEBUG
        assert logging.getLogger("nsprune.core.engine").level == logging.DEBUG

    def test_quiet(self) -> None:
        """--quiet raises the level to WARNING."""
        assert configure_logging(quiet=True) == logging.WARNING

    def test_single_handler(self) -> None:
        """Repeated configuration does not stack handlers."""
        configure_logging()
        configure_logging()

        assert len(logging.getLogger("nsprune").handlers) == 1
