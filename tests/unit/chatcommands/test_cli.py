"""Tests for chatcommands/cli.py"""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from chatcommands.cli import app, build_dispatcher, setup_logging


class TestSetupLogging:
    """Test logging setup functionality."""

    @patch("chatcommands.cli.logging.basicConfig")
    def test_setup_logging_default_level(self, mock_basic_config):
        """Test setup_logging with default INFO level."""
        setup_logging()

        assert mock_basic_config.call_args[1]["level"] == 20  # logging.INFO

    @patch("chatcommands.cli.logging.basicConfig")
    def test_setup_logging_custom_level(self, mock_basic_config):
        """Test setup_logging with custom level."""
        setup_logging("debug")

        assert mock_basic_config.call_args[1]["level"] == 10  # logging.DEBUG

    @patch("chatcommands.cli.logging.basicConfig")
    def test_setup_logging_invalid_level(self, mock_basic_config):
        """Test setup_logging with an unknown level."""
        with pytest.raises(AttributeError):
            setup_logging("INVALID")


class TestBuildDispatcher:
    """Test building a dispatcher from command directories."""

    def test_loads_directories(self, commands_dir):
        """Test every given directory is loaded."""
        dispatcher = build_dispatcher([str(commands_dir)])

        assert "echo" in dispatcher.registry
        assert "ban" in dispatcher.registry
        assert len(dispatcher.middleware) == 3


@patch("chatcommands.cli.setup_logging")
class TestCLICommands:
    """Test CLI command functionality."""

    def setup_method(self):
        """Setup test runner."""
        self.runner = CliRunner()

    def test_parse_command(self, mock_setup_logging, commands_dir):
        """Test parsing a line prints the parsed arguments."""
        result = self.runner.invoke(app, ["parse", "say hello world", "--commands-dir", str(commands_dir)])

        assert result.exit_code == 0
        assert "text = 'hello world'" in result.output
        mock_setup_logging.assert_called_once()

    def test_parse_invalid_argument(self, mock_setup_logging, commands_dir):
        """Test validation errors are shown and the exit code is 1."""
        result = self.runner.invoke(app, ["parse", "ban ?!", "-d", str(commands_dir)])

        assert result.exit_code == 1
        assert "not a valid username" in result.output

    def test_parse_unknown_command(self, mock_setup_logging, commands_dir):
        """Test unknown commands are reported."""
        result = self.runner.invoke(app, ["parse", "dance now", "-d", str(commands_dir)])

        assert result.exit_code == 1
        assert "Unknown command: dance" in result.output

    def test_parse_log_level(self, mock_setup_logging, commands_dir):
        """Test the log level option is passed to setup_logging."""
        self.runner.invoke(app, ["parse", "echo hi", "-d", str(commands_dir), "--log-level", "DEBUG"])

        mock_setup_logging.assert_called_once_with("DEBUG")

    def test_list_commands(self, mock_setup_logging, commands_dir):
        """Test listing shows usage and hides hidden commands."""
        result = self.runner.invoke(app, ["list", "-d", str(commands_dir)])

        assert result.exit_code == 0
        assert "ban <user> [reason]" in result.output
        assert "echo <text> - Repeat some text (aliases: say)" in result.output
        assert "debug" not in result.output

    def test_list_all_commands(self, mock_setup_logging, commands_dir):
        """Test --all includes hidden commands."""
        result = self.runner.invoke(app, ["list", "-d", str(commands_dir), "--all"])

        assert "debug" in result.output

    def test_list_empty(self, mock_setup_logging, tmp_path):
        """Test listing without commands."""
        result = self.runner.invoke(app, ["list", "-d", str(tmp_path)])

        assert result.exit_code == 0
        assert "No commands registered." in result.output

    def test_repl(self, mock_setup_logging, commands_dir):
        """Test the REPL dispatches lines until exit."""
        result = self.runner.invoke(
            app, ["repl", "-d", str(commands_dir)], input="echo first line\nnope\nexit\necho never\n"
        )

        assert result.exit_code == 0
        assert "text = 'first line'" in result.output
        assert "Unknown command: nope" in result.output
        assert "text = 'never'" not in result.output

    def test_repl_eof(self, mock_setup_logging, commands_dir):
        """Test the REPL stops at end of input."""
        result = self.runner.invoke(app, ["repl", "-d", str(commands_dir)], input="echo once\n")

        assert result.exit_code == 0
        assert "text = 'once'" in result.output
