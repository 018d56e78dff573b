"""Tests for CLI error reporting."""

import pytest
import typer

from fountainkit.cli.utils import error_handler
from fountainkit.cli.utils.error_handler import handle_cli_error
from fountainkit.exceptions import ParseError


@pytest.fixture
def captured(monkeypatch):
    """Record what the handler prints instead of writing to stderr."""
    lines = []
    monkeypatch.setattr(
        error_handler.console, "print", lambda *args, **kwargs: lines.append(args)
    )
    return lines


def printed(captured):
    return "\n".join(str(arg) for args in captured for arg in args)


class TestHandleCliError:
    """Messages, hints and exit codes."""

    def test_fountainkit_error(self, captured):
        error = ParseError("Bad bytes", hint="Check the encoding", details={"size": 3})
        with pytest.raises(typer.Exit) as exc_info:
            handle_cli_error(error)
        assert exc_info.value.exit_code == 1
        output = printed(captured)
        assert "Bad bytes" in output
        assert "Check the encoding" in output
        assert "size" not in output

    def test_details_in_verbose_mode(self, captured):
        error = ParseError("Bad bytes", details={"size": 3})
        with pytest.raises(typer.Exit):
            handle_cli_error(error, verbose=True)
        assert "size" in printed(captured)

    def test_file_not_found(self, captured):
        with pytest.raises(typer.Exit):
            handle_cli_error(FileNotFoundError("Config file not found: x.yaml"))
        assert "File not found: Config file not found: x.yaml" in printed(captured)

    def test_unexpected_error(self, captured):
        with pytest.raises(typer.Exit) as exc_info:
            handle_cli_error(RuntimeError("boom"), exit_code=2)
        assert exc_info.value.exit_code == 2
        output = printed(captured)
        assert "Unexpected error: boom" in output
        assert "--verbose" in output
