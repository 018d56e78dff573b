"""Tests for the fountainkit CLI."""

import json
from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

from fountainkit import __version__
from fountainkit.cli.main import app, main
from fountainkit.config import get_settings


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


def run_json(runner, *args):
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestApp:
    """Test app wiring."""

    def test_app_configuration(self):
        """Test that the main app is configured correctly."""
        assert isinstance(app, typer.Typer)
        assert app.info.name == "fountainkit"
        assert app.pretty_exceptions_enable is False

    def test_app_has_commands(self):
        """Test that all expected commands are registered."""
        command_names = [cmd.name for cmd in app.registered_commands]
        for name in ("elements", "outline", "browse", "locations"):
            assert name in command_names

    def test_main_function_calls_app(self):
        """Test that main function calls the app."""
        with patch("fountainkit.cli.main.app") as mock_app:
            mock_app.side_effect = SystemExit(0)
            with pytest.raises(SystemExit):
                main()
            mock_app.assert_called_once_with()

    def test_version(self, runner):
        """Test the version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"fountainkit v{__version__}" in result.output


class TestCommands:
    """Test each command against the sample scripts."""

    def test_elements_json(self, runner, structured_script_path):
        """Test elements output as JSON."""
        data = run_json(runner, "elements", str(structured_script_path))
        assert data["filename"] == "structured.fountain"
        assert data["title_page"][0] == {"title": ["Brick & Steel"]}
        assert data["elements"][0] == {
            "type": "Section Heading",
            "text": "Brick & Steel",
            "level": 1,
        }

    def test_elements_table(self, runner, structured_script_path):
        """Test the human-readable elements view."""
        result = runner.invoke(app, ["elements", str(structured_script_path)])
        assert result.exit_code == 0
        assert "Brick & Steel" in result.output

    def test_outline_json(self, runner, structured_script_path):
        """Test outline output as JSON."""
        data = run_json(runner, "outline", str(structured_script_path))
        assert data[0]["level"] == 1
        assert data[0]["clean_text"] == "Brick & Steel"
        assert data[-1]["type"] == "blank"
        assert [n["clean_text"] for n in data if n["is_end_marker"]] == ["END ACT ONE"]

    def test_outline_tree(self, runner, structured_script_path):
        """Test the outline tree view."""
        result = runner.invoke(app, ["outline", str(structured_script_path)])
        assert result.exit_code == 0
        assert "Act One" in result.output
        assert "end marker: END ACT ONE" in result.output

    def test_outline_title_from_filename(self, runner, fixtures_dir):
        """Scripts without a title use the file stem."""
        data = run_json(runner, "outline", str(fixtures_dir / "flat.fountain"))
        assert data[0]["clean_text"] == "flat"
        assert data[0]["is_synthetic"] is True

    def test_browse_json(self, runner, structured_script_path):
        """Test browse output as JSON."""
        data = run_json(runner, "browse", str(structured_script_path))
        assert [c["title"] for c in data["chapters"]] == ["Act One", "Act Two"]
        scene = data["chapters"][1]["scene_groups"][0]["scenes"][0]
        assert scene["title"] == "INT. WILL'S BEDROOM - NIGHT"
        assert len(scene["pre_scene_elements"]) == 1

    def test_browse_without_chapters(self, runner, fixtures_dir):
        """Test the hint shown when there are no chapters."""
        result = runner.invoke(app, ["browse", str(fixtures_dir / "flat.fountain")])
        assert result.exit_code == 0
        assert "No chapters found" in result.output

    def test_locations_by_appearance(self, runner, fixtures_dir):
        """Test the default location ordering."""
        data = run_json(runner, "locations", str(fixtures_dir / "flat.fountain"))
        assert [g["location_key"] for g in data] == ["park", "bob's house - kitchen"]

    def test_locations_by_frequency(self, runner, tmp_path):
        """Test ordering by scene count."""
        script = tmp_path / "script.fountain"
        script.write_text(
            "INT. OFFICE - DAY\n\nWork.\n\n"
            "EXT. PARK - DAY\n\nLunch.\n\n"
            "EXT. PARK - NIGHT\n\nWalk.\n"
        )
        data = run_json(runner, "locations", str(script), "--sort", "frequency")
        assert [(g["location_key"], g["scene_count"]) for g in data] == [
            ("park", 2),
            ("office", 1),
        ]

    @pytest.mark.parametrize("command", ["elements", "outline", "browse"])
    def test_bracketed_text_printed_literally(self, runner, tmp_path, command):
        """Square brackets in the script are shown, not read as markup."""
        script = tmp_path / "script.fountain"
        script.write_text(
            "## Act [one]\n\n### Odd [/x]\n\nINT. ROOM [continuous]\n\nWait.\n"
        )
        result = runner.invoke(app, [command, str(script)])
        assert result.exit_code == 0, result.output
        assert "[one]" in result.output
        assert "[/x]" in result.output
        assert "[continuous]" in result.output

    def test_locations_table(self, runner, fixtures_dir):
        """Test the human-readable locations view."""
        result = runner.invoke(app, ["locations", str(fixtures_dir / "flat.fountain")])
        assert result.exit_code == 0
        assert "PARK" in result.output


class TestErrors:
    """Test error reporting."""

    @pytest.mark.parametrize("command", ["elements", "outline", "browse", "locations"])
    def test_missing_file(self, runner, tmp_path, command):
        """Test that a missing file exits with code 1."""
        result = runner.invoke(app, [command, str(tmp_path / "missing.fountain")])
        assert result.exit_code == 1
        assert "Screenplay file not found" in result.output

    def test_missing_config_file(self, runner, tmp_path, structured_script_path):
        """Test that an explicit missing config file is reported."""
        result = runner.invoke(
            app,
            [
                "--config",
                str(tmp_path / "missing.yaml"),
                "elements",
                str(structured_script_path),
            ],
        )
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_config_file_applied(self, runner, tmp_path, fixtures_dir):
        """Test that --config settings reach the commands."""
        config = tmp_path / "fk.yaml"
        config.write_text("default_title: Configured\n")
        script = tmp_path / "untitled.fountain"
        script.write_text("")
        result = runner.invoke(
            app, ["--config", str(config), "outline", str(script), "--json"]
        )
        assert result.exit_code == 0, result.output
        assert get_settings().default_title == "Configured"
