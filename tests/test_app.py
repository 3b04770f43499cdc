"""
Tests for the command-line host.
"""

import json

import pytest

from roletagger.app import main, run_tag_session
from roletagger.env import Settings
from roletagger.registry import TagRegistry
from roletagger.controller import TagController


class TestTagSession:
    """Test the line-driven tag session."""

    def run(self, controller, lines):
        output = []
        run_tag_session(controller, lines, out=output.append)
        return output

    def test_type_and_enter(self, registry):
        controller = TagController(registry)
        output = self.run(controller, ["sw", ":down", ":down", ":enter"])
        assert controller.selection == ["SWE"]
        assert output[-1] == "Roles: SWE"

    def test_render_marks_highlight(self, registry):
        controller = TagController(registry)
        output = self.run(controller, ["s", ":down"])
        assert ' > [0] Create "s"' in output[-1]
        assert "   [1] SWE" in output[-1]

    def test_click_remove_and_quit(self, registry):
        controller = TagController(registry)
        self.run(controller, ["se", ":click 0", ":remove SE", ":quit", "swe"])
        assert controller.selection == []
        assert controller.input_text == ""

    def test_bad_click_argument(self, registry):
        controller = TagController(registry)
        output = self.run(controller, ["s", ":click x"])
        assert "Expected a suggestion number" in output[-1]

    def test_unknown_command(self, registry):
        controller = TagController(registry)
        output = self.run(controller, [":nope"])
        assert "Unknown command" in output[-1]

    def test_dismiss(self, registry):
        controller = TagController(registry)
        self.run(controller, ["s", ":dismiss"])
        assert controller.suggestions == ()
        assert controller.input_text == "s"


class TestCli:
    """Test CLI commands against a JSON store."""

    def test_version(self, capsys):
        main(["--version"])
        assert capsys.readouterr().out.strip() == "0.1.0"

    def test_roles_list_shows_defaults_without_writing(self, tmp_path, capsys):
        store = tmp_path / "store.json"
        main(["--store", str(store), "roles", "list"])
        out = capsys.readouterr().out.split()
        assert out[:2] == ["SWE", "SE"]
        assert not store.exists()

    def test_read_only_commands_do_not_write(self, tmp_path, capsys):
        """Inspecting notes or suggestions leaves a fresh store untouched."""
        store = tmp_path / "store.json"
        main(["--store", str(store), "notes", "--candidate", "1"])
        main(["--store", str(store), "suggest", "--candidate", "1", "--text", "swe"])
        out = capsys.readouterr().out
        assert "Roles: (none)" in out
        assert "[0] SWE" in out
        assert not store.exists()

    def test_roles_add_and_remove(self, populated_store, capsys):
        main(["--store", str(populated_store), "roles", "add", "sre"])
        assert "Added" in capsys.readouterr().out
        main(["--store", str(populated_store), "roles", "remove", "SE"])
        assert "Removed" in capsys.readouterr().out

        data = json.loads(populated_store.read_text())
        assert json.loads(data["rms-available-roles"]) == ["SWE", "DBA", "SRE"]

    def test_notes_show(self, populated_store, capsys):
        main(["--store", str(populated_store), "notes", "--candidate", "7"])
        out = capsys.readouterr().out
        assert "Roles: SWE" in out
        assert "Project Phoenix" in out

    def test_suggest(self, populated_store, capsys):
        main(["--store", str(populated_store), "suggest", "--candidate", "7", "--text", "s"])
        out = capsys.readouterr().out.splitlines()
        assert out == ['[0] Create "s"', "[1] SE"]

    def test_sqlite_backend(self, tmp_path, capsys):
        db = tmp_path / "roles.db"
        main(["--backend", "sqlite", "--store", str(db), "roles", "add", "sre"])
        main(["--backend", "sqlite", "--store", str(db), "roles", "list"])
        assert "SRE" in capsys.readouterr().out.split()


class TestSettings:
    """Test configuration from the environment."""

    def test_defaults(self, monkeypatch):
        for name in ["ROLETAGGER_BACKEND", "ROLETAGGER_STORE", "ROLETAGGER_LOG_LEVEL", "ROLETAGGER_LOG_DIR"]:
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.backend == "json"
        assert str(settings.store_path) == "data/store.json"
        assert settings.log_level == "INFO"

    def test_env_backend(self, monkeypatch):
        monkeypatch.setenv("ROLETAGGER_BACKEND", "sqlite")
        monkeypatch.delenv("ROLETAGGER_STORE", raising=False)
        assert str(Settings.from_env().store_path) == "data/roles.db"

    def test_arguments_override_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ROLETAGGER_STORE", "elsewhere.json")
        settings = Settings.from_env(store=str(tmp_path / "s.json"))
        assert settings.store_path == tmp_path / "s.json"

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("ROLETAGGER_BACKEND", "redis")
        with pytest.raises(ValueError):
            Settings.from_env()
