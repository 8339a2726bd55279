"""Tests for the Stillwater CLI.

**Feature: stillwater-record-store**
"""

import json
from pathlib import Path

import click
import pytest
import toml
from click.testing import CliRunner
from rich.console import Console

from stillwater.cli.main import LAZY_SUBCOMMANDS, LazyGroup, cli
from stillwater.cli.render import format_entry_date, render_form
from stillwater.db.store import JOURNAL_SLOT, SETTINGS_SLOT, DataStore


@pytest.fixture
def env(tmp_path: Path) -> dict:
    """Config pointing the CLI at a temporary database."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(toml.dumps({
        "storage": {"db_path": str(tmp_path / "stillwater.db")},
        "settings": {"submit_latency": 0, "success_window": 0},
    }))
    return {"STILLWATER_CONFIG": str(config_file)}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def stored(env: dict, key: str):
    db_path = Path(env["STILLWATER_CONFIG"]).parent / "stillwater.db"
    raw = DataStore(db_path).load(key)
    return None if raw is None else json.loads(raw)


class TestCommandLoading:
    """Every lazy subcommand resolves to a click command."""

    @pytest.mark.parametrize("name", sorted(LAZY_SUBCOMMANDS))
    def test_lazy_commands_load(self, runner: CliRunner, env: dict, name: str):
        result = runner.invoke(cli, [name, "--help"], env=env)
        assert result.exit_code == 0, result.output

    def test_module_without_named_command_fails(self):
        group = LazyGroup(lazy_subcommands={"render": "stillwater.cli.render"})

        with pytest.raises(click.ClickException, match="Could not find command 'render'"):
            group.get_command(click.Context(group), "render")

    def test_unknown_command_is_none(self):
        group = LazyGroup(lazy_subcommands=LAZY_SUBCOMMANDS)
        assert group.get_command(click.Context(group), "trade") is None


class TestJournalCommands:
    def test_add_then_list(self, runner: CliRunner, env: dict):
        result = runner.invoke(
            cli, ["journal", "add", "-t", "First", "-m", "good", "-c", "Calm morning"], env=env
        )
        assert result.exit_code == 0, result.output

        entries = stored(env, JOURNAL_SLOT)
        assert len(entries) == 1
        assert entries[0]["title"] == "First"
        assert entries[0]["mood"] == "good"

        listed = runner.invoke(cli, ["journal", "list", "--mood", "good"], env=env)
        assert "First" in listed.output

        empty = runner.invoke(cli, ["journal", "list", "--mood", "great"], env=env)
        assert "No journal entries" in empty.output

    def test_add_without_title_fails(self, runner: CliRunner, env: dict):
        result = runner.invoke(cli, ["journal", "add", "-t", "   "], env=env)

        assert result.exit_code == 1
        assert "Please enter a title" in result.output
        assert stored(env, JOURNAL_SLOT) is None

    def test_edit_changes_fields(self, runner: CliRunner, env: dict):
        runner.invoke(cli, ["journal", "add", "-t", "Draft"], env=env)
        entry_id = stored(env, JOURNAL_SLOT)[0]["id"]

        result = runner.invoke(cli, ["journal", "edit", str(entry_id), "-m", "great"], env=env)

        assert result.exit_code == 0, result.output
        entry = stored(env, JOURNAL_SLOT)[0]
        assert entry["mood"] == "great"
        assert entry["title"] == "Draft"
        assert "updatedAt" in entry

    def test_delete_declined(self, runner: CliRunner, env: dict):
        runner.invoke(cli, ["journal", "add", "-t", "Stay"], env=env)
        entry_id = stored(env, JOURNAL_SLOT)[0]["id"]

        result = runner.invoke(cli, ["journal", "delete", str(entry_id)], input="n\n", env=env)

        assert "cancelled" in result.output
        assert len(stored(env, JOURNAL_SLOT)) == 1

    def test_delete_confirmed(self, runner: CliRunner, env: dict):
        runner.invoke(cli, ["journal", "add", "-t", "Go"], env=env)
        entry_id = stored(env, JOURNAL_SLOT)[0]["id"]

        result = runner.invoke(cli, ["journal", "delete", str(entry_id)], input="y\n", env=env)

        assert result.exit_code == 0, result.output
        assert stored(env, JOURNAL_SLOT) == []

    def test_show_unknown_entry(self, runner: CliRunner, env: dict):
        result = runner.invoke(cli, ["journal", "show", "404"], env=env)
        assert "not found" in result.output


class TestSettingsCommands:
    def test_valid_settings_are_saved(self, runner: CliRunner, env: dict):
        result = runner.invoke(
            cli,
            ["settings", "set", "-n", "Sam", "-e", "sam@example.com", "-g", "15", "--no-sound"],
            env=env,
        )

        assert result.exit_code == 0, result.output
        assert stored(env, SETTINGS_SLOT) == {
            "displayName": "Sam",
            "email": "sam@example.com",
            "dailyGoal": 15,
            "notifications": True,
            "soundEnabled": False,
        }

    def test_invalid_settings_are_not_saved(self, runner: CliRunner, env: dict):
        result = runner.invoke(
            cli, ["settings", "set", "-n", "Sam", "-e", "not-an-email"], env=env
        )

        assert result.exit_code == 1
        assert "Please enter a valid email" in result.output
        assert stored(env, SETTINGS_SLOT) is None

    def test_show_settings(self, runner: CliRunner, env: dict):
        result = runner.invoke(cli, ["settings", "show"], env=env)
        assert result.exit_code == 0, result.output
        assert "Daily Goal" in result.output


class TestFeedbackCommands:
    def test_submit_counts_sessions(self, runner: CliRunner, env: dict):
        runner.invoke(cli, ["feedback", "submit", "-m", "4"], env=env)
        runner.invoke(cli, ["feedback", "submit", "-m", "5", "-t", "Lovely"], env=env)

        result = runner.invoke(cli, ["feedback", "count"], env=env)

        assert "Sessions: 2" in result.output


class TestInit:
    def test_init_writes_config(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "fresh" / "config.toml"

        result = runner.invoke(cli, ["init"], env={"STILLWATER_CONFIG": str(path)})

        assert result.exit_code == 0, result.output
        assert path.exists()

        again = runner.invoke(cli, ["init"], env={"STILLWATER_CONFIG": str(path)})
        assert "already exists" in again.output


class TestRender:
    def test_format_entry_date(self):
        assert format_entry_date("2024-03-04") == "Monday, March 4, 2024"
        assert format_entry_date("someday") == "someday"

    def test_form_hides_untouched_errors(self):
        console = Console(record=True, width=120)
        draft = {"displayName": "", "email": "x", "dailyGoal": 0}
        errors = {"displayName": "Display name is required", "email": "Please enter a valid email"}

        console.print(render_form(draft, errors, {"email": True}))
        text = console.export_text()

        assert "Please enter a valid email" in text
        assert "Display name is required" not in text
