"""Tests for the command line interface."""

import re

import pytest
from typer.testing import CliRunner

from tododash.cli import app
from tododash.config import get_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_settings(tmp_path, monkeypatch):
    """Point the CLI at a fresh database."""
    monkeypatch.setenv("TODODASH_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("TODODASH_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODODASH_CLI_USER", "cli-user")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def add(*args):
    result = runner.invoke(app, ["add", *args])
    assert result.exit_code == 0, result.output
    return re.search(r"ID: ([0-9a-f-]{36})", result.output).group(1)


class TestCli:
    def test_add_and_list(self):
        add("Buy milk", "--priority", "high", "--category", "Errands", "--tags", "shop, quick")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Buy milk" in result.output
        assert "Errands" in result.output

        categories = runner.invoke(app, ["categories"])
        assert "Errands" in categories.output
        tags = runner.invoke(app, ["tags"])
        assert "quick" in tags.output and "shop" in tags.output

    def test_list_filters(self):
        add("Tagged one", "--tags", "home")
        add("Plain one")

        result = runner.invoke(app, ["list", "--tag", "home"])
        assert "Tagged one" in result.output
        assert "Plain one" not in result.output

        result = runner.invoke(app, ["list", "--tag", "nope"])
        assert "No todos found" in result.output

    def test_done_by_partial_id(self):
        todo_id = add("Finish it")

        result = runner.invoke(app, ["done", todo_id[:8]])

        assert result.exit_code == 0
        assert "Completed" in result.output
        assert "Finish it" not in runner.invoke(app, ["list"]).output
        assert "Finish it" in runner.invoke(app, ["list", "--all"]).output

    def test_delete(self):
        todo_id = add("Throw away")

        result = runner.invoke(app, ["delete", todo_id, "--force"])

        assert result.exit_code == 0
        assert "No todos found" in runner.invoke(app, ["list"]).output

    def test_other_user_sees_nothing(self):
        add("Mine")

        result = runner.invoke(app, ["list", "--user", "someone-else"])

        assert "No todos found" in result.output

    def test_unknown_todo(self):
        result = runner.invoke(app, ["done", "ffffffff"])
        assert result.exit_code == 1

    def test_invalid_due_date(self):
        result = runner.invoke(app, ["add", "Dated", "--due", "tomorrow"])
        assert result.exit_code == 1
        assert "Invalid date format" in result.output
