"""Tests for the npcdb command line interface."""

import json
import sqlite3
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from npcdb.cli.main import app

pytestmark = pytest.mark.integration


@pytest.fixture
def runner():
    """CLI runner."""
    return CliRunner()


def _status(runner, db_path):
    result = runner.invoke(app, ["status", "--json", "--db-path", str(db_path)])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestInitCommand:
    """Test `npcdb init`."""

    def test_creates_database(self, runner, db_path):
        """A fresh database is created with the schema."""
        result = runner.invoke(app, ["init", "--db-path", str(db_path)])

        assert result.exit_code == 0, result.output
        assert db_path.exists()
        assert "initialized successfully" in result.stdout

    def test_refuses_existing(self, runner, db_path):
        """An initialized database is not overwritten without --force."""
        runner.invoke(app, ["init", "--db-path", str(db_path)])

        result = runner.invoke(app, ["init", "--db-path", str(db_path)])

        assert result.exit_code == 1

    def test_force_confirmed(self, runner, db_path):
        """--force with confirmation recreates the database."""
        runner.invoke(app, ["init", "--db-path", str(db_path)])
        conn = sqlite3.connect(db_path)
        conn.execute("INSERT INTO movies (id, title) VALUES ('m1', 'x')")
        conn.commit()
        conn.close()

        result = runner.invoke(
            app, ["init", "--db-path", str(db_path), "--force"], input="y\n"
        )

        assert result.exit_code == 0, result.output
        assert _status(runner, db_path)["rows"]["movies"] == 0

    def test_force_declined(self, runner, db_path):
        """Declining the confirmation leaves the database alone."""
        runner.invoke(app, ["init", "--db-path", str(db_path)])

        result = runner.invoke(
            app, ["init", "--db-path", str(db_path), "--force"], input="n\n"
        )

        assert result.exit_code == 0
        assert "cancelled" in result.stdout

    def test_missing_config(self, runner, tmp_path):
        """A missing config file is reported."""
        result = runner.invoke(app, ["init", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1


class TestSeedCommand:
    """Test `npcdb seed`."""

    def test_seed_creates_schema_and_rows(self, runner, db_path):
        """Seeding works on a fresh path and reports the row counts."""
        result = runner.invoke(app, ["seed", "--db-path", str(db_path)])

        assert result.exit_code == 0, result.output
        assert "subtitle_segments" in result.stdout

        rows = _status(runner, db_path)["rows"]
        assert rows["movies"] == 2
        assert rows["characters"] == 4
        assert rows["character_notes"] == 0

    def test_seed_is_repeatable(self, runner, db_path):
        """Seeding twice keeps a single copy of the dataset."""
        runner.invoke(app, ["seed", "--db-path", str(db_path)])
        runner.invoke(app, ["seed", "--db-path", str(db_path)])

        assert _status(runner, db_path)["rows"]["movies"] == 2


class TestStatusCommand:
    """Test `npcdb status`."""

    def test_uninitialized(self, runner, db_path):
        """A missing database is reported as not initialized."""
        info = _status(runner, db_path)

        assert info["database"] == str(db_path.resolve())
        assert info["database_exists"] is False
        assert info["initialized"] is False
        assert "rows" not in info

    def test_initialized(self, runner, db_path):
        """An initialized database reports its version and row counts."""
        runner.invoke(app, ["init", "--db-path", str(db_path)])

        info = _status(runner, db_path)

        assert info["initialized"] is True
        assert info["schema_version"] == 1
        assert set(info["rows"]) >= {"movies", "characters", "movie_scripts"}

    def test_human_output(self, runner, db_path):
        """Without --json a readable summary is printed."""
        result = runner.invoke(app, ["status", "--db-path", str(db_path)])

        assert result.exit_code == 0
        assert "npcdb Status" in result.stdout


class TestServeCommand:
    """Test `npcdb serve`."""

    def test_runs_uvicorn(self, runner, db_path):
        """The app is served on the requested address."""
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(
                app,
                ["serve", "--db-path", str(db_path), "--host", "0.0.0.0", "-p", "9001"],
            )

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        kwargs = mock_run.call_args.kwargs
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9001
        assert mock_run.call_args.args[0].state.settings.database_path == (
            db_path.resolve()
        )

    def test_reload_uses_factory(self, runner, db_path):
        """Reload mode hands uvicorn the factory import string."""
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(
                app, ["serve", "--db-path", str(db_path), "--reload"]
            )

        assert result.exit_code == 0, result.output
        assert mock_run.call_args.args[0] == "npcdb.api.app:create_app"
        assert mock_run.call_args.kwargs["factory"] is True


class TestAdminCommand:
    """Test `npcdb admin`."""

    def test_prints_launch_command(self, runner):
        """By default the streamlit command is printed."""
        result = runner.invoke(app, ["admin"])

        assert result.exit_code == 0
        assert "streamlit run" in result.stdout

    def test_run_launches_streamlit(self, runner, monkeypatch):
        """--run starts streamlit with the configured API URL."""
        monkeypatch.setenv("NPCDB_API_BASE_URL", "http://api.test/api")
        completed = MagicMock(returncode=0)

        with patch(
            "npcdb.cli.commands.admin.subprocess.run", return_value=completed
        ) as mock_run:
            result = runner.invoke(app, ["admin", "--run"])

        assert result.exit_code == 0
        command = mock_run.call_args.args[0]
        assert command[1:4] == ["-m", "streamlit", "run"]
        assert mock_run.call_args.kwargs["env"]["NPCDB_API_BASE_URL"] == (
            "http://api.test/api"
        )
