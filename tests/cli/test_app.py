"""Tests for the swimroster CLI."""

import pytest
from typer.testing import CliRunner

from swimroster.cli import app as cli
from swimroster.dao import MeetDAO, MemoryDAO
from swimroster.services import BASELINE_EVENTS

runner = CliRunner()


@pytest.fixture(autouse=True)
def memory_stores(daos, monkeypatch):
    """Point every command at the in-memory stores."""
    monkeypatch.setattr(cli, "build_daos", lambda: daos)
    return daos


class TestEventsCommands:
    def test_list(self):
        result = runner.invoke(cli.app, ["events", "list"])
        assert result.exit_code == 0, result.output
        assert "Events (4)" in result.output

    def test_add_with_jv(self, daos):
        result = runner.invoke(
            cli.app, ["events", "add", "100 Backstroke", "--distance", "100", "--stroke", "Backstroke", "--jv"]
        )
        assert result.exit_code == 0, result.output
        assert daos["events"].get("100 Backstroke (JV)") is not None

    def test_add_duplicate_fails(self):
        result = runner.invoke(cli.app, ["events", "add", "50 Freestyle"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_enable_jv(self, daos):
        result = runner.invoke(cli.app, ["events", "enable-jv"])
        assert result.exit_code == 0, result.output
        assert "Added 2 JV events" in result.output
        assert daos["events"].count() == 6

    def test_seed_baseline(self, daos):
        result = runner.invoke(cli.app, ["events", "seed-baseline"])
        assert result.exit_code == 0, result.output
        assert daos["events"].count() == len(BASELINE_EVENTS) + 1


class TestMeetsCommands:
    def test_add_no_jv(self, daos):
        result = runner.invoke(cli.app, ["meets", "add", "Dual B", "--date", "1/9/2026", "--no-jv"])
        assert result.exit_code == 0, result.output
        assert daos["meets"].get("Dual B").has_jv is False
        assert len(daos["meet_event_presets"].find(meet="Dual B")) == 4

    def test_bad_date(self):
        result = runner.invoke(cli.app, ["meets", "add", "Dual B", "--date", "soon"])
        assert result.exit_code == 1
        assert "Invalid date format" in result.output

    def test_presets_unknown_meet(self):
        result = runner.invoke(cli.app, ["meets", "presets", "Nowhere"])
        assert result.exit_code == 1
        assert "Meet not found" in result.output

    def test_disable_and_restore_jv(self, daos):
        runner.invoke(cli.app, ["presets", "ensure"])
        meet = daos["meets"].get("Dual A")
        daos["meets"].update(meet.model_copy(update={"has_jv": False}))

        result = runner.invoke(cli.app, ["meets", "disable-jv", "Dual A"])
        assert "Disabled 1 JV presets" in result.output

        daos["meets"].update(meet)
        result = runner.invoke(cli.app, ["meets", "restore-jv", "Dual A"])
        assert "Restored 1 JV presets" in result.output

    def test_missing_table(self, daos):
        daos["meets"] = MemoryDAO.for_table(MeetDAO, present=False)
        result = runner.invoke(cli.app, ["meets", "list"])
        assert result.exit_code == 1
        assert "Missing required table" in result.output


class TestLineupCommands:
    def test_reseed_check_and_packet(self, daos):
        result = runner.invoke(cli.app, ["lineup", "reseed", "Dual A", "--yes"])
        assert result.exit_code == 0, result.output
        assert "4 events" in result.output

        row = daos["lineup_assignments"].get("Dual A", 4)
        daos["lineup_assignments"].update(row.model_copy(update={"individual_swimmer": "Avery"}))

        result = runner.invoke(cli.app, ["lineup", "check", "Dual A"])
        assert result.exit_code == 0, result.output
        assert "Level mismatch" in result.output

        result = runner.invoke(cli.app, ["lineup", "packet", "Dual A"])
        assert result.exit_code == 0, result.output
        assert "Avery" in result.output

    def test_reseed_needs_confirmation(self, daos):
        result = runner.invoke(cli.app, ["lineup", "reseed", "Dual A"], input="n\n")
        assert result.exit_code == 1
        assert daos["lineup_assignments"].count() == 0

    def test_apply(self):
        runner.invoke(cli.app, ["lineup", "reseed", "Dual A", "--yes"])
        result = runner.invoke(cli.app, ["lineup", "apply", "Dual A"])
        assert result.exit_code == 0, result.output
        assert "3 of 4 events active" in result.output


class TestResultsCommands:
    def test_add_and_prs(self, daos):
        result = runner.invoke(
            cli.app,
            ["results", "add", "-m", "Dual A", "-e", "50 Freestyle", "-s", "Avery", "-t", "26.40", "--date", "2025-12-05"],
        )
        assert result.exit_code == 0, result.output
        assert "New PR!" in result.output
        [stored] = daos["results"].find(swimmer="Avery")
        assert stored.final_time_formatted == "26.40"
        assert str(stored.date) == "2025-12-05"

        result = runner.invoke(cli.app, ["results", "prs"])
        assert result.exit_code == 0, result.output
        assert "PRs (1)" in result.output

        result = runner.invoke(cli.app, ["results", "dashboard", "Avery"])
        assert "Dashboard: Avery" in result.output

    def test_bad_time(self, daos):
        result = runner.invoke(
            cli.app, ["results", "add", "-m", "Dual A", "-e", "50 Freestyle", "-s", "Avery", "-t", "fast"]
        )
        assert result.exit_code == 1
        assert daos["results"].count() == 0


class TestImportCommands:
    def test_import_prs(self, tmp_path, daos):
        csv_path = tmp_path / "prs.csv"
        csv_path.write_text(
            "Swimmer,Event,Time,Date\nAvery,50 Freestyle,26.40,2025-09-01\nBlake,100 Butterfly,bad,\n"
        )
        result = runner.invoke(cli.app, ["import", "prs", str(csv_path)])
        assert result.exit_code == 0, result.output
        assert "Inserted:" in result.output
        assert "Row 3" in result.output
        assert daos["results"].count() == 1

    def test_missing_file(self, tmp_path):
        result = runner.invoke(cli.app, ["import", "swimmers", str(tmp_path / "nope.csv")])
        assert result.exit_code == 1
        assert "File not found" in result.output


class TestServeCommand:
    def test_runs_uvicorn(self, monkeypatch):
        import uvicorn

        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
        result = runner.invoke(cli.app, ["serve", "--port", "9000"])
        assert result.exit_code == 0, result.output
        assert calls == [("swimroster.api.app:app", {"host": "127.0.0.1", "port": 9000, "reload": False})]
