"""Tests for bulk row import and its schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from swimroster.models import Course, Gender, Level
from swimroster.services.import_schemas import (
    ImportKind,
    MeetRow,
    PRBaselineRow,
    parse_date,
    parse_has_jv,
)


class TestParseHelpers:
    """Tests for date and flag parsing."""

    def test_iso_date(self):
        assert parse_date("2025-12-05") == date(2025, 12, 5)

    def test_us_date(self):
        assert parse_date("12/5/2025") == date(2025, 12, 5)

    def test_bad_date(self):
        with pytest.raises(ValueError, match="Invalid date format"):
            parse_date("next friday")

    @pytest.mark.parametrize("text", ["true", "YES", "y", "1", "", None])
    def test_has_jv_true(self, text):
        assert parse_has_jv(text) is True

    @pytest.mark.parametrize("text", ["false", "no", "0", "maybe"])
    def test_has_jv_false(self, text):
        assert parse_has_jv(text) is False


class TestMeetRow:
    """Tests for meet row validation."""

    def test_valid_row(self):
        row = MeetRow(name=" Dual B ", date="1/9/2026", course="scy", has_jv="No")
        assert row.name == "Dual B"
        assert row.date == date(2026, 1, 9)
        assert row.course == Course.SCY
        assert row.has_jv is False

    def test_blank_has_jv_is_true(self):
        assert MeetRow(name="Dual B", has_jv="").has_jv is True

    def test_name_required(self):
        with pytest.raises(ValidationError):
            MeetRow(name="  ")


class TestPRBaselineRow:
    def test_required_fields(self):
        with pytest.raises(ValidationError):
            PRBaselineRow(swimmer="Avery", event="", time="29.0")

    def test_optional_date(self):
        assert PRBaselineRow(swimmer="Avery", event="50 Freestyle", time="29.0", date="").date is None


class TestImportSwimmers:
    """Tests for the swimmer upsert."""

    def test_insert_and_update(self, import_service, daos):
        rows = [
            ["Name", "Grad Year", "Gender", "Level", "Notes"],
            ["Emery", "2027", "f", "jv", "new"],
            ["Avery", "", "", "JV", ""],
        ]
        result = import_service.import_rows(ImportKind.SWIMMERS, rows, has_header=True)

        assert result.inserted == 1
        assert result.updated == 1
        assert result.skipped == []
        emery = daos["swimmers"].get("Emery")
        assert emery.gender == Gender.FEMALE
        assert emery.level == Level.JV
        avery = daos["swimmers"].get("Avery")
        assert avery.level == Level.JV
        assert avery.grad_year == 2026

    def test_bad_rows_skipped(self, import_service, daos):
        """Bad rows are reported with their row number; good rows still land."""
        rows = [
            ["", "2027", "F", "JV", ""],
            ["Flynn", "twenty", "M", "", ""],
            ["Gray", "2028", "M", "", ""],
        ]
        result = import_service.import_rows(ImportKind.SWIMMERS, rows)

        assert result.inserted == 1
        assert [s.row_number for s in result.skipped] == [1, 2]
        assert "grad_year" in result.skipped[1].reason
        assert daos["swimmers"].get("Gray") is not None
        assert daos["swimmers"].get("Flynn") is None

    def test_blank_rows_ignored(self, import_service):
        result = import_service.import_rows(ImportKind.SWIMMERS, [["", ""], []])
        assert result.inserted == 0
        assert result.skipped == []


class TestImportMeets:
    """Tests for the meet import."""

    def test_import_meets(self, import_service, daos):
        rows = [
            ["Meet", "Date", "Location", "Course", "Notes", "Has JV?"],
            ["Dual B", "2026-01-09", "Home", "SCY", "", "no"],
            ["Dual C", "1/16/2026", "Away", "", "", ""],
            ["Dual A", "2026-01-23", "", "", "", "yes"],
            ["Dual D", "someday", "", "", "", ""],
        ]
        result = import_service.import_rows(ImportKind.MEETS, rows, has_header=True)

        assert result.inserted == 2
        assert [s.row_number for s in result.skipped] == [4, 5]
        assert "already exists" in result.skipped[0].reason
        assert daos["meets"].get("Dual B").has_jv is False
        assert daos["meets"].get("Dual C").has_jv is True
        assert len(daos["meet_event_presets"].find(meet="Dual B")) == 4
        assert len(daos["meet_event_presets"].find(meet="Dual C")) == 4

    def test_duplicate_within_batch(self, import_service):
        result = import_service.import_rows(ImportKind.MEETS, [["Dual E"], ["Dual E"]])
        assert result.inserted == 1
        assert result.skipped_count == 1


class TestImportPRs:
    """Tests for the PR baseline import."""

    def test_import_prs(self, import_service, daos):
        rows = [
            ["Avery", "50 Freestyle", "26.4", "2025-09-01"],
            ["Blake", "100 Butterfly", "1:10.25", ""],
            ["Casey", "50 Freestyle", "quick", ""],
            ["Drew", "", "30.0", ""],
        ]
        result = import_service.import_rows(ImportKind.PRS, rows, default_date=date(2025, 8, 15))

        assert result.inserted == 2
        assert [s.row_number for s in result.skipped] == [3, 4]
        assert result.skipped[0].reason.startswith("time:")

        blake = daos["results"].find(swimmer="Blake")[0]
        assert blake.meet == "PR Baseline"
        assert blake.notes == "Imported baseline"
        assert blake.date == date(2025, 8, 15)
        assert blake.final_time == pytest.approx(70.25 / 86400)
        assert daos["results"].find(swimmer="Avery")[0].date == date(2025, 9, 1)
