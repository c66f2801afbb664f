"""Bulk import of already-parsed rows.

Each row is validated on its own. A bad row is skipped and reported in the
result while the rest of the batch is still written.
"""

import datetime

from pydantic import ValidationError

from swimroster.dao.base import TableDAO
from swimroster.logging import get_logger
from swimroster.models.meet import Meet
from swimroster.models.result import Result, parse_time_serial
from swimroster.models.swimmer import Swimmer
from swimroster.services.entry_service import PR_BASELINE_MEET
from swimroster.services.import_schemas import (
    ImportKind,
    ImportResult,
    MeetRow,
    PRBaselineRow,
)
from swimroster.services.preset_resolver import PresetResolver

logger = get_logger(__name__)

IMPORT_NOTES = "Imported baseline"

SWIMMER_COLUMNS = ("name", "grad_year", "gender", "level", "notes")
MEET_COLUMNS = ("name", "date", "location", "course", "notes", "has_jv")
PR_COLUMNS = ("swimmer", "event", "time", "date")


def _cells(row: list[str | None], columns: tuple[str, ...]) -> dict[str, str]:
    """Map positional cells onto column names; missing cells are blank."""
    values = [(cell or "").strip() for cell in row]
    values += [""] * (len(columns) - len(values))
    return dict(zip(columns, values[: len(columns)], strict=True))


def _reason(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"{field}: {first['msg']}" if field else first["msg"]


class ImportService:
    """Service for importing swimmers, meets, and PR baselines in bulk."""

    def __init__(
        self,
        swimmer_dao: TableDAO[Swimmer],
        meet_dao: TableDAO[Meet],
        result_dao: TableDAO[Result],
        presets: PresetResolver,
    ):
        self.swimmer_dao = swimmer_dao
        self.meet_dao = meet_dao
        self.result_dao = result_dao
        self.presets = presets

    def import_rows(
        self,
        kind: ImportKind,
        rows: list[list[str]],
        has_header: bool = False,
        default_date: datetime.date | None = None,
    ) -> ImportResult:
        """Import a batch of rows into the table named by `kind`.

        Args:
            kind: Target table
            rows: Rows as lists of cell strings, in column order
            has_header: Drop the first row as a header
            default_date: Date for PR rows that have none (default today)

        Returns:
            Counts of applied rows plus every skipped row with its reason
        """
        first_row = 1
        if has_header and rows:
            rows = rows[1:]
            first_row = 2

        if kind == ImportKind.SWIMMERS:
            result = self.import_swimmers(rows, first_row)
        elif kind == ImportKind.MEETS:
            result = self.import_meets(rows, first_row)
        else:
            result = self.import_prs(rows, first_row, default_date)

        logger.info(
            "rows_imported",
            kind=kind.value,
            inserted=result.inserted,
            updated=result.updated,
            skipped=result.skipped_count,
        )
        return result

    def import_swimmers(self, rows: list[list[str]], first_row: int = 1) -> ImportResult:
        """Upsert swimmers by name: Name, Grad Year, Gender, Level, Notes.

        Blank cells never overwrite an existing swimmer's values.
        """
        result = ImportResult(kind=ImportKind.SWIMMERS)
        for row_num, row in enumerate(rows, start=first_row):
            cells = _cells(row, SWIMMER_COLUMNS)
            if not any(cells.values()):
                continue
            if not cells["name"]:
                result.add_skipped(row_num, "name: Swimmer name is required")
                continue

            existing = self.swimmer_dao.get(cells["name"])
            filled = {field: value for field, value in cells.items() if value}
            try:
                if existing is None:
                    swimmer = Swimmer.model_validate(filled)
                else:
                    swimmer = Swimmer.model_validate({**existing.model_dump(), **filled})
            except ValidationError as e:
                result.add_skipped(row_num, _reason(e))
                continue

            if existing is None:
                self.swimmer_dao.insert(swimmer)
                result.inserted += 1
            else:
                self.swimmer_dao.update(swimmer)
                result.updated += 1
        return result

    def import_meets(self, rows: list[list[str]], first_row: int = 1) -> ImportResult:
        """Add new meets: Meet, Date, Location, Course, Notes, Has JV?

        Meets whose name already exists are skipped. Preset rows are added
        for the new meets afterwards.
        """
        result = ImportResult(kind=ImportKind.MEETS)
        for row_num, row in enumerate(rows, start=first_row):
            cells = _cells(row, MEET_COLUMNS)
            if not any(cells.values()):
                continue
            try:
                parsed = MeetRow(**cells, row_number=row_num)
            except ValidationError as e:
                result.add_skipped(row_num, _reason(e))
                continue

            if self.meet_dao.get(parsed.name) is not None:
                result.add_skipped(row_num, f'Meet "{parsed.name}" already exists')
                continue

            self.meet_dao.insert(Meet.model_validate(parsed.model_dump(exclude={"row_number"})))
            result.inserted += 1

        if result.inserted:
            self.presets.ensure_preset_catalog()
        return result

    def import_prs(
        self,
        rows: list[list[str]],
        first_row: int = 1,
        default_date: datetime.date | None = None,
    ) -> ImportResult:
        """Log baseline PR times: Swimmer, Event, Time, Date (optional)."""
        result = ImportResult(kind=ImportKind.PRS)
        fallback_date = default_date or datetime.date.today()
        to_insert: list[Result] = []
        for row_num, row in enumerate(rows, start=first_row):
            cells = _cells(row, PR_COLUMNS)
            if not any(cells.values()):
                continue
            try:
                parsed = PRBaselineRow(**cells, row_number=row_num)
            except ValidationError as e:
                result.add_skipped(row_num, _reason(e))
                continue

            try:
                serial = parse_time_serial(parsed.time)
            except ValueError as e:
                result.add_skipped(row_num, f"time: {e}")
                continue

            to_insert.append(
                Result(
                    meet=PR_BASELINE_MEET,
                    event=parsed.event,
                    swimmer=parsed.swimmer,
                    final_time=serial,
                    notes=IMPORT_NOTES,
                    date=parsed.date or fallback_date,
                )
            )

        result.inserted = len(self.result_dao.insert_many(to_insert))
        return result
