"""Pydantic schemas for bulk row imports."""

import datetime
from enum import StrEnum

from pydantic import BaseModel, field_validator

from swimroster.models.meet import Course

TRUE_VALUES = ("true", "yes", "y", "1")


class ImportKind(StrEnum):
    """Which table a batch of rows is imported into."""

    SWIMMERS = "swimmers"
    MEETS = "meets"
    PRS = "prs"


def parse_date(text: str) -> datetime.date:
    """Parse YYYY-MM-DD or M/D/YYYY.

    Raises:
        ValueError: If the text is in neither format
    """
    text = text.strip()
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.datetime.strptime(text, "%m/%d/%Y").date()
    except ValueError:
        raise ValueError(f"Invalid date format: '{text}'. Expected YYYY-MM-DD or M/D/YYYY") from None


def parse_has_jv(text: str | None) -> bool:
    """Blank means the meet has a JV division."""
    value = (text or "").strip().lower()
    return not value or value in TRUE_VALUES


class MeetRow(BaseModel):
    """A row of the meets import: Meet, Date, Location, Course, Notes, Has JV?"""

    name: str
    date: datetime.date | None = None
    location: str = ""
    course: Course | None = None
    notes: str = ""
    has_jv: bool = True
    row_number: int = 0

    @field_validator("name", "location", "notes", mode="before")
    @classmethod
    def strip_strings(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def require_name(cls, v: str) -> str:
        if not v:
            raise ValueError("Meet name is required")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def parse_date_text(cls, v: object) -> object:
        if isinstance(v, str):
            return parse_date(v) if v.strip() else None
        return v

    @field_validator("course", mode="before")
    @classmethod
    def normalize_course(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper() or None
        return v

    @field_validator("has_jv", mode="before")
    @classmethod
    def parse_has_jv_text(cls, v: object) -> object:
        if v is None or isinstance(v, str):
            return parse_has_jv(v)
        return v


class PRBaselineRow(BaseModel):
    """A row of the PR baseline import: Swimmer, Event, Time, Date (optional)."""

    swimmer: str
    event: str
    time: str
    date: datetime.date | None = None
    row_number: int = 0

    @field_validator("swimmer", "event", "time", mode="before")
    @classmethod
    def strip_required(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("value is required")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def parse_date_text(cls, v: object) -> object:
        if isinstance(v, str):
            return parse_date(v) if v.strip() else None
        return v


class SkippedRow(BaseModel):
    """A row left out of an import, and why."""

    row_number: int
    reason: str


class ImportResult(BaseModel):
    """Outcome of one bulk import.

    `inserted` counts applied rows only; callers must not assume every
    submitted row was applied.
    """

    kind: ImportKind
    inserted: int = 0
    updated: int = 0
    skipped: list[SkippedRow] = []

    def add_skipped(self, row: int, reason: str) -> None:
        """Record a row that was not applied."""
        self.skipped.append(SkippedRow(row_number=row, reason=reason))

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
