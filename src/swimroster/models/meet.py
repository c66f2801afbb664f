"""Meet and per-meet event preset models."""

import datetime
from enum import StrEnum

from pydantic import BaseModel, field_validator


class Course(StrEnum):
    """Pool course types."""

    SCY = "SCY"  # Short Course Yards
    SCM = "SCM"  # Short Course Meters
    LCM = "LCM"  # Long Course Meters


class Meet(BaseModel):
    """A swim meet on the team's schedule, keyed by name."""

    name: str
    date: datetime.date | None = None
    location: str = ""
    course: Course | None = None
    notes: str = ""
    has_jv: bool = True  # Meet runs a JV division

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Meet name is required")
        return v

    @field_validator("course", mode="before")
    @classmethod
    def normalize_course(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().upper()
            return v or None
        return v

    @field_validator("date", mode="before")
    @classmethod
    def blank_date(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def __str__(self) -> str:
        return self.name


class MeetEventPreset(BaseModel):
    """Whether an event is swum at a given meet.

    One row per (meet, event). Rows are only ever added by catalog
    maintenance; a coach's manual edits to `active` are kept.
    """

    meet: str
    event: str
    active: bool
    notes: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.meet, self.event)
