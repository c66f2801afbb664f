"""Race results, personal records, and the serial time codec.

Times are stored as fractional-day serials: 1.0 is 24 hours, so a
result's seconds are `serial * 86400`. "1:05.32" is 65.32 / 86400.
"""

import datetime
import re

from pydantic import BaseModel, computed_field, field_validator

SECONDS_PER_DAY = 86400

# m:ss[.fraction] or ss[.fraction]
TIME_PATTERN_MINUTES = re.compile(r"^(\d+):(\d{1,2})(?:\.(\d+))?$")
TIME_PATTERN_SECONDS = re.compile(r"^(\d+(?:\.\d+)?)$")


def parse_time_serial(time_str: str) -> float:
    """Parse a swim time string into a day serial.

    Examples:
        "28.75"   -> 28.75 / 86400
        "1:05.32" -> 65.32 / 86400
        "5:12"    -> 312 / 86400

    Raises:
        ValueError: If the text is not m:ss[.ff] or ss[.ff]
    """
    text = (time_str or "").strip()

    match = TIME_PATTERN_MINUTES.match(text)
    if match:
        minutes = int(match.group(1))
        seconds = int(match.group(2))
        if match.group(3):
            seconds += float(f"0.{match.group(3)}")
        return (minutes * 60 + seconds) / SECONDS_PER_DAY

    match = TIME_PATTERN_SECONDS.match(text)
    if match:
        return float(match.group(1)) / SECONDS_PER_DAY

    raise ValueError(f"Invalid time format: '{time_str}'. Expected mm:ss.xx or ss.xx")


def serial_to_seconds(serial: float) -> float:
    return serial * SECONDS_PER_DAY


def format_serial(serial: float) -> str:
    """Format a day serial as M:SS.cc or SS.cc."""
    centiseconds = int(round(serial_to_seconds(serial) * 100))
    minutes, rest = divmod(centiseconds, 6000)
    seconds = rest / 100
    if minutes > 0:
        return f"{minutes}:{seconds:05.2f}"
    return f"{seconds:.2f}"


def format_delta(serial: float) -> str:
    """Format a signed serial difference, e.g. '+1.20' or '-0:01.05'."""
    sign = "-" if serial < 0 else "+"
    return f"{sign}{format_serial(abs(serial))}"


class Result(BaseModel):
    """One row of the result log.

    Rows may be incomplete (blank swimmer, event, or final time); such rows
    are kept in the log but never count toward personal records.
    """

    meet: str = ""
    event: str = ""
    swimmer: str = ""
    seed_time: float | None = None
    final_time: float | None = None
    place: int | None = None
    notes: str = ""
    date: datetime.date | None = None

    @field_validator("meet", "event", "swimmer", mode="before")
    @classmethod
    def strip_names(cls, v: object) -> object:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("seed_time", "final_time", "place", "date", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def counts_toward_prs(self) -> bool:
        return bool(self.swimmer) and bool(self.event) and self.final_time is not None

    @computed_field
    @property
    def final_time_formatted(self) -> str | None:
        return format_serial(self.final_time) if self.final_time is not None else None


class PRRecord(BaseModel):
    """Best and most recent swim for one (swimmer, event) pair.

    Derived from the result log on demand; never the source of truth.
    """

    swimmer: str
    event: str
    best_time: float
    best_meet: str = ""
    best_date: datetime.date | None = None
    race_count: int = 0
    latest_time: float | None = None
    latest_meet: str = ""
    latest_date: datetime.date | None = None

    @computed_field
    @property
    def delta(self) -> float | None:
        """Latest minus best; positive means slower than the PR."""
        if self.latest_time is None:
            return None
        return self.latest_time - self.best_time

    @computed_field
    @property
    def best_time_formatted(self) -> str:
        return format_serial(self.best_time)

    @computed_field
    @property
    def latest_time_formatted(self) -> str | None:
        return format_serial(self.latest_time) if self.latest_time is not None else None
