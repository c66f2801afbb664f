"""Lineup check report models."""

from enum import StrEnum

from pydantic import BaseModel, computed_field


class UtilizationStatus(StrEnum):
    OK = "OK"
    OVER = "OVER"


class LimitDimension(StrEnum):
    INDIVIDUAL = "Individual"
    RELAY = "Relay"


class SwimmerUtilization(BaseModel):
    """How many active events a rostered swimmer is entered in."""

    name: str
    individual_count: int
    relay_count: int
    max_individual: int
    max_relay: int
    status: UtilizationStatus


class OverLimitViolation(BaseModel):
    swimmer: str
    dimension: LimitDimension
    count: int


class DuplicateLegViolation(BaseModel):
    """A relay row naming the same swimmer in more than one leg."""

    row: int
    event_name: str
    duplicate_names: list[str]


class LevelMismatch(BaseModel):
    """A varsity swimmer entered in a JV event."""

    row: int
    event_name: str
    swimmer: str


class LineupReport(BaseModel):
    """Full result of checking one lineup. Empty lists are kept, never omitted."""

    utilization: list[SwimmerUtilization] = []
    over_limit: list[OverLimitViolation] = []
    duplicate_leg: list[DuplicateLegViolation] = []
    level_mismatch: list[LevelMismatch] = []

    @computed_field
    @property
    def has_violations(self) -> bool:
        return bool(self.over_limit or self.duplicate_leg or self.level_mismatch)


class CoachPacketRow(BaseModel):
    """One printable line of a meet's coach packet."""

    event: str
    type: str = ""
    heat: str = ""
    lane: str = ""
    participants: str = ""
