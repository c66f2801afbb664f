"""Lineup assignment rows for a meet's working lineup."""

from pydantic import BaseModel, Field, field_validator

from swimroster.models.event import EventType

MAX_RELAY_LEGS = 4


class LineupAssignment(BaseModel):
    """One event row of a meet lineup.

    Individual rows use `individual_swimmer`; relay rows use up to four
    `relay_legs`, any of which may be blank.
    """

    meet: str = ""
    position: int = 0  # 1-based row number within the meet's lineup

    active: bool = False
    event_name: str = ""
    type: EventType | None = None
    distance: int | None = None
    stroke: str = ""
    heat: str = ""
    lane: str = ""

    individual_swimmer: str = ""
    relay_legs: list[str] = Field(default_factory=list)

    @field_validator("event_name", "individual_swimmer", "stroke", "heat", "lane", mode="before")
    @classmethod
    def strip_strings(cls, v: object) -> object:
        if v is None:
            return ""
        if isinstance(v, int | float):
            return str(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().title()
            return v or None
        return v

    @field_validator("distance", mode="before")
    @classmethod
    def blank_distance(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("relay_legs", mode="before")
    @classmethod
    def validate_relay_legs(cls, v: object) -> object:
        if v is None:
            return []
        if isinstance(v, list | tuple):
            legs = ["" if leg is None else str(leg).strip() for leg in v]
            if len(legs) > MAX_RELAY_LEGS:
                raise ValueError(f"A relay has at most {MAX_RELAY_LEGS} legs")
            return legs
        return v

    @property
    def counts(self) -> bool:
        """Only active rows with an event name count toward anything."""
        return self.active and bool(self.event_name)

    @property
    def relay_participants(self) -> list[str]:
        """Non-blank relay legs in slot order."""
        return [leg for leg in self.relay_legs if leg]


class LineupLimits(BaseModel):
    """Per-swimmer event-count limits for one meet."""

    max_individual: int = 2
    max_relay: int = 2
