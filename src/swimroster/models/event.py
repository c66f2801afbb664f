"""Event definitions and the junior-varsity naming convention.

A JV event is linked to its varsity counterpart by name only:
"100 Backstroke (JV)" is the JV variant of "100 Backstroke".
"""

import re
from enum import StrEnum

from pydantic import BaseModel, field_validator

JV_SUFFIX = " (JV)"

# Trailing whitespace after the marker is tolerated, as entered by hand
_JV_MARKER = re.compile(r"\(JV\)\s*$")
_JV_TAIL = re.compile(r"\s*\(JV\)\s*$")


def is_jv_event_name(name: str) -> bool:
    """Check whether an event name marks a JV variant."""
    return bool(_JV_MARKER.search(name or ""))


def base_event_name(name: str) -> str:
    """Strip the JV marker, e.g. '50 Freestyle (JV)' -> '50 Freestyle'."""
    return _JV_TAIL.sub("", name)


def jv_variant_name(name: str) -> str:
    """Name of the JV counterpart of a varsity event."""
    return f"{name}{JV_SUFFIX}"


class EventType(StrEnum):
    """Whether an event is swum by one swimmer or a relay team."""

    INDIVIDUAL = "Individual"
    RELAY = "Relay"


class EventDef(BaseModel):
    """A race in the team's event catalog (e.g., '100 Backstroke')."""

    name: str
    type: EventType = EventType.INDIVIDUAL
    distance: int | None = None
    stroke: str = ""
    default_active: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Event name is required")
        return v

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().title()
            return v or EventType.INDIVIDUAL
        return v

    @field_validator("distance", mode="before")
    @classmethod
    def blank_distance(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_jv(self) -> bool:
        return is_jv_event_name(self.name)

    @property
    def is_relay(self) -> bool:
        return self.type == EventType.RELAY

    @property
    def base_name(self) -> str:
        return base_event_name(self.name)

    def as_jv_variant(self) -> "EventDef":
        """Copy of this event under its JV name, same type/distance/stroke/default."""
        return self.model_copy(update={"name": jv_variant_name(self.name)})

    def __str__(self) -> str:
        return self.name
