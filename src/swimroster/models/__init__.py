"""Pydantic models for meet rosters, lineups, and results."""

from swimroster.models.event import (
    JV_SUFFIX,
    EventDef,
    EventType,
    base_event_name,
    is_jv_event_name,
    jv_variant_name,
)
from swimroster.models.lineup import LineupAssignment, LineupLimits
from swimroster.models.meet import Course, Meet, MeetEventPreset
from swimroster.models.report import (
    CoachPacketRow,
    DuplicateLegViolation,
    LevelMismatch,
    LimitDimension,
    LineupReport,
    OverLimitViolation,
    SwimmerUtilization,
    UtilizationStatus,
)
from swimroster.models.result import (
    PRRecord,
    Result,
    format_delta,
    format_serial,
    parse_time_serial,
)
from swimroster.models.swimmer import Gender, Level, Swimmer

__all__ = [
    # Event
    "EventDef",
    "EventType",
    "JV_SUFFIX",
    "base_event_name",
    "is_jv_event_name",
    "jv_variant_name",
    # Lineup
    "LineupAssignment",
    "LineupLimits",
    # Meet
    "Course",
    "Meet",
    "MeetEventPreset",
    # Report
    "CoachPacketRow",
    "DuplicateLegViolation",
    "LevelMismatch",
    "LimitDimension",
    "LineupReport",
    "OverLimitViolation",
    "SwimmerUtilization",
    "UtilizationStatus",
    # Result
    "PRRecord",
    "Result",
    "format_delta",
    "format_serial",
    "parse_time_serial",
    # Swimmer
    "Gender",
    "Level",
    "Swimmer",
]
