"""Lineup eligibility checking and the coach packet view.

`check` is pure and recomputes everything from its inputs on each call;
`LineupService` loads a meet's stored lineup and roster and hands them over.
"""

from collections import Counter

from swimroster.config import Settings, get_settings
from swimroster.dao.base import TableDAO
from swimroster.errors import RecordNotFoundError
from swimroster.logging import get_logger
from swimroster.models.event import EventType, is_jv_event_name
from swimroster.models.lineup import LineupAssignment, LineupLimits
from swimroster.models.meet import Meet
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
from swimroster.models.swimmer import Swimmer

logger = get_logger(__name__)

PARTICIPANT_SEPARATOR = " • "
NO_PARTICIPANTS = "—"
NO_ACTIVE_EVENTS = "(no active events)"


def _row_number(row: LineupAssignment, index: int) -> int:
    return row.position or index


def check(
    assignments: list[LineupAssignment],
    roster: list[Swimmer],
    limits: LineupLimits,
) -> LineupReport:
    """Check one meet's lineup against event limits and swimmer levels.

    Rows that are inactive or have no event name are skipped. A relay row
    listing a swimmer in two legs is reported once as a duplicate, but each
    leg counts toward that swimmer's relay total and level check.

    Args:
        assignments: The meet's lineup rows, in lineup order
        roster: All rostered swimmers
        limits: Maximum individual and relay events per swimmer

    Returns:
        A report with utilization for every rostered swimmer and every
        violation found
    """
    levels = {swimmer.name: swimmer for swimmer in roster}
    individual_counts: Counter[str] = Counter()
    relay_counts: Counter[str] = Counter()
    duplicate_leg: list[DuplicateLegViolation] = []
    level_mismatch: list[LevelMismatch] = []

    def check_level(row_number: int, event_name: str, name: str) -> None:
        swimmer = levels.get(name)
        if is_jv_event_name(event_name) and swimmer is not None and swimmer.is_varsity:
            level_mismatch.append(LevelMismatch(row=row_number, event_name=event_name, swimmer=name))

    for index, row in enumerate(assignments, start=1):
        if not row.counts:
            continue
        row_number = _row_number(row, index)

        if row.type == EventType.INDIVIDUAL:
            if row.individual_swimmer:
                individual_counts[row.individual_swimmer] += 1
                check_level(row_number, row.event_name, row.individual_swimmer)

        elif row.type == EventType.RELAY:
            legs = row.relay_participants
            leg_counts = Counter(legs)
            duplicates = [name for name, n in leg_counts.items() if n > 1]
            if duplicates:
                duplicate_leg.append(
                    DuplicateLegViolation(
                        row=row_number, event_name=row.event_name, duplicate_names=duplicates
                    )
                )
            for name in legs:
                relay_counts[name] += 1
                check_level(row_number, row.event_name, name)

    utilization: list[SwimmerUtilization] = []
    over_limit: list[OverLimitViolation] = []
    for name in sorted(levels):
        individual = individual_counts[name]
        relay = relay_counts[name]
        over_individual = individual > limits.max_individual
        over_relay = relay > limits.max_relay
        utilization.append(
            SwimmerUtilization(
                name=name,
                individual_count=individual,
                relay_count=relay,
                max_individual=limits.max_individual,
                max_relay=limits.max_relay,
                status=UtilizationStatus.OVER if over_individual or over_relay else UtilizationStatus.OK,
            )
        )
        if over_individual:
            over_limit.append(
                OverLimitViolation(swimmer=name, dimension=LimitDimension.INDIVIDUAL, count=individual)
            )
        if over_relay:
            over_limit.append(
                OverLimitViolation(swimmer=name, dimension=LimitDimension.RELAY, count=relay)
            )

    return LineupReport(
        utilization=utilization,
        over_limit=over_limit,
        duplicate_leg=duplicate_leg,
        level_mismatch=level_mismatch,
    )


def build_coach_packet(assignments: list[LineupAssignment]) -> list[CoachPacketRow]:
    """Printable rows for the active events of a lineup."""
    packet = []
    for row in assignments:
        if not row.counts:
            continue
        if row.type == EventType.RELAY:
            names = row.relay_participants
        else:
            names = [row.individual_swimmer] if row.individual_swimmer else []
        packet.append(
            CoachPacketRow(
                event=row.event_name,
                type=row.type.value if row.type else "",
                heat=row.heat,
                lane=row.lane,
                participants=PARTICIPANT_SEPARATOR.join(names) or NO_PARTICIPANTS,
            )
        )
    return packet or [CoachPacketRow(event=NO_ACTIVE_EVENTS)]


class LineupService:
    """Loads, saves, and checks stored meet lineups."""

    def __init__(
        self,
        swimmer_dao: TableDAO[Swimmer],
        lineup_dao: TableDAO[LineupAssignment],
        meet_dao: TableDAO[Meet],
        settings: Settings | None = None,
    ):
        self.swimmer_dao = swimmer_dao
        self.lineup_dao = lineup_dao
        self.meet_dao = meet_dao
        self.settings = settings or get_settings()

    def _require_meet(self, meet_name: str) -> Meet:
        meet = self.meet_dao.get(meet_name)
        if meet is None:
            raise RecordNotFoundError("Meet", meet_name)
        return meet

    def get_lineup(self, meet_name: str) -> list[LineupAssignment]:
        self._require_meet(meet_name)
        return sorted(self.lineup_dao.find(meet=meet_name), key=lambda row: row.position)

    def save_lineup(self, meet_name: str, rows: list[LineupAssignment]) -> list[LineupAssignment]:
        """Replace a meet's lineup, numbering the rows in the order given."""
        self._require_meet(meet_name)
        numbered = [
            row.model_copy(update={"meet": meet_name, "position": position})
            for position, row in enumerate(rows, start=1)
        ]
        self.lineup_dao.delete(meet=meet_name)
        stored = self.lineup_dao.insert_many(numbered)
        logger.info("lineup_saved", meet=meet_name, rows=len(stored))
        return stored

    def check_meet(self, meet_name: str) -> LineupReport:
        """Check a meet's stored lineup using the configured limits."""
        assignments = self.get_lineup(meet_name)
        report = check(assignments, self.swimmer_dao.get_all(), self.settings.limits)
        logger.info(
            "lineup_checked",
            meet=meet_name,
            over_limit=len(report.over_limit),
            duplicate_leg=len(report.duplicate_leg),
            level_mismatch=len(report.level_mismatch),
        )
        return report

    def coach_packet(self, meet_name: str) -> list[CoachPacketRow]:
        return build_coach_packet(self.get_lineup(meet_name))
