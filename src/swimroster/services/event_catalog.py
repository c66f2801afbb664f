"""Event catalog maintenance and the JV-variant relation."""

from collections.abc import Iterable

from swimroster.dao.base import TableDAO
from swimroster.logging import get_logger
from swimroster.models.event import (
    EventDef,
    EventType,
    base_event_name,
    is_jv_event_name,
    jv_variant_name,
)

logger = get_logger(__name__)


def _event(name: str, type_: EventType, distance: int, stroke: str, active: bool) -> EventDef:
    return EventDef(name=name, type=type_, distance=distance, stroke=stroke, default_active=active)


# High school dual-meet order; extras at the end default off
BASELINE_EVENTS: list[EventDef] = [
    _event("200 Medley Relay", EventType.RELAY, 200, "Medley", True),
    _event("200 Freestyle", EventType.INDIVIDUAL, 200, "Freestyle", True),
    _event("200 Individual Medley", EventType.INDIVIDUAL, 200, "IM", True),
    _event("50 Freestyle", EventType.INDIVIDUAL, 50, "Freestyle", True),
    _event("100 Butterfly", EventType.INDIVIDUAL, 100, "Butterfly", True),
    _event("100 Freestyle", EventType.INDIVIDUAL, 100, "Freestyle", True),
    _event("500 Freestyle", EventType.INDIVIDUAL, 500, "Freestyle", True),
    _event("200 Freestyle Relay", EventType.RELAY, 200, "Freestyle", True),
    _event("100 Backstroke", EventType.INDIVIDUAL, 100, "Backstroke", True),
    _event("100 Breaststroke", EventType.INDIVIDUAL, 100, "Breaststroke", True),
    _event("400 Freestyle Relay", EventType.RELAY, 400, "Freestyle", True),
    _event("200 Backstroke", EventType.INDIVIDUAL, 200, "Backstroke", False),
    _event("200 Breaststroke", EventType.INDIVIDUAL, 200, "Breaststroke", False),
    _event("200 Butterfly", EventType.INDIVIDUAL, 200, "Butterfly", False),
    _event("400 Individual Medley", EventType.INDIVIDUAL, 400, "IM", False),
    _event("50 Butterfly", EventType.INDIVIDUAL, 50, "Butterfly", False),
    _event("50 Backstroke", EventType.INDIVIDUAL, 50, "Backstroke", False),
    _event("50 Breaststroke", EventType.INDIVIDUAL, 50, "Breaststroke", False),
]


class JVVariantIndex:
    """Base event name -> JV variant name, derived from one catalog snapshot.

    Events are linked to their JV counterparts by name only; this index is
    the single place that relation is worked out.
    """

    def __init__(self, events: Iterable[EventDef]):
        self.names: list[str] = [event.name for event in events]
        self._known = set(self.names)
        self.jv_names: list[str] = [name for name in self.names if is_jv_event_name(name)]
        self.variants: dict[str, str] = {}
        for name in self.jv_names:
            self.variants.setdefault(base_event_name(name), name)

    @staticmethod
    def is_variant(name: str) -> bool:
        return is_jv_event_name(name)

    def variant_of(self, base_name: str) -> str | None:
        return self.variants.get(base_name)

    def bases_missing_variant(self) -> list[str]:
        """Varsity events with no event named exactly '<name> (JV)', in catalog order."""
        return [
            name
            for name in self.names
            if not is_jv_event_name(name) and jv_variant_name(name) not in self._known
        ]


def missing_jv_variants(events: list[EventDef]) -> list[EventDef]:
    """JV copies to add so every varsity event has a counterpart.

    Each copy keeps the type, distance, stroke, and default-active flag of
    its varsity event. Re-running against the extended catalog yields [].
    """
    by_name = {event.name: event for event in events}
    missing = JVVariantIndex(events).bases_missing_variant()
    return [by_name[name].as_jv_variant() for name in dict.fromkeys(missing)]


class EventCatalogService:
    """Administrative operations on the event catalog."""

    def __init__(self, event_dao: TableDAO[EventDef]):
        self.event_dao = event_dao

    def list_events(self) -> list[EventDef]:
        return self.event_dao.get_all()

    def create_missing_jv_variants(self) -> list[EventDef]:
        """Append a JV variant for every varsity event lacking one.

        Returns:
            The events that were inserted
        """
        created = self.event_dao.insert_many(missing_jv_variants(self.event_dao.get_all()))
        logger.info("jv_variants_created", count=len(created))
        return created

    def seed_baseline_events(self) -> list[EventDef]:
        """Insert the standard dual-meet events not already in the catalog."""
        existing = {event.name for event in self.event_dao.get_all()}
        to_add = [event for event in BASELINE_EVENTS if event.name not in existing]
        created = self.event_dao.insert_many(to_add)
        logger.info("baseline_events_seeded", count=len(created), skipped=len(BASELINE_EVENTS) - len(created))
        return created
