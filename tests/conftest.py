"""Shared fixtures: in-memory table stores and services wired to them."""

import pytest

from swimroster.config import Settings
from swimroster.dao import (
    EventDAO,
    LineupDAO,
    MeetDAO,
    MeetEventPresetDAO,
    MemoryDAO,
    ResultDAO,
    SwimmerDAO,
)
from swimroster.models import EventDef, EventType, Meet, Swimmer
from swimroster.services import (
    EntryService,
    EventCatalogService,
    ImportService,
    LineupService,
    PresetResolver,
    PRService,
)


@pytest.fixture
def small_catalog() -> list[EventDef]:
    """Two varsity events, one relay, and one JV variant."""
    return [
        EventDef(name="200 Medley Relay", type=EventType.RELAY, distance=200, stroke="Medley", default_active=True),
        EventDef(name="50 Freestyle", distance=50, stroke="Freestyle", default_active=True),
        EventDef(name="100 Butterfly", distance=100, stroke="Butterfly", default_active=False),
        EventDef(name="50 Freestyle (JV)", distance=50, stroke="Freestyle", default_active=True),
    ]


@pytest.fixture
def roster() -> list[Swimmer]:
    return [
        Swimmer(name="Avery", grad_year=2026, gender="F", level="Varsity"),
        Swimmer(name="Blake", grad_year=2028, gender="M", level="JV"),
        Swimmer(name="Casey", grad_year=2027, gender="F", level="varsity"),
        Swimmer(name="Drew", grad_year=2029, gender="M"),
    ]


@pytest.fixture
def daos(small_catalog, roster) -> dict[str, MemoryDAO]:
    """One in-memory store per table, with events, swimmers, and one JV meet."""
    return {
        "swimmers": MemoryDAO.for_table(SwimmerDAO, roster),
        "events": MemoryDAO.for_table(EventDAO, small_catalog),
        "meets": MemoryDAO.for_table(MeetDAO, [Meet(name="Dual A", has_jv=True)]),
        "meet_event_presets": MemoryDAO.for_table(MeetEventPresetDAO),
        "lineup_assignments": MemoryDAO.for_table(LineupDAO),
        "results": MemoryDAO.for_table(ResultDAO),
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(max_individual_events=2, max_relay_events=2, _env_file=None)


@pytest.fixture
def preset_resolver(daos) -> PresetResolver:
    return PresetResolver(
        daos["meets"], daos["events"], daos["meet_event_presets"], daos["lineup_assignments"]
    )


@pytest.fixture
def catalog(daos) -> EventCatalogService:
    return EventCatalogService(daos["events"])


@pytest.fixture
def lineup_service(daos, settings) -> LineupService:
    return LineupService(daos["swimmers"], daos["lineup_assignments"], daos["meets"], settings)


@pytest.fixture
def pr_service(daos) -> PRService:
    return PRService(daos["results"])


@pytest.fixture
def entry_service(daos, preset_resolver) -> EntryService:
    return EntryService(
        daos["swimmers"], daos["events"], daos["meets"], daos["results"], preset_resolver
    )


@pytest.fixture
def import_service(daos, preset_resolver) -> ImportService:
    return ImportService(daos["swimmers"], daos["meets"], daos["results"], preset_resolver)
