"""FastAPI dependencies for dependency injection.

Usage in routes:
    from swimroster.api.dependencies import PresetResolverDep

    @router.get("/meets/{meet_name}/active-map")
    def active_map(meet_name: str, presets: PresetResolverDep):
        return presets.resolve_active_map(meet_name)

Tests replace the DAO getters with in-memory stores through
`app.dependency_overrides`; the service getters build on whatever the DAO
getters return.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from supabase import Client, create_client

from swimroster.config import Settings, get_settings
from swimroster.dao.base import TableDAO
from swimroster.dao.event_dao import EventDAO
from swimroster.dao.lineup_dao import LineupDAO
from swimroster.dao.meet_dao import MeetDAO, MeetEventPresetDAO
from swimroster.dao.result_dao import ResultDAO
from swimroster.dao.swimmer_dao import SwimmerDAO
from swimroster.models import EventDef, LineupAssignment, Meet, MeetEventPreset, Result, Swimmer
from swimroster.services.entry_service import EntryService
from swimroster.services.event_catalog import EventCatalogService
from swimroster.services.import_service import ImportService
from swimroster.services.lineup_checker import LineupService
from swimroster.services.pr_aggregator import PRService
from swimroster.services.preset_resolver import PresetResolver


def get_settings_dep() -> Settings:
    """Get application settings (dependency wrapper)."""
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]


@lru_cache
def get_supabase_client(supabase_url: str, supabase_key: str) -> Client:
    """Create cached Supabase client."""
    return create_client(supabase_url, supabase_key)


def get_supabase(settings: SettingsDep) -> Client:
    """Get Supabase client for database operations."""
    if not settings.supabase_url or settings.supabase_key is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not configured",
        )
    return get_supabase_client(
        settings.supabase_url,
        settings.supabase_key.get_secret_value(),
    )


SupabaseDep = Annotated[Client, Depends(get_supabase)]


# =============================================================================
# DAOs
# =============================================================================


def get_swimmer_dao(client: SupabaseDep) -> TableDAO[Swimmer]:
    """Get SwimmerDAO instance."""
    return SwimmerDAO(client)


def get_event_dao(client: SupabaseDep) -> TableDAO[EventDef]:
    """Get EventDAO instance."""
    return EventDAO(client)


def get_meet_dao(client: SupabaseDep) -> TableDAO[Meet]:
    """Get MeetDAO instance."""
    return MeetDAO(client)


def get_preset_dao(client: SupabaseDep) -> TableDAO[MeetEventPreset]:
    """Get MeetEventPresetDAO instance."""
    return MeetEventPresetDAO(client)


def get_lineup_dao(client: SupabaseDep) -> TableDAO[LineupAssignment]:
    """Get LineupDAO instance."""
    return LineupDAO(client)


def get_result_dao(client: SupabaseDep) -> TableDAO[Result]:
    """Get ResultDAO instance."""
    return ResultDAO(client)


SwimmerDAODep = Annotated[TableDAO[Swimmer], Depends(get_swimmer_dao)]
EventDAODep = Annotated[TableDAO[EventDef], Depends(get_event_dao)]
MeetDAODep = Annotated[TableDAO[Meet], Depends(get_meet_dao)]
PresetDAODep = Annotated[TableDAO[MeetEventPreset], Depends(get_preset_dao)]
LineupDAODep = Annotated[TableDAO[LineupAssignment], Depends(get_lineup_dao)]
ResultDAODep = Annotated[TableDAO[Result], Depends(get_result_dao)]


# =============================================================================
# Services
# =============================================================================


def get_event_catalog(event_dao: EventDAODep) -> EventCatalogService:
    return EventCatalogService(event_dao)


def get_preset_resolver(
    meet_dao: MeetDAODep,
    event_dao: EventDAODep,
    preset_dao: PresetDAODep,
    lineup_dao: LineupDAODep,
) -> PresetResolver:
    return PresetResolver(meet_dao, event_dao, preset_dao, lineup_dao)


def get_lineup_service(
    swimmer_dao: SwimmerDAODep,
    lineup_dao: LineupDAODep,
    meet_dao: MeetDAODep,
    settings: SettingsDep,
) -> LineupService:
    return LineupService(swimmer_dao, lineup_dao, meet_dao, settings)


def get_pr_service(result_dao: ResultDAODep) -> PRService:
    return PRService(result_dao)


EventCatalogDep = Annotated[EventCatalogService, Depends(get_event_catalog)]
PresetResolverDep = Annotated[PresetResolver, Depends(get_preset_resolver)]
LineupServiceDep = Annotated[LineupService, Depends(get_lineup_service)]
PRServiceDep = Annotated[PRService, Depends(get_pr_service)]


def get_entry_service(
    swimmer_dao: SwimmerDAODep,
    event_dao: EventDAODep,
    meet_dao: MeetDAODep,
    result_dao: ResultDAODep,
    presets: PresetResolverDep,
) -> EntryService:
    return EntryService(swimmer_dao, event_dao, meet_dao, result_dao, presets)


def get_import_service(
    swimmer_dao: SwimmerDAODep,
    meet_dao: MeetDAODep,
    result_dao: ResultDAODep,
    presets: PresetResolverDep,
) -> ImportService:
    return ImportService(swimmer_dao, meet_dao, result_dao, presets)


EntryServiceDep = Annotated[EntryService, Depends(get_entry_service)]
ImportServiceDep = Annotated[ImportService, Depends(get_import_service)]
