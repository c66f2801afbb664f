"""Meet and per-meet preset endpoints."""

import datetime

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from swimroster import get_logger
from swimroster.api.dependencies import EntryServiceDep, MeetDAODep, PresetResolverDep
from swimroster.errors import EntryValidationError, RecordNotFoundError
from swimroster.models import Course, Meet, MeetEventPreset

logger = get_logger(__name__)

router = APIRouter(prefix="/meets", tags=["meets"])
presets_router = APIRouter(prefix="/presets", tags=["presets"])


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================


class MeetCreate(BaseModel):
    """Request body for adding a meet."""

    name: str
    date: datetime.date | None = None
    location: str = ""
    course: Course | None = None
    notes: str = ""
    has_jv: bool = True


class PresetUpdate(BaseModel):
    """Request body for overriding one event at one meet."""

    active: bool
    notes: str | None = None


def _not_found(e: RecordNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# =============================================================================
# MEETS
# =============================================================================


@router.get("", response_model=list[Meet])
def list_meets(dao: MeetDAODep) -> list[Meet]:
    return dao.get_all()


@router.post("", response_model=Meet, status_code=status.HTTP_201_CREATED)
def create_meet(data: MeetCreate, entries: EntryServiceDep) -> Meet:
    """Add a meet; it gets a preset row for every catalog event."""
    try:
        return entries.add_meet(**data.model_dump())
    except EntryValidationError as e:
        logger.warning("meet_create_validation_failed", field=e.field, error=e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.get("/{meet_name}", response_model=Meet)
def get_meet(meet_name: str, dao: MeetDAODep) -> Meet:
    meet = dao.get(meet_name)
    if meet is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meet not found")
    return meet


# =============================================================================
# PRESETS
# =============================================================================


@router.get("/{meet_name}/presets", response_model=list[MeetEventPreset])
def list_meet_presets(meet_name: str, presets: PresetResolverDep) -> list[MeetEventPreset]:
    try:
        return presets.list_presets(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.patch("/{meet_name}/presets/{event_name}", response_model=MeetEventPreset)
def update_meet_preset(
    meet_name: str, event_name: str, data: PresetUpdate, presets: PresetResolverDep
) -> MeetEventPreset:
    """Turn one event on or off for a meet."""
    try:
        return presets.set_preset(meet_name, event_name, data.active, data.notes)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.get("/{meet_name}/active-map")
def get_active_map(meet_name: str, presets: PresetResolverDep) -> dict[str, bool]:
    """Effective active flag of every catalog event at the meet."""
    try:
        return presets.resolve_active_map(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.get("/{meet_name}/active-events")
def get_active_events(meet_name: str, presets: PresetResolverDep) -> list[str]:
    return presets.list_active_events(meet_name)


@router.post("/{meet_name}/disable-jv", response_model=list[MeetEventPreset])
def disable_jv(meet_name: str, presets: PresetResolverDep) -> list[MeetEventPreset]:
    """Turn off JV presets for a meet without a JV division."""
    try:
        return presets.force_disable_jv_for_meet(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.post("/{meet_name}/restore-jv", response_model=list[MeetEventPreset])
def restore_jv(meet_name: str, presets: PresetResolverDep) -> list[MeetEventPreset]:
    """Reset a JV meet's JV presets to the catalog defaults."""
    try:
        return presets.restore_jv_defaults(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@presets_router.post("/ensure", response_model=list[MeetEventPreset])
def ensure_presets(presets: PresetResolverDep) -> list[MeetEventPreset]:
    """Add missing preset rows for every meet and event."""
    return presets.ensure_preset_catalog()
