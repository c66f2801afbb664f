"""Event catalog endpoints."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from swimroster import get_logger
from swimroster.api.dependencies import EntryServiceDep, EventCatalogDep, PresetResolverDep
from swimroster.errors import EntryValidationError
from swimroster.models import EventDef, EventType

logger = get_logger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


class EventCreate(BaseModel):
    """Request body for adding an event."""

    name: str
    type: EventType = EventType.INDIVIDUAL
    distance: int | None = None
    stroke: str = ""
    default_active: bool = True
    add_jv: bool = False


@router.get("", response_model=list[EventDef])
def list_events(catalog: EventCatalogDep) -> list[EventDef]:
    """List the event catalog in catalog order."""
    return catalog.list_events()


@router.post("", response_model=list[EventDef], status_code=status.HTTP_201_CREATED)
def create_event(data: EventCreate, entries: EntryServiceDep) -> list[EventDef]:
    """Add an event, and its JV variant when `add_jv` is set."""
    try:
        return entries.add_event(
            name=data.name,
            type=data.type,
            distance=data.distance,
            stroke=data.stroke,
            default_active=data.default_active,
            add_jv=data.add_jv,
        )
    except EntryValidationError as e:
        logger.warning("event_create_validation_failed", field=e.field, error=e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.post("/seed-baseline", response_model=list[EventDef])
def seed_baseline(catalog: EventCatalogDep, presets: PresetResolverDep) -> list[EventDef]:
    """Add the standard dual-meet events that are not yet in the catalog."""
    created = catalog.seed_baseline_events()
    presets.ensure_preset_catalog()
    return created


@router.post("/jv-variants", response_model=list[EventDef])
def create_jv_variants(catalog: EventCatalogDep) -> list[EventDef]:
    """Add a JV variant for every varsity event that lacks one."""
    return catalog.create_missing_jv_variants()
