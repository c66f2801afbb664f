"""Swimmer roster endpoints."""

import datetime

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from swimroster import get_logger
from swimroster.api.dependencies import EntryServiceDep, PRServiceDep, SwimmerDAODep
from swimroster.errors import EntryValidationError
from swimroster.models import Gender, Level, PRRecord, Swimmer

logger = get_logger(__name__)

router = APIRouter(prefix="/swimmers", tags=["swimmers"])


class SwimmerCreate(BaseModel):
    """Request body for adding or updating a swimmer with baseline PRs.

    `prs` maps event name to a time string such as "1:05.32".
    """

    name: str
    grad_year: int | None = None
    gender: Gender | None = None
    level: Level | None = None
    date: datetime.date | None = None
    prs: dict[str, str] = {}


class SwimmerSaved(BaseModel):
    created: bool
    pr_count: int


@router.get("", response_model=list[Swimmer])
def list_swimmers(dao: SwimmerDAODep) -> list[Swimmer]:
    return dao.get_all()


@router.post("", response_model=SwimmerSaved)
def save_swimmer(data: SwimmerCreate, entries: EntryServiceDep) -> SwimmerSaved:
    """Create or update a swimmer by name and log any baseline PR times."""
    try:
        created, pr_count = entries.add_swimmer_with_prs(**data.model_dump())
    except EntryValidationError as e:
        logger.warning("swimmer_save_validation_failed", field=e.field, error=e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return SwimmerSaved(created=created, pr_count=pr_count)


@router.get("/{swimmer_name}", response_model=Swimmer)
def get_swimmer(swimmer_name: str, dao: SwimmerDAODep) -> Swimmer:
    swimmer = dao.get(swimmer_name)
    if swimmer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Swimmer not found")
    return swimmer


@router.get("/{swimmer_name}/dashboard", response_model=list[PRRecord])
def swimmer_dashboard(swimmer_name: str, prs: PRServiceDep) -> list[PRRecord]:
    """Best and latest time in every event the swimmer has raced."""
    return prs.dashboard(swimmer_name)
