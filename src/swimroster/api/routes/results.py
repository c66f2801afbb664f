"""Result log and personal record endpoints."""

import datetime

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from swimroster import get_logger
from swimroster.api.dependencies import EntryServiceDep, PRServiceDep
from swimroster.errors import EntryValidationError
from swimroster.models import PRRecord, Result

logger = get_logger(__name__)

router = APIRouter(tags=["results"])


class ResultCreate(BaseModel):
    """Request body for logging one race. Times are "m:ss.xx" or "ss.xx"."""

    meet: str
    event: str
    swimmer: str
    final_time: str
    seed_time: str | None = None
    place: int | None = None
    notes: str = ""
    date: datetime.date | None = None


@router.get("/results", response_model=list[Result])
def list_results(
    prs: PRServiceDep,
    swimmer: str | None = Query(None, description="Only this swimmer's results"),
    meet: str | None = Query(None, description="Only results from this meet"),
) -> list[Result]:
    return prs.list_results(swimmer=swimmer, meet=meet)


@router.post("/results", response_model=Result, status_code=status.HTTP_201_CREATED)
def create_result(data: ResultCreate, entries: EntryServiceDep) -> Result:
    """Log one race result. Rejected whole if any field is invalid."""
    try:
        return entries.add_result(**data.model_dump())
    except EntryValidationError as e:
        logger.warning("result_create_validation_failed", field=e.field, error=e.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.get("/prs", response_model=list[PRRecord])
def list_prs(prs: PRServiceDep) -> list[PRRecord]:
    """PR records for every swimmer and event, by swimmer then event."""
    return prs.all_prs()


@router.get("/prs/{swimmer_name}/{event_name}")
def get_current_pr(swimmer_name: str, event_name: str, prs: PRServiceDep) -> dict:
    best = prs.current_pr(swimmer_name, event_name)
    if best is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No results for swimmer in event")
    return {"swimmer": swimmer_name, "event": event_name, "best_time": best}
