"""Meet lineup endpoints."""

from fastapi import APIRouter, HTTPException, status

from swimroster.api.dependencies import LineupServiceDep, PresetResolverDep
from swimroster.errors import RecordNotFoundError
from swimroster.models import CoachPacketRow, LineupAssignment, LineupReport

router = APIRouter(prefix="/meets/{meet_name}/lineup", tags=["lineup"])


def _not_found(e: RecordNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=list[LineupAssignment])
def get_lineup(meet_name: str, lineup: LineupServiceDep) -> list[LineupAssignment]:
    try:
        return lineup.get_lineup(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.put("", response_model=list[LineupAssignment])
def save_lineup(
    meet_name: str, rows: list[LineupAssignment], lineup: LineupServiceDep
) -> list[LineupAssignment]:
    """Replace the meet's lineup; rows are numbered in the order sent."""
    try:
        return lineup.save_lineup(meet_name, rows)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.post("/reseed", response_model=list[LineupAssignment])
def reseed_lineup(meet_name: str, presets: PresetResolverDep) -> list[LineupAssignment]:
    """Rebuild the lineup from the catalog. Existing entries are discarded."""
    try:
        return presets.reseed_assignments(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.post("/apply-presets", response_model=list[LineupAssignment])
def apply_presets(meet_name: str, presets: PresetResolverDep) -> list[LineupAssignment]:
    """Set each lineup row's active flag from the meet's presets."""
    try:
        return presets.apply_presets(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.get("/check", response_model=LineupReport)
def check_lineup(meet_name: str, lineup: LineupServiceDep) -> LineupReport:
    try:
        return lineup.check_meet(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e


@router.get("/packet", response_model=list[CoachPacketRow])
def coach_packet(meet_name: str, lineup: LineupServiceDep) -> list[CoachPacketRow]:
    try:
        return lineup.coach_packet(meet_name)
    except RecordNotFoundError as e:
        raise _not_found(e) from e
