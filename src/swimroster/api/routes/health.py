"""Liveness and readiness probes."""

from fastapi import APIRouter

from swimroster.api.dependencies import EventDAODep, MeetDAODep, SettingsDep

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict:
    return {"status": "healthy"}


@router.get("/health/ready")
def readiness_check(settings: SettingsDep, events: EventDAODep, meets: MeetDAODep) -> dict:
    """Ready once the catalog tables answer; a missing table surfaces as 503."""
    return {
        "status": "ready",
        "environment": settings.environment.value,
        "events": events.count(),
        "meets": meets.count(),
    }
