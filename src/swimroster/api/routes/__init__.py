"""API route modules."""

from swimroster.api.routes.events import router as events_router
from swimroster.api.routes.health import router as health_router
from swimroster.api.routes.imports import router as imports_router
from swimroster.api.routes.lineup import router as lineup_router
from swimroster.api.routes.meets import presets_router
from swimroster.api.routes.meets import router as meets_router
from swimroster.api.routes.results import router as results_router
from swimroster.api.routes.swimmers import router as swimmers_router

__all__ = [
    "events_router",
    "health_router",
    "imports_router",
    "lineup_router",
    "meets_router",
    "presets_router",
    "results_router",
    "swimmers_router",
]
