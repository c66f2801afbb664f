"""HTTP API for swimroster.

Run with `swimroster serve`, or point any ASGI server at
`swimroster.api.app:app`. Every table store is injected through
`swimroster.api.dependencies`, so tests swap in in-memory stores.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from swimroster import configure_logging, get_logger
from swimroster.api.routes import (
    events_router,
    health_router,
    imports_router,
    lineup_router,
    meets_router,
    presets_router,
    results_router,
    swimmers_router,
)
from swimroster.config import get_settings
from swimroster.errors import MissingTableError

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(level=settings.log_level, log_format=settings.log_format.value)
    logger.info(
        "api_started",
        environment=settings.environment.value,
        store="supabase" if settings.supabase_url else "unconfigured",
        max_individual=settings.max_individual_events,
        max_relay=settings.max_relay_events,
    )
    yield
    logger.info("api_stopped")


async def missing_table_handler(request: Request, exc: MissingTableError) -> JSONResponse:
    """A missing table is a configuration problem, not a client error."""
    logger.error("missing_table", table=exc.table, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


def create_app() -> FastAPI:
    """Build the API: health checks at the root, everything else under /api/v1."""
    settings = get_settings()
    show_docs = not settings.is_production

    app = FastAPI(
        title="Swim Roster API",
        description="Meet rosters, lineup checks, and personal records",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
    )
    app.add_exception_handler(MissingTableError, missing_table_handler)

    app.include_router(health_router)
    for router in (
        events_router,
        meets_router,
        presets_router,
        lineup_router,
        swimmers_router,
        results_router,
        imports_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()
