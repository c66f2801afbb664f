"""Business logic services."""

from swimroster.services.entry_service import EntryService
from swimroster.services.event_catalog import (
    BASELINE_EVENTS,
    EventCatalogService,
    JVVariantIndex,
    missing_jv_variants,
)
from swimroster.services.import_schemas import ImportKind, ImportResult, SkippedRow
from swimroster.services.import_service import ImportService
from swimroster.services.lineup_checker import LineupService, build_coach_packet, check
from swimroster.services.pr_aggregator import PRService, aggregate, current_pr, swimmer_dashboard
from swimroster.services.preset_resolver import PresetResolver, resolve_active_map

__all__ = [
    "BASELINE_EVENTS",
    "EntryService",
    "EventCatalogService",
    "ImportKind",
    "ImportResult",
    "ImportService",
    "JVVariantIndex",
    "LineupService",
    "PRService",
    "PresetResolver",
    "SkippedRow",
    "aggregate",
    "build_coach_packet",
    "check",
    "current_pr",
    "missing_jv_variants",
    "resolve_active_map",
    "swimmer_dashboard",
]
