"""Per-meet event activation.

Which events are swum at a meet is decided, in order, by:
1. the meet's stored preset row for the event, if there is one;
2. otherwise the event's catalog default;
3. and, when the meet has no JV division, every JV event is off.

The module-level functions are pure: they take table snapshots and return
new or changed rows. `PresetResolver` reads and writes the tables.
"""

from swimroster.dao.base import TableDAO
from swimroster.errors import RecordNotFoundError
from swimroster.logging import get_logger
from swimroster.models.event import EventDef, is_jv_event_name
from swimroster.models.lineup import LineupAssignment
from swimroster.models.meet import Meet, MeetEventPreset
from swimroster.services.event_catalog import JVVariantIndex

logger = get_logger(__name__)


def missing_presets(
    meets: list[Meet], events: list[EventDef], presets: list[MeetEventPreset]
) -> list[MeetEventPreset]:
    """Preset rows absent for any (meet, event) pair, seeded from event defaults."""
    existing = {preset.key for preset in presets}
    to_add: list[MeetEventPreset] = []
    for meet in meets:
        for event in events:
            key = (meet.name, event.name)
            if key in existing:
                continue
            to_add.append(
                MeetEventPreset(meet=meet.name, event=event.name, active=event.default_active)
            )
            existing.add(key)
    return to_add


def jv_presets_to_disable(meet: Meet, presets: list[MeetEventPreset]) -> list[MeetEventPreset]:
    """JV preset rows of a meet without a JV division that are still on.

    This only ever turns rows off; see `jv_presets_to_restore` for the way back.
    """
    if meet.has_jv:
        return []
    return [
        preset.model_copy(update={"active": False})
        for preset in presets
        if preset.meet == meet.name and is_jv_event_name(preset.event) and preset.active
    ]


def jv_presets_to_restore(
    meet: Meet, events: list[EventDef], presets: list[MeetEventPreset]
) -> list[MeetEventPreset]:
    """JV preset rows of a JV meet whose flag differs from the event default."""
    if not meet.has_jv:
        return []
    index = JVVariantIndex(events)
    jv_names = set(index.jv_names)
    defaults = {event.name: event.default_active for event in events if event.name in jv_names}
    return [
        preset.model_copy(update={"active": defaults[preset.event]})
        for preset in presets
        if preset.meet == meet.name
        and preset.event in defaults
        and preset.active != defaults[preset.event]
    ]


def resolve_active_map(
    meet: Meet, events: list[EventDef], presets: list[MeetEventPreset]
) -> dict[str, bool]:
    """Effective active flag for every catalog event at a meet."""
    stored = {preset.event: preset.active for preset in presets if preset.meet == meet.name}
    active_map: dict[str, bool] = {}
    for event in events:
        active = stored.get(event.name, event.default_active)
        if not meet.has_jv and is_jv_event_name(event.name):
            active = False
        active_map[event.name] = active
    return active_map


def build_assignments(
    meet: Meet, events: list[EventDef], active_map: dict[str, bool]
) -> list[LineupAssignment]:
    """A blank lineup skeleton: one row per catalog event, in catalog order."""
    return [
        LineupAssignment(
            meet=meet.name,
            position=position,
            active=active_map.get(event.name, event.default_active),
            event_name=event.name,
            type=event.type,
            distance=event.distance,
            stroke=event.stroke,
        )
        for position, event in enumerate(events, start=1)
    ]


def apply_active_map(
    assignments: list[LineupAssignment], active_map: dict[str, bool]
) -> list[LineupAssignment]:
    """Copy of the lineup with each row's active flag taken from the map.

    Rows for events missing from the catalog are switched on; rows with no
    event name are left alone.
    """
    updated = []
    for row in assignments:
        if row.event_name:
            row = row.model_copy(update={"active": active_map.get(row.event_name, True)})
        updated.append(row)
    return updated


def active_event_names(meet_name: str, events: list[EventDef], presets: list[MeetEventPreset]) -> list[str]:
    """Events switched on in the meet's stored presets, else the whole catalog."""
    names = [p.event for p in presets if p.meet == meet_name and p.active and p.event]
    return names or [event.name for event in events]


class PresetResolver:
    """Reads and maintains the meet-event preset table."""

    def __init__(
        self,
        meet_dao: TableDAO[Meet],
        event_dao: TableDAO[EventDef],
        preset_dao: TableDAO[MeetEventPreset],
        lineup_dao: TableDAO[LineupAssignment] | None = None,
    ):
        self.meet_dao = meet_dao
        self.event_dao = event_dao
        self.preset_dao = preset_dao
        self.lineup_dao = lineup_dao

    def _get_meet(self, meet_name: str) -> Meet:
        meet = self.meet_dao.get(meet_name)
        if meet is None:
            raise RecordNotFoundError("Meet", meet_name)
        return meet

    def _lineup_dao(self) -> TableDAO[LineupAssignment]:
        if self.lineup_dao is None:
            raise RuntimeError("PresetResolver was created without a lineup store")
        return self.lineup_dao

    def ensure_preset_catalog(self) -> list[MeetEventPreset]:
        """Add a preset row for every (meet, event) pair that lacks one.

        Existing rows, including manual edits, are never touched, so this is
        safe to call after any meet or event is added.

        Returns:
            The rows that were inserted
        """
        to_add = missing_presets(
            self.meet_dao.get_all(), self.event_dao.get_all(), self.preset_dao.get_all()
        )
        created = self.preset_dao.insert_many(to_add)
        logger.info("preset_catalog_ensured", inserted=len(created))
        return created

    def force_disable_jv_for_meet(self, meet_name: str) -> list[MeetEventPreset]:
        """Turn off the JV presets of a meet that has no JV division."""
        meet = self._get_meet(meet_name)
        changed = jv_presets_to_disable(meet, self.preset_dao.find(meet=meet.name))
        for preset in changed:
            self.preset_dao.update(preset)
        if changed:
            logger.info("jv_presets_disabled", meet=meet.name, count=len(changed))
        return changed

    def restore_jv_defaults(self, meet_name: str) -> list[MeetEventPreset]:
        """Reset a JV meet's JV presets to their catalog defaults.

        Disabling JV presets is one-way; after a meet's has_jv flag is turned
        back on, this puts its JV events back the way the catalog has them.
        """
        meet = self._get_meet(meet_name)
        changed = jv_presets_to_restore(
            meet, self.event_dao.get_all(), self.preset_dao.find(meet=meet.name)
        )
        for preset in changed:
            self.preset_dao.update(preset)
        logger.info("jv_presets_restored", meet=meet.name, count=len(changed))
        return changed

    def list_presets(self, meet_name: str) -> list[MeetEventPreset]:
        meet = self._get_meet(meet_name)
        return self.preset_dao.find(meet=meet.name)

    def set_preset(
        self, meet_name: str, event_name: str, active: bool, notes: str | None = None
    ) -> MeetEventPreset:
        """Manually override whether an event is swum at a meet."""
        preset = self.preset_dao.get(meet_name, event_name)
        if preset is None:
            raise RecordNotFoundError("Preset", f"{meet_name} / {event_name}")
        update: dict[str, object] = {"active": active}
        if notes is not None:
            update["notes"] = notes
        preset = preset.model_copy(update=update)
        self.preset_dao.update(preset)
        logger.info("preset_set", meet=meet_name, event_name=event_name, active=active)
        return preset

    def resolve_active_map(self, meet_name: str) -> dict[str, bool]:
        meet = self._get_meet(meet_name)
        return resolve_active_map(meet, self.event_dao.get_all(), self.preset_dao.find(meet=meet.name))

    def list_active_events(self, meet_name: str) -> list[str]:
        """Event names to offer when entering a result for a meet."""
        events = self.event_dao.get_all()
        if not meet_name:
            return [event.name for event in events]
        return active_event_names(meet_name, events, self.preset_dao.find(meet=meet_name))

    def reseed_assignments(self, meet_name: str) -> list[LineupAssignment]:
        """Rebuild a meet's lineup from the catalog, discarding its entries.

        Heats, lanes, and swimmers already on the lineup are dropped.
        """
        meet = self._get_meet(meet_name)
        events = self.event_dao.get_all()
        active_map = resolve_active_map(meet, events, self.preset_dao.find(meet=meet.name))
        rows = build_assignments(meet, events, active_map)

        lineup_dao = self._lineup_dao()
        lineup_dao.delete(meet=meet.name)
        stored = lineup_dao.insert_many(rows)
        logger.info("lineup_reseeded", meet=meet.name, rows=len(stored))
        return stored

    def apply_presets(self, meet_name: str) -> list[LineupAssignment]:
        """Push the meet's resolved presets onto its stored lineup rows.

        Only the active flag of each row changes.
        """
        self.force_disable_jv_for_meet(meet_name)
        active_map = self.resolve_active_map(meet_name)

        lineup_dao = self._lineup_dao()
        current = sorted(lineup_dao.find(meet=meet_name), key=lambda row: row.position)
        updated = apply_active_map(current, active_map)
        for before, after in zip(current, updated, strict=True):
            if before.active != after.active:
                lineup_dao.update(after)
        logger.info("presets_applied", meet=meet_name, rows=len(updated))
        return updated
