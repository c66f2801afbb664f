"""Tests for per-meet event activation."""

import pytest

from swimroster.dao import EventDAO, LineupDAO, MeetDAO, MeetEventPresetDAO, MemoryDAO
from swimroster.errors import MissingTableError, RecordNotFoundError
from swimroster.models import EventDef, EventType, LineupAssignment, Meet, MeetEventPreset
from swimroster.services.preset_resolver import (
    PresetResolver,
    active_event_names,
    apply_active_map,
    missing_presets,
    resolve_active_map,
)


def _set_has_jv(daos, meet_name: str, has_jv: bool) -> None:
    meet = daos["meets"].get(meet_name)
    daos["meets"].update(meet.model_copy(update={"has_jv": has_jv}))


class TestMissingPresets:
    """Tests for the pure preset merge."""

    def test_cross_product_from_defaults(self, small_catalog):
        """Every meet gets a row per event with the event's default."""
        meets = [Meet(name="Dual A"), Meet(name="Dual B")]
        rows = missing_presets(meets, small_catalog, [])
        assert len(rows) == 8
        assert rows[0] == MeetEventPreset(meet="Dual A", event="200 Medley Relay", active=True)
        assert rows[2].active is False
        assert all(row.notes == "" for row in rows)

    def test_existing_rows_untouched(self, small_catalog):
        """A manual override is neither duplicated nor reset."""
        existing = [MeetEventPreset(meet="Dual A", event="50 Freestyle", active=False, notes="scratch")]
        rows = missing_presets([Meet(name="Dual A")], small_catalog, existing)
        assert ("Dual A", "50 Freestyle") not in {row.key for row in rows}
        assert len(rows) == 3


class TestResolveActiveMap:
    """Tests for the effective active flag."""

    def test_stored_value_wins_over_default(self, small_catalog):
        presets = [MeetEventPreset(meet="Dual A", event="100 Butterfly", active=True)]
        active = resolve_active_map(Meet(name="Dual A"), small_catalog, presets)
        assert active["100 Butterfly"] is True

    def test_default_when_no_preset(self, small_catalog):
        active = resolve_active_map(Meet(name="Dual A"), small_catalog, [])
        assert active == {
            "200 Medley Relay": True,
            "50 Freestyle": True,
            "100 Butterfly": False,
            "50 Freestyle (JV)": True,
        }

    def test_no_jv_meet_forces_jv_off(self, small_catalog):
        """JV events are off at a non-JV meet even when stored as on."""
        presets = [MeetEventPreset(meet="Dual A", event="50 Freestyle (JV)", active=True)]
        active = resolve_active_map(Meet(name="Dual A", has_jv=False), small_catalog, presets)
        assert active["50 Freestyle (JV)"] is False
        assert active["50 Freestyle"] is True

    def test_other_meets_presets_ignored(self, small_catalog):
        presets = [MeetEventPreset(meet="Dual B", event="50 Freestyle", active=False)]
        active = resolve_active_map(Meet(name="Dual A"), small_catalog, presets)
        assert active["50 Freestyle"] is True


class TestApplyActiveMap:
    """Tests for pushing an active map onto lineup rows."""

    def test_unknown_event_switched_on(self):
        """Rows naming an event not in the map become active."""
        rows = [
            LineupAssignment(position=1, event_name="50 Freestyle", active=True),
            LineupAssignment(position=2, event_name="Diving", active=False),
            LineupAssignment(position=3, event_name="", active=False),
        ]
        updated = apply_active_map(rows, {"50 Freestyle": False})
        assert [row.active for row in updated] == [False, True, False]


class TestActiveEventNames:
    """Tests for the add-result event list."""

    def test_active_presets_only(self, small_catalog):
        presets = [
            MeetEventPreset(meet="Dual A", event="50 Freestyle", active=True),
            MeetEventPreset(meet="Dual A", event="100 Butterfly", active=False),
        ]
        assert active_event_names("Dual A", small_catalog, presets) == ["50 Freestyle"]

    def test_falls_back_to_catalog(self, small_catalog):
        """No active presets means every event is offered."""
        assert active_event_names("Dual A", small_catalog, []) == [e.name for e in small_catalog]


class TestPresetResolver:
    """Tests for preset maintenance against stores."""

    def test_ensure_preset_catalog_is_idempotent(self, preset_resolver, daos):
        """A second call changes nothing."""
        created = preset_resolver.ensure_preset_catalog()
        assert len(created) == 4
        before = daos["meet_event_presets"].get_all()

        assert preset_resolver.ensure_preset_catalog() == []
        assert daos["meet_event_presets"].get_all() == before

    def test_ensure_after_adding_meet(self, preset_resolver, daos):
        """A new meet gets rows; the old meet's edits survive."""
        preset_resolver.ensure_preset_catalog()
        preset_resolver.set_preset("Dual A", "50 Freestyle", False, notes="pool closed")
        daos["meets"].insert(Meet(name="Dual B"))

        created = preset_resolver.ensure_preset_catalog()
        assert {row.meet for row in created} == {"Dual B"}
        edited = daos["meet_event_presets"].get("Dual A", "50 Freestyle")
        assert edited.active is False
        assert edited.notes == "pool closed"

    def test_force_disable_jv(self, preset_resolver, daos):
        """Only JV rows of a non-JV meet are turned off."""
        preset_resolver.ensure_preset_catalog()
        _set_has_jv(daos, "Dual A", False)

        changed = preset_resolver.force_disable_jv_for_meet("Dual A")
        assert [row.event for row in changed] == ["50 Freestyle (JV)"]
        assert daos["meet_event_presets"].get("Dual A", "50 Freestyle (JV)").active is False
        assert daos["meet_event_presets"].get("Dual A", "50 Freestyle").active is True

    def test_force_disable_noop_for_jv_meet(self, preset_resolver):
        preset_resolver.ensure_preset_catalog()
        assert preset_resolver.force_disable_jv_for_meet("Dual A") == []

    def test_disable_is_one_way_until_restored(self, preset_resolver, daos):
        """Turning has_jv back on leaves JV rows off until restore_jv_defaults."""
        preset_resolver.ensure_preset_catalog()
        _set_has_jv(daos, "Dual A", False)
        preset_resolver.force_disable_jv_for_meet("Dual A")

        _set_has_jv(daos, "Dual A", True)
        assert preset_resolver.resolve_active_map("Dual A")["50 Freestyle (JV)"] is False

        restored = preset_resolver.restore_jv_defaults("Dual A")
        assert [row.event for row in restored] == ["50 Freestyle (JV)"]
        assert preset_resolver.resolve_active_map("Dual A")["50 Freestyle (JV)"] is True

    def test_restore_noop_for_non_jv_meet(self, preset_resolver, daos):
        preset_resolver.ensure_preset_catalog()
        _set_has_jv(daos, "Dual A", False)
        assert preset_resolver.restore_jv_defaults("Dual A") == []

    def test_unknown_meet(self, preset_resolver):
        with pytest.raises(RecordNotFoundError, match="Dual Z"):
            preset_resolver.resolve_active_map("Dual Z")

    def test_set_preset_returns_stored_override(self, preset_resolver, daos):
        preset_resolver.ensure_preset_catalog()
        preset = preset_resolver.set_preset("Dual A", "100 Butterfly", True, notes="added for rivals")

        assert (preset.active, preset.notes) == (True, "added for rivals")
        assert daos["meet_event_presets"].get("Dual A", "100 Butterfly") == preset
        assert preset_resolver.resolve_active_map("Dual A")["100 Butterfly"] is True

    def test_set_preset_unknown_pair(self, preset_resolver):
        with pytest.raises(RecordNotFoundError):
            preset_resolver.set_preset("Dual A", "50 Freestyle", True)

    def test_missing_preset_table(self, daos):
        """An absent table is a fatal configuration error."""
        resolver = PresetResolver(
            daos["meets"], daos["events"], MemoryDAO.for_table(MeetEventPresetDAO, present=False)
        )
        with pytest.raises(MissingTableError, match="meet_event_presets"):
            resolver.ensure_preset_catalog()

    def test_list_active_events_without_meet(self, preset_resolver, small_catalog):
        assert preset_resolver.list_active_events("") == [e.name for e in small_catalog]


class TestReseedAndApply:
    """Tests for rebuilding and updating a stored lineup."""

    def test_reseed_builds_rows_in_catalog_order(self, preset_resolver, daos):
        preset_resolver.ensure_preset_catalog()
        rows = preset_resolver.reseed_assignments("Dual A")

        assert [row.position for row in rows] == [1, 2, 3, 4]
        assert [row.event_name for row in rows] == [
            "200 Medley Relay",
            "50 Freestyle",
            "100 Butterfly",
            "50 Freestyle (JV)",
        ]
        assert [row.active for row in rows] == [True, True, False, True]
        assert rows[0].type == EventType.RELAY
        assert daos["lineup_assignments"].count() == 4

    def test_reseed_discards_entries(self, preset_resolver, daos):
        """Swimmers on the old lineup are dropped."""
        daos["lineup_assignments"].insert(
            LineupAssignment(meet="Dual A", position=1, active=True, event_name="50 Freestyle", individual_swimmer="Avery")
        )
        rows = preset_resolver.reseed_assignments("Dual A")
        assert all(row.individual_swimmer == "" for row in rows)
        assert daos["lineup_assignments"].count() == 4

    def test_reseed_leaves_other_meets(self, preset_resolver, daos):
        daos["meets"].insert(Meet(name="Dual B"))
        preset_resolver.reseed_assignments("Dual B")
        preset_resolver.reseed_assignments("Dual A")
        assert len(daos["lineup_assignments"].find(meet="Dual B")) == 4

    def test_apply_presets_changes_only_active_flag(self, preset_resolver, daos):
        preset_resolver.ensure_preset_catalog()
        preset_resolver.reseed_assignments("Dual A")
        row = daos["lineup_assignments"].get("Dual A", 2)
        daos["lineup_assignments"].update(row.model_copy(update={"individual_swimmer": "Avery", "heat": "1"}))

        _set_has_jv(daos, "Dual A", False)
        updated = preset_resolver.apply_presets("Dual A")

        assert [row.active for row in updated] == [True, True, False, False]
        kept = daos["lineup_assignments"].get("Dual A", 2)
        assert kept.individual_swimmer == "Avery"
        assert kept.heat == "1"
        assert daos["meet_event_presets"].get("Dual A", "50 Freestyle (JV)").active is False

    def test_reseed_without_lineup_store(self, daos):
        resolver = PresetResolver(daos["meets"], daos["events"], daos["meet_event_presets"])
        with pytest.raises(RuntimeError, match="lineup store"):
            resolver.reseed_assignments("Dual A")


class TestEndToEnd:
    """Catalog, presets, and has_jv working together."""

    def test_jv_flag_controls_variant(self):
        """Both events on with JV; only varsity on once has_jv is false."""
        meets = MemoryDAO.for_table(MeetDAO, [Meet(name="Dual A", has_jv=True)])
        events = MemoryDAO.for_table(
            EventDAO,
            [
                EventDef(name="50 Freestyle", type=EventType.INDIVIDUAL, distance=50, default_active=True),
                EventDef(name="50 Freestyle (JV)", type=EventType.INDIVIDUAL, distance=50, default_active=True),
            ],
        )
        resolver = PresetResolver(
            meets, events, MemoryDAO.for_table(MeetEventPresetDAO), MemoryDAO.for_table(LineupDAO)
        )

        resolver.ensure_preset_catalog()
        assert resolver.resolve_active_map("Dual A") == {
            "50 Freestyle": True,
            "50 Freestyle (JV)": True,
        }

        meets.update(Meet(name="Dual A", has_jv=False))
        assert resolver.resolve_active_map("Dual A") == {
            "50 Freestyle": True,
            "50 Freestyle (JV)": False,
        }
