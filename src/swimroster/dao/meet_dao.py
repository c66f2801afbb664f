"""Data Access Objects for meets and per-meet event presets."""

from supabase import Client

from swimroster.dao.base import BaseDAO
from swimroster.models.meet import Meet, MeetEventPreset


class MeetDAO(BaseDAO[Meet]):
    """DAO for Meet entities, keyed by name."""

    table_name = "meets"
    model_class = Meet
    key_fields = ("name",)

    def __init__(self, client: Client | None = None):
        super().__init__(client)


class MeetEventPresetDAO(BaseDAO[MeetEventPreset]):
    """DAO for MeetEventPreset rows, keyed by (meet, event)."""

    table_name = "meet_event_presets"
    model_class = MeetEventPreset
    key_fields = ("meet", "event")

    def __init__(self, client: Client | None = None):
        super().__init__(client)
