"""Data Access Object for the event catalog."""

from supabase import Client

from swimroster.dao.base import BaseDAO
from swimroster.models.event import EventDef


class EventDAO(BaseDAO[EventDef]):
    """DAO for EventDef entities, keyed by name.

    Table order is catalog order; lineups are seeded in that order.
    """

    table_name = "events"
    model_class = EventDef
    key_fields = ("name",)

    def __init__(self, client: Client | None = None):
        super().__init__(client)
