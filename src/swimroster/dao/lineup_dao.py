"""Data Access Object for stored meet lineups."""

from supabase import Client

from swimroster.dao.base import BaseDAO, to_row
from swimroster.models.lineup import MAX_RELAY_LEGS, LineupAssignment


class LineupDAO(BaseDAO[LineupAssignment]):
    """DAO for LineupAssignment rows, keyed by (meet, position).

    Relay legs are stored as four columns, relay_leg_1 .. relay_leg_4.
    """

    table_name = "lineup_assignments"
    model_class = LineupAssignment
    key_fields = ("meet", "position")
    order_column = "position"

    def __init__(self, client: Client | None = None):
        super().__init__(client)

    def _to_model(self, row: dict) -> LineupAssignment:
        legs = [row.get(f"relay_leg_{i}") or "" for i in range(1, MAX_RELAY_LEGS + 1)]
        while legs and not legs[-1]:
            legs.pop()
        data = {k: v for k, v in row.items() if not k.startswith("relay_leg_")}
        return LineupAssignment.model_validate({**data, "relay_legs": legs})

    def _to_db(self, model: LineupAssignment) -> dict:
        data = to_row(model)
        legs = data.pop("relay_legs")
        for i in range(MAX_RELAY_LEGS):
            data[f"relay_leg_{i + 1}"] = legs[i] if i < len(legs) else ""
        return data
