"""Data Access Object for the swimmer roster."""

from supabase import Client

from swimroster.dao.base import BaseDAO
from swimroster.models.swimmer import Swimmer


class SwimmerDAO(BaseDAO[Swimmer]):
    """DAO for Swimmer entities, keyed by name."""

    table_name = "swimmers"
    model_class = Swimmer
    key_fields = ("name",)

    def __init__(self, client: Client | None = None):
        super().__init__(client)
