"""Data Access Object for the result log."""

from supabase import Client

from swimroster.dao.base import BaseDAO
from swimroster.models.result import Result


class ResultDAO(BaseDAO[Result]):
    """DAO for Result rows.

    The log has no natural key; rows are only appended and read back in
    insertion order, which is the order personal records are scanned in.
    """

    table_name = "results"
    model_class = Result
    key_fields = ()

    def __init__(self, client: Client | None = None):
        super().__init__(client)
