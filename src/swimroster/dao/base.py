"""Base DAO with Supabase client connection.

Every table is addressed by a natural key (e.g. meet name, or meet + event
for presets) rather than a surrogate id. Services depend on the `TableDAO`
protocol so an in-memory store can stand in for Supabase.
"""

from typing import Any, Generic, Protocol, TypeVar

from postgrest.exceptions import APIError
from pydantic import BaseModel
from supabase import Client, create_client

from swimroster.config import get_settings
from swimroster.errors import MissingTableError

T = TypeVar("T", bound=BaseModel)

# PostgreSQL "undefined_table"
UNDEFINED_TABLE = "42P01"
PAGE_SIZE = 1000


class TableDAO(Protocol[T]):
    """Operations every table store supports."""

    table_name: str
    key_fields: tuple[str, ...]

    def get(self, *key: Any) -> T | None: ...

    def get_all(self) -> list[T]: ...

    def find(self, **filters: Any) -> list[T]: ...

    def insert(self, model: T) -> T: ...

    def insert_many(self, models: list[T]) -> list[T]: ...

    def update(self, model: T) -> T | None: ...

    def delete(self, **filters: Any) -> int: ...

    def count(self) -> int: ...


def key_of(model: BaseModel, key_fields: tuple[str, ...]) -> tuple:
    """Natural key of a model instance."""
    return tuple(getattr(model, field) for field in key_fields)


def to_row(model: BaseModel) -> dict:
    """Dump a model to a JSON-safe row, leaving out computed fields."""
    return model.model_dump(mode="json", exclude=set(type(model).model_computed_fields))


class SupabaseClient:
    """Singleton Supabase client manager."""

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """Get or create the Supabase client."""
        if cls._instance is None:
            settings = get_settings()
            if not settings.supabase_url or settings.supabase_key is None:
                raise RuntimeError(
                    "SUPABASE_URL and SUPABASE_KEY environment variables must be set"
                )
            cls._instance = create_client(
                settings.supabase_url, settings.supabase_key.get_secret_value()
            )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the client (useful for testing)."""
        cls._instance = None


class BaseDAO(Generic[T]):
    """Supabase-backed table with natural-key CRUD operations."""

    table_name: str
    model_class: type[T]
    key_fields: tuple[str, ...]
    order_column: str = "id"  # insertion order

    def __init__(self, client: Client | None = None):
        """Initialize the DAO.

        Args:
            client: Supabase client. If not provided, uses the singleton.
        """
        self.client = client or SupabaseClient.get_client()

    @property
    def table(self):
        """Get the table reference."""
        return self.client.table(self.table_name)

    def _execute(self, query):
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNDEFINED_TABLE:
                raise MissingTableError(self.table_name) from e
            raise

    def _apply_filters(self, query, filters: dict[str, Any]):
        for column, value in filters.items():
            query = query.eq(column, value)
        return query

    def _key_filters(self, key: tuple) -> dict[str, Any]:
        if len(key) != len(self.key_fields):
            raise ValueError(f"{self.table_name} key is {self.key_fields}, got {key!r}")
        return dict(zip(self.key_fields, key, strict=True))

    def get(self, *key: Any) -> T | None:
        """Get a single record by its natural key.

        Returns:
            The model instance or None if not found
        """
        query = self._apply_filters(self.table.select("*"), self._key_filters(key))
        result = self._execute(query.limit(1))
        if not result.data:
            return None
        return self._to_model(result.data[0])

    def get_all(self) -> list[T]:
        """Get every record, in insertion order."""
        return self.find()

    def find(self, **filters: Any) -> list[T]:
        """Get records whose columns equal the given values, in table order."""
        rows: list[dict] = []
        offset = 0
        while True:
            query = self._apply_filters(self.table.select("*"), filters)
            query = query.order(self.order_column).range(offset, offset + PAGE_SIZE - 1)
            result = self._execute(query)
            rows.extend(result.data)
            if len(result.data) < PAGE_SIZE:
                break
            offset += PAGE_SIZE
        return [self._to_model(row) for row in rows]

    def insert(self, model: T) -> T:
        """Insert a new record and return it as stored."""
        result = self._execute(self.table.insert(self._to_db(model)))
        return self._to_model(result.data[0])

    def insert_many(self, models: list[T]) -> list[T]:
        """Insert several records in one request."""
        if not models:
            return []
        result = self._execute(self.table.insert([self._to_db(m) for m in models]))
        return [self._to_model(row) for row in result.data]

    def update(self, model: T) -> T | None:
        """Overwrite the record sharing this model's natural key.

        Returns:
            The updated model or None if no such record exists
        """
        if not self.key_fields:
            raise ValueError(f"{self.table_name} rows have no key and cannot be updated")
        filters = self._key_filters(key_of(model, self.key_fields))
        query = self._apply_filters(self.table.update(self._to_db(model)), filters)
        result = self._execute(query)
        if not result.data:
            return None
        return self._to_model(result.data[0])

    def delete(self, **filters: Any) -> int:
        """Delete matching records.

        Returns:
            Number of records deleted
        """
        if not filters:
            raise ValueError("delete() requires at least one filter")
        result = self._execute(self._apply_filters(self.table.delete(), filters))
        return len(result.data)

    def count(self) -> int:
        result = self._execute(self.table.select("*", count="exact").limit(1))
        return result.count or 0

    def _to_model(self, row: dict) -> T:
        """Convert a database row to a model instance.

        Override this method for custom mapping logic.
        """
        return self.model_class.model_validate(row)

    def _to_db(self, model: T) -> dict:
        """Convert a model instance to a database row.

        Override this method for custom mapping logic.
        """
        return to_row(model)
