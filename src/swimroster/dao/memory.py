"""In-memory table store with the same interface as the Supabase DAOs.

Used as the fake repository in tests and for scratch workbooks:

    events = MemoryDAO.for_table(EventDAO, [EventDef(name="50 Freestyle")])
    catalog = EventCatalogService(events)
"""

from typing import Any, Generic

from swimroster.dao.base import BaseDAO, T, key_of
from swimroster.errors import MissingTableError


class MemoryDAO(Generic[T]):
    """A table held in a Python list, preserving insertion order.

    Stored rows are copies, so callers mutating returned models never
    change the table behind the store's back.
    """

    def __init__(
        self,
        table_name: str,
        model_class: type[T],
        key_fields: tuple[str, ...],
        rows: list[T] | None = None,
        present: bool = True,
    ):
        self.table_name = table_name
        self.model_class = model_class
        self.key_fields = key_fields
        self.present = present
        self._rows: list[T] = [row.model_copy(deep=True) for row in rows or []]

    @classmethod
    def for_table(
        cls,
        dao_class: type[BaseDAO[T]],
        rows: list[T] | None = None,
        present: bool = True,
    ) -> "MemoryDAO[T]":
        """Build a store shaped like a Supabase DAO class (same table and key)."""
        return cls(
            table_name=dao_class.table_name,
            model_class=dao_class.model_class,
            key_fields=dao_class.key_fields,
            rows=rows,
            present=present,
        )

    def _check_present(self) -> None:
        if not self.present:
            raise MissingTableError(self.table_name)

    def _index_of(self, key: tuple) -> int | None:
        for i, row in enumerate(self._rows):
            if key_of(row, self.key_fields) == key:
                return i
        return None

    def get(self, *key: Any) -> T | None:
        self._check_present()
        index = self._index_of(tuple(key))
        return None if index is None else self._rows[index].model_copy(deep=True)

    def get_all(self) -> list[T]:
        return self.find()

    def find(self, **filters: Any) -> list[T]:
        self._check_present()
        return [
            row.model_copy(deep=True)
            for row in self._rows
            if all(getattr(row, column) == value for column, value in filters.items())
        ]

    def insert(self, model: T) -> T:
        self._check_present()
        if self.key_fields:
            key = key_of(model, self.key_fields)
            if self._index_of(key) is not None:
                raise ValueError(f"Duplicate key in {self.table_name}: {key!r}")
        self._rows.append(model.model_copy(deep=True))
        return model.model_copy(deep=True)

    def insert_many(self, models: list[T]) -> list[T]:
        return [self.insert(model) for model in models]

    def update(self, model: T) -> T | None:
        self._check_present()
        if not self.key_fields:
            raise ValueError(f"{self.table_name} rows have no key and cannot be updated")
        index = self._index_of(key_of(model, self.key_fields))
        if index is None:
            return None
        self._rows[index] = model.model_copy(deep=True)
        return model.model_copy(deep=True)

    def delete(self, **filters: Any) -> int:
        self._check_present()
        if not filters:
            raise ValueError("delete() requires at least one filter")
        kept = [
            row
            for row in self._rows
            if not all(getattr(row, column) == value for column, value in filters.items())
        ]
        removed = len(self._rows) - len(kept)
        self._rows = kept
        return removed

    def count(self) -> int:
        self._check_present()
        return len(self._rows)
