"""Exceptions raised by swimroster services and repositories."""


class SwimRosterError(Exception):
    """Base class for swimroster errors."""


class EntryValidationError(SwimRosterError, ValueError):
    """A single-record entry failed validation; nothing was written."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class RecordNotFoundError(SwimRosterError, LookupError):
    """A referenced meet, event, or swimmer does not exist."""

    def __init__(self, table: str, key: str):
        super().__init__(f'{table} not found: "{key}"')
        self.table = table
        self.key = key


class MissingTableError(SwimRosterError, RuntimeError):
    """A required table is absent from the backing store."""

    def __init__(self, table: str):
        super().__init__(f'Missing required table: "{table}"')
        self.table = table
