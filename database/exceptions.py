class DatabaseError(Exception):
    """Base for all database errors."""


class NotFoundError(DatabaseError):
    """Entity not found."""


class RowMappingError(DatabaseError):
    """A stored row cannot be turned into a valid domain model."""
