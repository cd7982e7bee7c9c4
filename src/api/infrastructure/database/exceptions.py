"""Database-specific exceptions shared by the central and tenant pools."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when a connection or connection pool cannot be obtained."""

    pass
