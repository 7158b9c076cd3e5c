"""Exception hierarchy for dump generation and storage.

Every failure raised by ``dumpster`` derives from ``DumpsterError`` so the
CLI can report it with a single ``except`` clause.

Usage:
    from dumpster.errors import DumpsterError, ObjectNotFoundError

    try:
        storage.load("dumps/shop/2024-06-01T00-00-00Z.sql")
    except ObjectNotFoundError:
        ...
"""


class DumpsterError(Exception):
    """Base class for all dumpster errors."""


class ConnectionFailedError(DumpsterError):
    """Raised when the database or the storage bucket cannot be reached."""


class QueryError(DumpsterError):
    """Raised when an introspection or data query fails to execute."""


class InvalidResultError(DumpsterError):
    """Raised when a required value comes back null, empty or mismatched."""


class EmptyResultError(InvalidResultError):
    """Raised when a query that must return a value returns nothing."""


class SchemaMismatchError(InvalidResultError):
    """Raised when the server echoes a different table than was requested."""


class NoColumnsError(InvalidResultError):
    """Raised when a table query returns no column metadata."""


class StorageError(DumpsterError):
    """Base class for storage backend failures."""


class ObjectNotFoundError(StorageError):
    """Raised when a stored object does not exist."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Object not found: {key}")


class StorageIOError(StorageError):
    """Raised when reading, writing or deleting a stored object fails."""
