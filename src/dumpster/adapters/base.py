"""Database client protocol definition.

Defines the ``DatabaseClient`` Protocol that the schema reader and the
table serializer depend on, and the ``QueryResult`` model it returns.
Everything is synchronous -- each call blocks until the server answers.

Usage:
    from dumpster.adapters.base import DatabaseClient

    def list_names(client: DatabaseClient) -> list[str]:
        result = client.query("SHOW TABLES")
        return [row[0] for row in result.rows]
"""

from typing import Any, Protocol

from pydantic import BaseModel, Field


class QueryResult(BaseModel):
    """Column names and fully materialized rows of one statement."""

    columns: list[str] = Field(default_factory=list)
    rows: list[tuple[Any, ...]] = Field(default_factory=list)

    def first(self) -> tuple[Any, ...] | None:
        """Return the first row, or ``None`` when the result is empty."""
        return self.rows[0] if self.rows else None


class DatabaseClient(Protocol):
    """Read-only database client interface.

    Adapters must raise ``dumpster.errors.QueryError`` when a statement
    cannot be prepared, executed or fetched.
    """

    def query(self, sql: str) -> QueryResult:
        """Execute a single read-only statement and return all rows.

        Args:
            sql: Raw SQL statement.  No parameters are bound.

        Returns:
            ``QueryResult`` with column names and rows in server order.

        Raises:
            QueryError: If the statement fails.

        Example:
            result = client.query("SELECT version()")
            version = result.rows[0][0]
        """
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...
