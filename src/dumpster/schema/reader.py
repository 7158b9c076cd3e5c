"""MySQL schema introspection.

Lists the tables and triggers of the current schema and reads the server
version and schema name.  Every statement is read-only; rows whose name
comes back NULL are skipped with a warning rather than failing the dump.

Usage:
    from dumpster.schema.reader import SchemaReader

    with MySQLAdapter(url) as client:
        reader = SchemaReader(client)
        tables = reader.list_tables()
        version = reader.server_version()
"""

import logging

from dumpster.adapters.base import DatabaseClient
from dumpster.errors import EmptyResultError, InvalidResultError


class SchemaReader:
    """Reads schema-level metadata from a live connection.

    Args:
        client: Connected ``DatabaseClient``.
        logger: Logger for skipped rows (default: module logger).
    """

    def __init__(self, client: DatabaseClient, logger: logging.Logger | None = None):
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    def list_tables(self) -> list[str]:
        """Get all table names, in the order the server returns them."""
        return self._list_names("SHOW TABLES", "table")

    def list_triggers(self) -> list[str]:
        """Get all trigger names, in the order the server returns them."""
        return self._list_names("SHOW TRIGGERS", "trigger")

    def server_version(self) -> str:
        """Get the server version string.

        Raises:
            EmptyResultError: If the server returns no version.
        """
        row = self._client.query("SELECT version()").first()
        version = row[0] if row else None
        if not version:
            raise EmptyResultError("Returned server version is empty")
        return str(version)

    def current_schema_name(self) -> str:
        """Get the name of the schema selected on the connection.

        Raises:
            InvalidResultError: If no schema is selected (``DATABASE()`` is NULL).
        """
        row = self._client.query("SELECT DATABASE()").first()
        if row is None or row[0] is None:
            raise InvalidResultError("Returned schema name is not valid")
        return str(row[0])

    def _list_names(self, sql: str, kind: str) -> list[str]:
        names: list[str] = []
        for row in self._client.query(sql).rows:
            name = row[0] if row else None
            if name is None:
                self._logger.warning("Skipping %s with NULL name", kind)
                continue
            names.append(str(name))
        return names
