"""Per-table and per-trigger serialization.

Fetches the re-creation statement of each table and trigger, and renders
a table's rows as a single ``VALUES`` payload.

Identifiers are interpolated into ``SHOW CREATE ...`` and ``SELECT * FROM``
statements without quoting.  Names only ever come from ``SchemaReader``
listings; any caller passing user input here opens an injection path.

Row values are wrapped in single quotes without escaping.  A value holding
a quote character produces a broken literal exactly as the data reads.
Existing dumps depend on this output, so it is kept as is.

Binary column values are decoded as UTF-8 with invalid bytes replaced by
U+FFFD, so BLOB and BINARY data that is not valid UTF-8 does not survive a
dump and replay byte for byte.
"""

import logging
from typing import Any

from dumpster.adapters.base import DatabaseClient
from dumpster.errors import (
    EmptyResultError,
    InvalidResultError,
    NoColumnsError,
    SchemaMismatchError,
)
from dumpster.schema.models import DumpMode, TableRecord, TriggerRecord

NULL_TOKEN = "null"

# SHOW CREATE TRIGGER: Trigger, sql_mode, SQL Original Statement, ...
_TRIGGER_STATEMENT_INDEX = 2


def format_value(value: Any) -> str:
    """Render one column value as a SQL literal.

    Examples:
        >>> format_value(None)
        'null'
        >>> format_value(42)
        "'42'"
        >>> format_value("O'Brien")
        "'O'Brien'"
    """
    if value is None:
        return NULL_TOKEN
    if isinstance(value, (bytes, bytearray, memoryview)):
        text = bytes(value).decode("utf-8", errors="replace")
    else:
        # datetime, Decimal and numbers use their MySQL text form
        text = str(value)
    return f"'{text}'"


def format_rows(rows: list[tuple[Any, ...]]) -> str:
    """Join rows into ``(v1,v2),(v3,v4)`` with no trailing separator."""
    return ",".join(
        "(" + ",".join(format_value(value) for value in row) + ")" for row in rows
    )


class TableSerializer:
    """Fetches re-creation statements and row data.

    Args:
        client: Connected ``DatabaseClient``.
        logger: Logger (default: module logger).
    """

    def __init__(self, client: DatabaseClient, logger: logging.Logger | None = None):
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    def fetch_table_ddl(self, name: str) -> str:
        """Get the ``CREATE TABLE`` statement for ``name``.

        Raises:
            EmptyResultError: If the server returns no row.
            SchemaMismatchError: If the returned table name is not ``name``
                (compared case-sensitively).
            InvalidResultError: If the statement is NULL.
        """
        row = self._client.query(f"SHOW CREATE TABLE {name}").first()
        if row is None:
            raise EmptyResultError(f"No CREATE statement returned for table {name}")

        returned_name = row[0]
        create_sql = row[1] if len(row) > 1 else None
        if returned_name != name:
            raise SchemaMismatchError(
                f"Returned table {returned_name!r} is not the requested table {name!r}"
            )
        if create_sql is None:
            raise InvalidResultError(f"Returned SQL for table {name} is not valid")
        return str(create_sql)

    def fetch_table_rows(self, name: str) -> str:
        """Get every row of ``name`` as a ``VALUES`` payload.

        Returns:
            Comma-joined parenthesised tuples, or ``""`` for an empty table.

        Raises:
            NoColumnsError: If the query returns no columns.
        """
        result = self._client.query(f"SELECT * FROM {name}")
        if not result.columns:
            raise NoColumnsError(f"No columns found for table {name}")

        self._logger.debug("Read %d rows from %s", len(result.rows), name)
        return format_rows(result.rows)

    def fetch_trigger_ddl(self, name: str) -> str:
        """Get the ``CREATE TRIGGER`` statement for ``name``.

        Raises:
            EmptyResultError: If the server returns no row.
            InvalidResultError: If the statement is NULL.
        """
        row = self._client.query(f"SHOW CREATE TRIGGER {name}").first()
        if row is None:
            raise EmptyResultError(f"No CREATE statement returned for trigger {name}")

        statement = row[_TRIGGER_STATEMENT_INDEX] if len(row) > _TRIGGER_STATEMENT_INDEX else None
        if statement is None:
            raise InvalidResultError(f"Returned SQL for trigger {name} is not valid")
        return str(statement)

    def table_record(self, name: str, mode: DumpMode = DumpMode.FULL) -> TableRecord:
        """Build the ``TableRecord`` for ``name``; rows are skipped in DDL mode."""
        record = TableRecord(name=name, create_sql=self.fetch_table_ddl(name))
        if mode is DumpMode.FULL:
            record.values = self.fetch_table_rows(name)
        return record

    def trigger_record(self, name: str) -> TriggerRecord:
        """Build the ``TriggerRecord`` for ``name``."""
        return TriggerRecord(name=name, create_sql=self.fetch_trigger_ddl(name))
