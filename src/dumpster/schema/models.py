"""Pydantic models for the in-memory dump document.

This module contains the snapshot-domain models:
- ``DumpMode``: schema-only versus schema + data
- ``TableRecord`` and ``TriggerRecord``: one introspected object each
- ``DatabaseSnapshot``: the root document rendered into a SQL script

A snapshot is built once per invocation, rendered once and discarded.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class DumpMode(str, Enum):
    """What a dump contains."""

    DDL = "ddl"  # schema only
    FULL = "full"  # schema + row data


class TableRecord(BaseModel):
    """A table's re-creation statement and serialized rows."""

    name: str
    create_sql: str
    # "('1','a'),('2',null)"; empty when the table has no rows or in DDL mode
    values: str = ""


class TriggerRecord(BaseModel):
    """A trigger's re-creation statement."""

    name: str
    create_sql: str


class DatabaseSnapshot(BaseModel):
    """Complete structured dump of one schema.

    ``tables`` and ``triggers`` keep the order the server listed them in;
    the rendered script follows that order.

    Example:
        >>> snapshot = DatabaseSnapshot(
        ...     schema_name="shop",
        ...     server_version="8.0.36",
        ...     mode=DumpMode.DDL,
        ...     completed_at=datetime(2024, 6, 1),
        ... )
        >>> snapshot.table_names
        []
    """

    schema_name: str
    server_version: str
    mode: DumpMode = DumpMode.FULL
    tables: list[TableRecord] = Field(default_factory=list)
    triggers: list[TriggerRecord] = Field(default_factory=list)
    completed_at: datetime

    @property
    def table_names(self) -> list[str]:
        """Table names in dump order."""
        return [t.name for t in self.tables]

    @property
    def trigger_names(self) -> list[str]:
        """Trigger names in dump order."""
        return [t.name for t in self.triggers]
