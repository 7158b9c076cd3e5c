"""Schema introspection and per-object serialization.

Usage:
    from dumpster.schema import SchemaReader, TableSerializer
    from dumpster.schema import DatabaseSnapshot, DumpMode
"""

from dumpster.schema.models import (
    DatabaseSnapshot,
    DumpMode,
    TableRecord,
    TriggerRecord,
)
from dumpster.schema.reader import SchemaReader
from dumpster.schema.serializer import (
    NULL_TOKEN,
    TableSerializer,
    format_rows,
    format_value,
)

__all__ = [
    "SchemaReader",
    "TableSerializer",
    "format_value",
    "format_rows",
    "NULL_TOKEN",
    "DatabaseSnapshot",
    "DumpMode",
    "TableRecord",
    "TriggerRecord",
]
