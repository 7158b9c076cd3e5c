"""Dump assembly: introspection into a snapshot, snapshot into SQL text.

``build_snapshot`` runs every query of a dump in sequence and returns a
``DatabaseSnapshot``; ``render`` turns that snapshot into a replayable
MySQL script.  ``render`` does no I/O and reads no clock.

Usage:
    from dumpster.dump.assembler import build_snapshot, render
    from dumpster.schema.models import DumpMode

    with MySQLAdapter(url) as client:
        snapshot = build_snapshot(client, DumpMode.FULL)
    script = render(snapshot)
"""

import logging
from collections.abc import Callable
from datetime import datetime

from dumpster.adapters.base import DatabaseClient
from dumpster.schema.models import DatabaseSnapshot, DumpMode
from dumpster.schema.reader import SchemaReader
from dumpster.schema.serializer import TableSerializer
from dumpster.timeutil import format_rfc3339, utc_now


def build_snapshot(
    client: DatabaseClient,
    mode: DumpMode = DumpMode.FULL,
    *,
    logger: logging.Logger | None = None,
    now: Callable[[], datetime] = utc_now,
) -> DatabaseSnapshot:
    """Introspect the connected schema into a ``DatabaseSnapshot``.

    Order of work: schema name, server version, each table (DDL, then rows
    in full mode), each trigger.  ``completed_at`` is stamped after the
    last query.  The first failing query aborts the whole snapshot.

    Args:
        client: Connected ``DatabaseClient``.
        mode: ``DumpMode.FULL`` for schema + data, ``DumpMode.DDL`` for
            schema only.
        logger: Logger passed to the reader and serializer.
        now: Clock used for ``completed_at``.

    Returns:
        Fully materialized snapshot.

    Raises:
        QueryError: If any statement fails.
        InvalidResultError: If any required value is missing or mismatched.
    """
    logger = logger or logging.getLogger(__name__)
    reader = SchemaReader(client, logger=logger)
    serializer = TableSerializer(client, logger=logger)

    schema_name = reader.current_schema_name()
    server_version = reader.server_version()

    tables = [serializer.table_record(name, mode) for name in reader.list_tables()]
    triggers = [serializer.trigger_record(name) for name in reader.list_triggers()]

    snapshot = DatabaseSnapshot(
        schema_name=schema_name,
        server_version=server_version,
        mode=mode,
        tables=tables,
        triggers=triggers,
        completed_at=now(),
    )
    logger.info(
        "Snapshot of %s complete: %d tables, %d triggers",
        schema_name,
        len(tables),
        len(triggers),
    )
    return snapshot


def render(snapshot: DatabaseSnapshot, *, drop_database: bool = False) -> str:
    """Render ``snapshot`` as a MySQL script.

    In full mode each table is preceded by ``DROP TABLE IF EXISTS``.  With
    ``drop_database=True`` the whole database is dropped up front instead,
    which also discards objects that are not in the dump.
    ``drop_database`` has no effect in DDL mode.

    Args:
        snapshot: Snapshot from ``build_snapshot``.
        drop_database: Emit ``DROP DATABASE IF EXISTS`` in full mode.

    Returns:
        Script text.  Identical snapshots render identically.
    """
    full = snapshot.mode is DumpMode.FULL
    drop_tables = full and not drop_database
    schema = snapshot.schema_name

    lines = [
        "",
        f"-- Server version\t{snapshot.server_version}",
        "",
    ]
    if full and drop_database:
        lines.append(f"DROP DATABASE IF EXISTS {schema};")
    lines += [
        f"CREATE DATABASE IF NOT EXISTS {schema};",
        f"USE {schema};",
        "",
        "SET FOREIGN_KEY_CHECKS=0;",
    ]

    for table in snapshot.tables:
        lines += ["", f"-- Table structure for table {table.name}"]
        if drop_tables:
            lines.append(f"DROP TABLE IF EXISTS {table.name};")
        lines.append(f"{table.create_sql};")

        if table.values:
            lines += [
                "",
                f"-- Data dump for table {table.name}",
                f"LOCK TABLES {table.name} WRITE;",
                "",
                f"INSERT INTO {table.name} VALUES {table.values};",
                "",
                "UNLOCK TABLES;",
            ]

    lines += ["", "SET FOREIGN_KEY_CHECKS=1;"]

    for trigger in snapshot.triggers:
        lines += ["", f"-- Trigger structure for trigger {trigger.name}", f"{trigger.create_sql};"]

    lines += ["", f"-- Dump completed at {format_rfc3339(snapshot.completed_at)}", ""]
    return "\n".join(lines)


def dump_database(
    client: DatabaseClient,
    mode: DumpMode = DumpMode.FULL,
    *,
    drop_database: bool = False,
    logger: logging.Logger | None = None,
    now: Callable[[], datetime] = utc_now,
) -> tuple[DatabaseSnapshot, str]:
    """Build and render a dump in one call.

    Returns:
        Tuple of (snapshot, script).  The snapshot is returned so callers
        can name the stored file after its schema and completion time.
    """
    snapshot = build_snapshot(client, mode, logger=logger, now=now)
    return snapshot, render(snapshot, drop_database=drop_database)
