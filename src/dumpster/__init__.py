"""dumpster: MySQL schema and data dumps with retention.

Exports a MySQL schema and its rows into a replayable SQL script, stores
it on the local filesystem or in an S3-compatible bucket, and purges dumps
older than a retention window.

Usage:
    from dumpster import MySQLAdapter, build_snapshot, render, DumpMode
    from dumpster import LocalStorage, RetentionPurger, dump_key
"""

__version__ = "0.1.0"

# Adapters
from dumpster.adapters.base import DatabaseClient, QueryResult
from dumpster.adapters.mysql import MySQLAdapter

# Config
from dumpster.config.loader import load_config
from dumpster.config.models import DatabaseProfile, DumpsterConfig

# Dump
from dumpster.dump.assembler import build_snapshot, dump_database, render
from dumpster.schema.models import DatabaseSnapshot, DumpMode, TableRecord, TriggerRecord

# Errors
from dumpster.errors import DumpsterError

# Factory
from dumpster.factory import (
    ProfileNotFoundError,
    get_storage,
    resolve_connection_string,
    resolve_url,
)

# Storage
from dumpster.storage import (
    LocalStorage,
    ObjectStorage,
    PurgeResult,
    RetentionPurger,
    Storage,
    connect_object_storage,
    dump_key,
)

__all__ = [
    # Adapters
    "DatabaseClient",
    "QueryResult",
    "MySQLAdapter",
    # Config
    "load_config",
    "DatabaseProfile",
    "DumpsterConfig",
    # Dump
    "build_snapshot",
    "render",
    "dump_database",
    "DatabaseSnapshot",
    "DumpMode",
    "TableRecord",
    "TriggerRecord",
    # Errors
    "DumpsterError",
    # Factory
    "ProfileNotFoundError",
    "resolve_connection_string",
    "resolve_url",
    "get_storage",
    # Storage
    "Storage",
    "LocalStorage",
    "ObjectStorage",
    "connect_object_storage",
    "RetentionPurger",
    "PurgeResult",
    "dump_key",
]
