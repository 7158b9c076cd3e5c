"""Dump storage backends and retention.

Provides the ``Storage`` Protocol, the local and S3-compatible backends,
key helpers, and the ``RetentionPurger``.

Usage:
    from dumpster.storage import LocalStorage, RetentionPurger, dump_key
    from dumpster.storage import connect_object_storage
"""

from dumpster.storage.base import Storage
from dumpster.storage.keys import (
    DDL_PREFIX,
    DUMP_PREFIX,
    DUMP_SUFFIX,
    ddl_key,
    dump_key,
    is_expired,
    key_timestamp,
)
from dumpster.storage.local import LocalStorage, purge_directory
from dumpster.storage.object_store import (
    ObjectStorage,
    connect_object_storage,
    create_s3_client,
)
from dumpster.storage.retention import PurgeResult, RetentionPurger, compute_cutoff

__all__ = [
    "Storage",
    "LocalStorage",
    "ObjectStorage",
    "connect_object_storage",
    "create_s3_client",
    "purge_directory",
    "RetentionPurger",
    "PurgeResult",
    "compute_cutoff",
    "dump_key",
    "ddl_key",
    "key_timestamp",
    "is_expired",
    "DUMP_PREFIX",
    "DDL_PREFIX",
    "DUMP_SUFFIX",
]
