"""Storage key layout and age markers.

Canonical layout::

    dumps/<schema>/<timestamp>.sql     full dumps (subject to purge)
    ddl/<schema>.sql                   schema-only scripts (never purged)

A dump's age marker is the timestamp in its file name.  Backends never
consult modification times, so local and remote purges draw the same
boundary for the same keys.
"""

import logging
from datetime import datetime
from pathlib import PurePosixPath

from dumpster.timeutil import format_key_timestamp, parse_timestamp

DUMP_PREFIX = "dumps"
DDL_PREFIX = "ddl"
DUMP_SUFFIX = ".sql"


def dump_key(schema_name: str, moment: datetime) -> str:
    """Key for a full dump of ``schema_name`` completed at ``moment``.

    Examples:
        >>> dump_key("shop", datetime(2024, 6, 1, tzinfo=timezone.utc))
        'dumps/shop/2024-06-01T00-00-00Z.sql'
    """
    return f"{DUMP_PREFIX}/{schema_name}/{format_key_timestamp(moment)}{DUMP_SUFFIX}"


def ddl_key(schema_name: str) -> str:
    """Key for the schema-only script of ``schema_name``."""
    return f"{DDL_PREFIX}/{schema_name}{DUMP_SUFFIX}"


def key_timestamp(key: str) -> datetime | None:
    """Parse the age marker out of ``key``.

    Only the last path segment is considered, so ``dumps/<ts>.sql`` and
    ``dumps/<schema>/<ts>.sql`` parse the same way.

    Returns:
        Aware UTC datetime, or ``None`` when ``key`` is not a dump file or
        its name is not a timestamp.
    """
    name = PurePosixPath(key).name
    if not name.endswith(DUMP_SUFFIX):
        return None
    return parse_timestamp(name[: -len(DUMP_SUFFIX)])


def is_expired(key: str, cutoff: datetime, logger: logging.Logger) -> bool:
    """Whether the dump at ``key`` is strictly older than ``cutoff``.

    Keys without the dump suffix, and dump files whose name does not parse
    as a timestamp, are logged as a warning and ignored.
    """
    if not key.endswith(DUMP_SUFFIX):
        logger.warning("Ignoring non-dump object in purge: %s", key)
        return False

    marker = key_timestamp(key)
    if marker is None:
        logger.warning("Error parsing file date from file name: %s", key)
        return False

    return marker < cutoff
