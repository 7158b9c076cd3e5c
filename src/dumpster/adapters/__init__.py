"""Database adapters package.

Provides the ``DatabaseClient`` Protocol and the MySQL adapter used to run
introspection and data queries.

Usage:
    from dumpster.adapters import DatabaseClient, MySQLAdapter, QueryResult
"""

from dumpster.adapters.base import DatabaseClient, QueryResult
from dumpster.adapters.mysql import MySQLAdapter, normalize_url

__all__ = [
    "DatabaseClient",
    "QueryResult",
    "MySQLAdapter",
    "normalize_url",
]
