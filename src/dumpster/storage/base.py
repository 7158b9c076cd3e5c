"""Storage backend protocol definition.

Defines the ``Storage`` Protocol implemented by ``LocalStorage`` and
``ObjectStorage``.  Callers depend on this Protocol only.

Usage:
    from dumpster.storage.base import Storage

    def archive(storage: Storage, key: str, script: str) -> None:
        storage.save(key, script.encode("utf-8"))
"""

from datetime import datetime
from typing import Protocol


class Storage(Protocol):
    """Blob storage for dump scripts.

    Keys are ``/``-separated paths such as
    ``dumps/shop/2024-06-01T00-00-00Z.sql``.
    """

    def save(self, key: str, data: bytes) -> None:
        """Store ``data`` under ``key``, replacing any existing object.

        Missing parent path segments are created.

        Raises:
            StorageIOError: If the write fails.
        """
        ...

    def load(self, key: str) -> bytes:
        """Return the bytes stored under ``key``.

        Raises:
            ObjectNotFoundError: If nothing is stored under ``key``.
            StorageIOError: If the read fails.
        """
        ...

    def delete(self, key: str) -> None:
        """Delete the object stored under ``key``.

        Raises:
            ObjectNotFoundError: If nothing is stored under ``key``.
            StorageIOError: If the delete fails.
        """
        ...

    def purge(self, cutoff: datetime) -> int:
        """Delete every dump whose file-name timestamp is before ``cutoff``.

        Args:
            cutoff: Aware datetime.  Dumps stamped exactly at ``cutoff``
                are kept.

        Returns:
            Number of objects deleted.
        """
        ...
