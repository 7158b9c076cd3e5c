"""Local filesystem storage backend.

Keys map to paths under a root directory (the working directory by
default), so ``dumps/shop/<ts>.sql`` lands in ``./dumps/shop/<ts>.sql``.

Usage:
    from dumpster.storage.local import LocalStorage

    storage = LocalStorage()
    storage.save("dumps/shop/2024-06-01T00-00-00Z.sql", script.encode())
    removed = storage.purge(cutoff)
"""

import logging
from datetime import datetime
from pathlib import Path

from dumpster.errors import ObjectNotFoundError, StorageIOError
from dumpster.storage.keys import DUMP_PREFIX, DUMP_SUFFIX, is_expired
from dumpster.storage.metrics import observe


def purge_directory(
    directory: Path,
    cutoff: datetime,
    logger: logging.Logger,
) -> int:
    """Delete every dump file under ``directory`` stamped before ``cutoff``.

    Walks ``directory`` recursively.  Age comes from each file name, never
    from its modification time.  A missing directory purges nothing.

    Args:
        directory: Directory to scan.
        cutoff: Aware datetime; files stamped before it are deleted.
        logger: Logger for skipped and deleted files.

    Returns:
        Number of files deleted.

    Raises:
        StorageIOError: If listing or deleting fails.
    """
    if not directory.is_dir():
        logger.debug("Dump directory %s does not exist, nothing to purge", directory)
        return 0

    count = 0
    try:
        candidates = sorted(p for p in directory.rglob(f"*{DUMP_SUFFIX}") if p.is_file())
    except OSError as e:
        raise StorageIOError(f"Error reading dump directory {directory}: {e}") from e

    for path in candidates:
        if not is_expired(path.name, cutoff, logger):
            continue
        try:
            path.unlink()
        except OSError as e:
            raise StorageIOError(f"Error deleting file {path}: {e}") from e
        logger.info("Purged file: %s", path)
        count += 1

    return count


class LocalStorage:
    """``Storage`` implementation backed by the local filesystem.

    Args:
        root: Directory keys are resolved against (default: working
            directory at construction time).
        logger: Logger (default: module logger).
    """

    backend_name = "local"

    def __init__(self, root: Path | str | None = None, logger: logging.Logger | None = None):
        self.root = Path(root) if root is not None else Path.cwd()
        self._logger = logger or logging.getLogger(__name__)

    def path_for(self, key: str) -> Path:
        """Filesystem path for ``key``."""
        return self.root / key.lstrip("/")

    def save(self, key: str, data: bytes) -> None:
        """Write ``data`` to ``key``, creating parent directories."""
        path = self.path_for(key)
        with observe(self.backend_name, "save_file"):
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(data)
            except OSError as e:
                raise StorageIOError(f"Error writing file {path}: {e}") from e
        self._logger.debug("Saved %d bytes to %s", len(data), path)

    def load(self, key: str) -> bytes:
        """Read ``key``."""
        path = self.path_for(key)
        with observe(self.backend_name, "download_file"):
            try:
                return path.read_bytes()
            except FileNotFoundError:
                raise ObjectNotFoundError(key) from None
            except OSError as e:
                raise StorageIOError(f"Error reading file {path}: {e}") from e

    def delete(self, key: str) -> None:
        """Delete ``key``."""
        path = self.path_for(key)
        with observe(self.backend_name, "delete_file"):
            try:
                path.unlink()
            except FileNotFoundError:
                raise ObjectNotFoundError(key) from None
            except OSError as e:
                raise StorageIOError(f"Error deleting file {path}: {e}") from e

    def purge(self, cutoff: datetime) -> int:
        """Delete dumps under ``<root>/dumps`` stamped before ``cutoff``."""
        with observe(self.backend_name, "purge"):
            return purge_directory(self.root / DUMP_PREFIX, cutoff, self._logger)
