"""Age-based retention for stored dumps.

``RetentionPurger.purge(days)`` deletes every dump stamped before midnight
UTC ``days`` days ago.  It first sweeps the local ``dumps/`` directory, so
leftovers from earlier local runs are cleaned even when an object store is
the active backend, then calls the backend's ``purge`` exactly once.

Usage:
    from dumpster.storage.retention import RetentionPurger

    result = RetentionPurger(storage).purge(days=30)
    print(result.total)
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pydantic import BaseModel

from dumpster.storage.base import Storage
from dumpster.storage.keys import DUMP_PREFIX
from dumpster.storage.local import purge_directory
from dumpster.timeutil import utc_now


class PurgeResult(BaseModel):
    """Outcome of one retention run.

    Example:
        >>> PurgeResult(skipped=True).total
        0
    """

    cutoff: datetime | None = None
    local_count: int = 0
    backend_count: int = 0
    skipped: bool = False  # days == 0

    @property
    def total(self) -> int:
        """Objects removed across the local directory and the backend."""
        return self.local_count + self.backend_count


def compute_cutoff(days: int, now: datetime | None = None) -> datetime:
    """Midnight UTC ``days`` days before ``now``.

    Examples:
        >>> compute_cutoff(1, datetime(2024, 6, 2, 15, 30, tzinfo=timezone.utc))
        datetime.datetime(2024, 6, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    moment = now.astimezone(timezone.utc) - timedelta(days=days)
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


class RetentionPurger:
    """Coordinates purging across the local dump directory and a backend.

    Args:
        storage: Active ``Storage`` backend.
        local_dir: Local dump directory swept before the backend
            (``None`` to skip).  A missing directory is not an error.
        logger: Logger (default: module logger).
        now: Clock used to compute the cutoff.
    """

    def __init__(
        self,
        storage: Storage,
        local_dir: Path | str | None = DUMP_PREFIX,
        *,
        logger: logging.Logger | None = None,
        now: Callable[[], datetime] = utc_now,
    ):
        self._storage = storage
        self._local_dir = Path(local_dir) if local_dir is not None else None
        self._logger = logger or logging.getLogger(__name__)
        self._now = now

    def purge(self, days: int) -> PurgeResult:
        """Delete dumps older than ``days`` days.

        Args:
            days: Retention window.  ``0`` disables purging entirely.

        Returns:
            ``PurgeResult`` with per-location counts.

        Raises:
            ValueError: If ``days`` is negative.
            StorageError: If listing or deleting fails.
        """
        if days < 0:
            raise ValueError(f"Retention days must not be negative, got {days}")
        if days == 0:
            self._logger.debug("Days to purge is 0, data will not be purged")
            return PurgeResult(skipped=True)

        cutoff = compute_cutoff(days, self._now())
        self._logger.debug("Purging dumps older than %s", cutoff.isoformat())

        local_count = 0
        if self._local_dir is not None:
            local_count = purge_directory(self._local_dir, cutoff, self._logger)
            if local_count:
                self._logger.info("Purged %d files locally", local_count)
            else:
                self._logger.debug("No files to purge locally")

        backend_count = self._storage.purge(cutoff)
        self._logger.info("Purged %d files from storage", backend_count)

        return PurgeResult(
            cutoff=cutoff,
            local_count=local_count,
            backend_count=backend_count,
        )
