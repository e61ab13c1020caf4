"""File comparison logic for sync operations."""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Optional

from .listing import DirectoryEntry

logger = logging.getLogger(__name__)

# Earliest year representable on FAT filesystems (and macOS local dates)
ORIGIN_YEAR = 1980

DEFAULT_CHANGE_TOLERANCE = timedelta(seconds=2)


class SyncAction(str, Enum):
    """Actions that can be taken for a remote file."""

    DOWNLOAD = "download"
    """Pull remote file to local"""

    SKIP = "skip"
    """Skip file (local copy is up to date)"""


@dataclass
class SyncDecision:
    """Represents a decision about how to sync a file."""

    action: SyncAction
    """Action to take"""

    reason: str
    """Human-readable reason for this decision"""

    entry: DirectoryEntry
    """Remote entry"""

    local_path: Path
    """Local target path"""

    local_size: Optional[int] = None
    """Size of the existing local file (if any)"""

    local_mtime: Optional[datetime] = None
    """Modification time of the existing local file (if any)"""


def timestamps_equivalent(
    first: datetime,
    second: datetime,
    tolerance: timedelta = DEFAULT_CHANGE_TOLERANCE,
) -> bool:
    """Check whether two modification times should be considered equal.

    Some filesystems clamp dates to 1980 while the local host keeps earlier
    dates. If exactly one date is in 1980 and the other is older, both are
    moved to 1980 (keeping month, day and time of day) and compared again.

    Args:
        first: First timestamp
        second: Second timestamp
        tolerance: Maximum difference still treated as equal

    Returns:
        True if the timestamps are equivalent

    Examples:
        >>> timestamps_equivalent(datetime(2020, 1, 1, 0, 0, 1), datetime(2020, 1, 1))
        True
        >>> timestamps_equivalent(datetime(1980, 5, 6, 7, 8), datetime(1979, 5, 6, 7, 8))
        True
    """
    if abs(first - second) <= tolerance:
        return True

    if (first.year == ORIGIN_YEAR and second.year < ORIGIN_YEAR) or (
        first.year < ORIGIN_YEAR and second.year == ORIGIN_YEAR
    ):
        first = first.replace(year=ORIGIN_YEAR)
        second = second.replace(year=ORIGIN_YEAR)
        return abs(first - second) <= tolerance

    return False


class FileComparator:
    """Compares remote entries with local files to decide what to pull."""

    def __init__(
        self,
        tolerance: timedelta = DEFAULT_CHANGE_TOLERANCE,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize file comparator.

        Args:
            tolerance: Maximum timestamp difference treated as unchanged
            log: Logger for local stat failures (defaults to module logger)
        """
        self.tolerance = tolerance
        self.log = log or logger

    def compare(self, entry: DirectoryEntry, local_path: Path) -> SyncDecision:
        """Decide whether a remote file must be pulled.

        Args:
            entry: Remote file entry
            local_path: Path of the local copy

        Returns:
            SyncDecision with DOWNLOAD or SKIP
        """
        try:
            local_stat = os.stat(local_path)
        except FileNotFoundError:
            return SyncDecision(
                action=SyncAction.DOWNLOAD,
                reason="New remote file",
                entry=entry,
                local_path=local_path,
            )
        except OSError as e:
            self.log.warning(f"Could not get info on target path: {local_path}: {e}")
            return SyncDecision(
                action=SyncAction.DOWNLOAD,
                reason=f"Cannot stat local file ({e.strerror or e})",
                entry=entry,
                local_path=local_path,
            )

        local_mtime = datetime.fromtimestamp(local_stat.st_mtime)

        if local_stat.st_size != entry.size:
            return SyncDecision(
                action=SyncAction.DOWNLOAD,
                reason=f"Size changed ({local_stat.st_size} vs {entry.size})",
                entry=entry,
                local_path=local_path,
                local_size=local_stat.st_size,
                local_mtime=local_mtime,
            )

        if not timestamps_equivalent(entry.timestamp, local_mtime, self.tolerance):
            return SyncDecision(
                action=SyncAction.DOWNLOAD,
                reason="Modification time changed",
                entry=entry,
                local_path=local_path,
                local_size=local_stat.st_size,
                local_mtime=local_mtime,
            )

        return SyncDecision(
            action=SyncAction.SKIP,
            reason="Files are identical (same size and timestamp)",
            entry=entry,
            local_path=local_path,
            local_size=local_stat.st_size,
            local_mtime=local_mtime,
        )
