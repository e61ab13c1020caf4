"""Configuration for a synchronization run."""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Union

from ..exceptions import DroidSyncConfigError, PatternError
from .comparator import DEFAULT_CHANGE_TOLERANCE

# Virtual and temporary filesystems that are never worth mirroring
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "/proc/",
    "/acct/",
    "/dev/",
    "/tmp/",
    "/sys/",
)


def split_ignore_patterns(value: str) -> list[str]:
    """Split a ``;``-separated list of ignore patterns.

    Examples:
        >>> split_ignore_patterns("*.mkv;cache/; ;*.iso")
        ['*.mkv', 'cache/', '*.iso']
    """
    return [part.strip() for part in value.split(";") if part.strip()]


@dataclass
class SyncConfig:
    """Read-only settings for a synchronization run.

    Examples:
        >>> cfg = SyncConfig(ignore_patterns=["*.mkv"], change_tolerance=2)
        >>> cfg.change_tolerance
        datetime.timedelta(seconds=2)
        >>> cfg.all_ignore_patterns[-1]
        '*.mkv'
    """

    path_separator: str = "/"
    """Path separator of the remote device"""

    ignore_patterns: list[str] = field(default_factory=list)
    """Glob-like patterns of remote paths to skip"""

    change_tolerance: Union[timedelta, int, float] = DEFAULT_CHANGE_TOLERANCE
    """Maximum timestamp difference treated as unchanged"""

    use_default_ignores: bool = True
    """Also skip /proc/, /acct/, /dev/, /tmp/ and /sys/"""

    dry_run: bool = False
    """Only report what would be pulled"""

    def __post_init__(self) -> None:
        if len(self.path_separator) != 1:
            raise DroidSyncConfigError(
                f"Path separator must be a single character: {self.path_separator!r}"
            )

        if not isinstance(self.change_tolerance, timedelta):
            try:
                self.change_tolerance = timedelta(seconds=self.change_tolerance)
            except (ValueError, OverflowError) as e:
                raise DroidSyncConfigError(
                    f"Invalid change tolerance {self.change_tolerance!r}: {e}"
                ) from e
        if self.change_tolerance < timedelta(0):
            raise DroidSyncConfigError("Change tolerance must not be negative")

        self.ignore_patterns = list(self.ignore_patterns)
        for pattern in self.ignore_patterns:
            if not pattern:
                raise PatternError("Ignore pattern must not be empty")

    @property
    def all_ignore_patterns(self) -> list[str]:
        """Default patterns (if enabled) followed by the configured ones."""
        if self.use_default_ignores:
            return list(DEFAULT_IGNORE_PATTERNS) + self.ignore_patterns
        return list(self.ignore_patterns)
