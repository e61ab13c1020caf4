"""Core sync engine mirroring a device directory tree to a local directory."""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Optional, Union

from ..adb import DeviceChannel
from ..exceptions import LocalFilesystemError
from ..output import OutputFormatter
from ..utils import ensure_trailing_separator
from .comparator import FileComparator, SyncAction
from .config import SyncConfig
from .ignore import IgnoreMatcher
from .listing import DirectoryEntry, parse_listing

logger = logging.getLogger(__name__)


class SyncEngine:
    """Pulls new and changed files from a device, depth-first.

    The first fatal error (listing failure, local directory creation failure
    or pull failure) aborts the whole run and propagates to the caller.
    Files pulled before that point stay on disk.
    """

    def __init__(
        self,
        channel: DeviceChannel,
        sync_config: Optional[SyncConfig] = None,
        output: Optional[OutputFormatter] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize sync engine.

        Args:
            channel: Device command channel used to list and pull
            sync_config: Settings for the run (defaults to SyncConfig())
            output: Output formatter for displaying the summary
            log: Logger receiving per-file records (defaults to module logger)
        """
        self.channel = channel
        self.sync_config = sync_config or SyncConfig()
        self.output = output or OutputFormatter()
        self.log = log or logger
        self.ignore_matcher = IgnoreMatcher(
            self.sync_config.all_ignore_patterns,
            separator=self.sync_config.path_separator,
        )
        self.comparator = FileComparator(
            self.sync_config.change_tolerance, log=self.log
        )

    def synchronize(
        self,
        remote_dir: str,
        local_dir: Union[str, Path],
        progress_callback: Optional[Callable[[str], None]] = None,
    ) -> dict:
        """Mirror a remote directory into a local directory.

        Args:
            remote_dir: Remote directory to mirror
            local_dir: Local target directory (created if missing)
            progress_callback: Optional callback invoked with each remote
                directory as it is entered

        Returns:
            Dictionary with sync statistics

        Raises:
            CommandChannelError: If listing or pulling fails
            ListingParseError: If a listing cannot be parsed
            LocalFilesystemError: If a local directory cannot be created

        Examples:
            >>> config = SyncConfig(ignore_patterns=["*.mkv"])
            >>> engine = SyncEngine(AdbChannel(), config)
            >>> stats = engine.synchronize("/sdcard/", "/backup/phone")
            >>> print(f"Pulled {stats['downloads']} files")
        """
        stats = self._create_empty_stats()
        remote_dir = ensure_trailing_separator(
            remote_dir, self.sync_config.path_separator
        )

        if self.sync_config.dry_run:
            self.log.debug("Dry run: No files will be pulled")

        self._sync_directory(remote_dir, Path(local_dir), stats, progress_callback)

        if not self.output.quiet:
            self._display_summary(stats)

        return stats

    def _create_empty_stats(self) -> dict:
        """Create an empty statistics dictionary."""
        return {
            "directories": 0,
            "downloads": 0,
            "unchanged": 0,
            "ignored": 0,
            "unreadable": 0,
            "missing": 0,
        }

    def _sync_directory(
        self,
        remote_dir: str,
        local_dir: Path,
        stats: dict,
        progress_callback: Optional[Callable[[str], None]],
    ) -> None:
        if self.ignore_matcher.is_ignored(remote_dir):
            self.log.debug(f"Skipping: {remote_dir}")
            stats["ignored"] += 1
            return

        if progress_callback is not None:
            progress_callback(remote_dir)

        entries = parse_listing(
            self.channel.list(remote_dir),
            remote_dir,
            self.sync_config.path_separator,
        )
        stats["directories"] += 1

        if not self.sync_config.dry_run:
            try:
                local_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LocalFilesystemError(
                    f"Cannot create local directory {local_dir}: {e}"
                ) from e

        for entry in entries:
            if entry.is_directory:
                self._sync_directory(
                    entry.path, local_dir / entry.name, stats, progress_callback
                )
                continue
            self._sync_file(entry, local_dir / entry.name, stats)

    def _sync_file(self, entry: DirectoryEntry, local_path: Path, stats: dict) -> None:
        if self.ignore_matcher.is_ignored(entry.path):
            self.log.debug(f"Skipping: {entry.path}")
            stats["ignored"] += 1
            return

        if not entry.is_readable:
            self.log.debug(f"Skipping unreadable file: {entry.path}")
            stats["unreadable"] += 1
            return

        decision = self.comparator.compare(entry, local_path)
        if decision.action == SyncAction.SKIP:
            stats["unchanged"] += 1
            return

        self.log.debug(f"Pulling {entry.path}: {decision.reason}")
        if self.sync_config.dry_run:
            self.log.info(f"Would pull {entry.path} ({decision.reason})")
            stats["downloads"] += 1
            return

        pull_output = self.channel.pull(entry.path, local_path)

        if not local_path.exists():
            self.log.error(f"{local_path} could not be copied.")
            stats["missing"] += 1
            return

        try:
            os.utime(local_path, (time.time(), entry.timestamp.timestamp()))
        except (OSError, OverflowError, ValueError) as e:
            self.log.error(f"Could not set timestamp on {local_path}: {e}")

        stats["downloads"] += 1
        if pull_output:
            self.log.info(f"{entry.path}: {pull_output}")
        else:
            self.log.info(entry.path)

    def _display_summary(self, stats: dict) -> None:
        """Display sync summary.

        Args:
            stats: Statistics dictionary
        """
        self.output.print("")
        if self.sync_config.dry_run:
            self.output.success("Dry run complete!")
        else:
            self.output.success("Sync complete!")

        self.output.info(f"Directories scanned: {stats['directories']}")
        if stats["downloads"] > 0:
            verb = "To pull" if self.sync_config.dry_run else "Pulled"
            self.output.info(f"  {verb}: {stats['downloads']}")
        else:
            self.output.info("No changes needed - everything is in sync!")
        if stats["unchanged"] > 0:
            self.output.info(f"  Unchanged: {stats['unchanged']}")
        if stats["ignored"] > 0:
            self.output.info(f"  Ignored: {stats['ignored']}")
        if stats["unreadable"] > 0:
            self.output.info(f"  Unreadable: {stats['unreadable']}")
        if stats["missing"] > 0:
            self.output.warning(f"{stats['missing']} pulled file(s) missing afterwards")
