"""pydroidsync - mirror files from an Android device to a local directory."""

from .adb import AdbChannel, DeviceChannel
from .exceptions import (
    CommandChannelError,
    DroidSyncConfigError,
    DroidSyncError,
    ListingParseError,
    LocalFilesystemError,
    PatternError,
)
from .sync import SyncConfig, SyncEngine

__version__ = "0.1.0"

__all__ = [
    "AdbChannel",
    "DeviceChannel",
    "SyncConfig",
    "SyncEngine",
    "CommandChannelError",
    "DroidSyncConfigError",
    "DroidSyncError",
    "ListingParseError",
    "LocalFilesystemError",
    "PatternError",
]
