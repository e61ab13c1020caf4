"""Utility functions for pydroidsync."""

from datetime import datetime


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


def format_timestamp(timestamp: datetime) -> str:
    """Format a listing timestamp the way the device reports it.

    Examples:
        >>> format_timestamp(datetime(2020, 1, 2, 3, 4))
        '2020-01-02 03:04'
    """
    return timestamp.strftime("%Y-%m-%d %H:%M")


def ensure_trailing_separator(path: str, separator: str = "/") -> str:
    """Append the separator to a remote directory path if missing.

    Examples:
        >>> ensure_trailing_separator("/sdcard")
        '/sdcard/'
        >>> ensure_trailing_separator("/sdcard/")
        '/sdcard/'
    """
    if path.endswith(separator):
        return path
    return path + separator
