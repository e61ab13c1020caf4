"""Parser for long-format directory listings returned by the device.

A listing line looks like::

    -rw-r--r-- 1 root root 1024 2020-01-02 03:04 photo.jpg
    drwxrwx--x 3 system sdcard_rw 4096 2021-07-30 18:22 DCIM

Only directories and regular files are represented; symbolic links and
special files are dropped.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..exceptions import ListingParseError

logger = logging.getLogger(__name__)

DATE_TIME_RE = re.compile(r"\s(\d{4}-\d{2}-\d{2}\s\d{2}:\d{2})\s")
DATE_TIME_FORMAT = "%Y-%m-%d %H:%M"


@dataclass
class DirectoryEntry:
    """A directory or regular file reported by a remote listing."""

    path: str
    """Absolute remote path (directories end with the separator)"""

    name: str
    """Base name exactly as reported by the listing"""

    is_directory: bool
    """Whether the entry is a directory"""

    size: int
    """File size in bytes (always 0 for directories)"""

    timestamp: datetime
    """Modification time with minute resolution"""

    is_readable: bool
    """Whether the permission string grants read access"""


def extract_file_size(line: str, token_start: int) -> int:
    """Recover the size field preceding the date-time token.

    Scans backward from two characters before the token (skipping the
    separating space) and collects digits until a non-digit is found.
    This tolerates metadata columns of varying width.

    Args:
        line: Listing line
        token_start: Index of the first character of the date-time token

    Returns:
        File size in bytes

    Raises:
        ListingParseError: If no numeric size precedes the token

    Examples:
        >>> line = "-rw-r--r-- 1 root root 1024 2020-01-02 03:04 photo.jpg"
        >>> extract_file_size(line, line.index("2020"))
        1024
    """
    idx = token_start - 2
    digits = ""
    while idx >= 0 and line[idx].isdigit():
        digits = line[idx] + digits
        idx -= 1

    try:
        return int(digits)
    except ValueError as e:
        raise ListingParseError(f"Cannot parse file size: {line}", line=line) from e


def parse_listing_line(
    line: str, parent_path: str, separator: str = "/"
) -> Optional[DirectoryEntry]:
    """Parse a single non-empty listing line.

    Args:
        line: Stripped listing line
        parent_path: Remote directory the listing was taken from
        separator: Remote path separator

    Returns:
        DirectoryEntry, or None for symbolic links and special files

    Raises:
        ListingParseError: If the line has no valid date-time token or size
    """
    match = DATE_TIME_RE.search(line)
    if match is None:
        raise ListingParseError(f"Invalid file entry: {line}", line=line)

    file_type = line[0]
    if file_type not in ("-", "d"):
        return None

    is_directory = file_type == "d"
    date_string = match.group(1)
    try:
        timestamp = datetime.strptime(date_string, DATE_TIME_FORMAT)
    except ValueError as e:
        raise ListingParseError(f"Cannot parse date: {date_string}", line=line) from e

    token_start = match.start(1)
    name = line[match.end(1) + 1 :]

    size = 0
    if not is_directory:
        size = extract_file_size(line, token_start)

    permissions = line.split(None, 1)[0]
    path = parent_path + name
    if is_directory:
        path += separator

    return DirectoryEntry(
        path=path,
        name=name,
        is_directory=is_directory,
        size=size,
        timestamp=timestamp,
        is_readable="r" in permissions[1:],
    )


def parse_listing(
    text: str, parent_path: str, separator: str = "/"
) -> list[DirectoryEntry]:
    """Parse a complete directory listing.

    Args:
        text: Raw listing output
        parent_path: Remote directory the listing was taken from (ending
            with the separator)
        separator: Remote path separator

    Returns:
        Entries in listing order

    Raises:
        ListingParseError: If any line is malformed; no partial result is
            returned
    """
    entries: list[DirectoryEntry] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        entry = parse_listing_line(line, parent_path, separator)
        if entry is None:
            logger.debug("Skipping special file: %s", line)
            continue
        if entry.name in (".", ".."):
            continue
        entries.append(entry)
    return entries
