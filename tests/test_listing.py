"""Unit tests for the directory listing parser."""

from datetime import datetime

import pytest

from pydroidsync.exceptions import ListingParseError
from pydroidsync.sync.listing import extract_file_size, parse_listing

LISTING = """\
drwxrwx--x 3 root sdcard_rw 4096 2021-07-30 18:22 DCIM
-rw-rw---- 1 root sdcard_rw 20480 2021-08-01 09:15 notes.txt
lrwxrwxrwx 1 root root 21 2021-01-01 00:00 sdcard -> /storage/self/primary
crw-rw-rw- 1 root root 1, 3 2021-01-01 00:00 null
"""


class TestParseListing:
    """Tests for parse_listing."""

    def test_single_file_line(self):
        """A regular file line yields one typed entry."""
        entries = parse_listing(
            "-rw-r--r-- 1 root root 1024 2020-01-02 03:04 photo.jpg", "/sdcard/"
        )

        assert len(entries) == 1
        entry = entries[0]
        assert entry.name == "photo.jpg"
        assert entry.path == "/sdcard/photo.jpg"
        assert entry.size == 1024
        assert entry.is_directory is False
        assert entry.timestamp == datetime(2020, 1, 2, 3, 4)
        assert entry.is_readable is True

    def test_directory_line(self):
        """Directories get a trailing separator and size 0."""
        entries = parse_listing(
            "drwxrwx--x 3 root sdcard_rw 4096 2021-07-30 18:22 DCIM", "/sdcard/"
        )

        entry = entries[0]
        assert entry.is_directory is True
        assert entry.path == "/sdcard/DCIM/"
        assert entry.size == 0
        assert entry.timestamp == datetime(2021, 7, 30, 18, 22)

    def test_special_files_are_dropped(self):
        """Symbolic links and device files are silently skipped."""
        entries = parse_listing(LISTING, "/")

        assert [entry.name for entry in entries] == ["DCIM", "notes.txt"]

    def test_listing_order_is_kept(self):
        """Entries are returned in listing order."""
        text = (
            "-rw-r--r-- 1 root root 3 2020-01-01 00:00 b.txt\n"
            "-rw-r--r-- 1 root root 3 2020-01-01 00:00 a.txt\n"
        )

        entries = parse_listing(text, "/x/")

        assert [entry.name for entry in entries] == ["b.txt", "a.txt"]

    def test_blank_lines_are_skipped(self):
        """Empty and whitespace-only lines are ignored."""
        text = "\n   \n-rw-r--r-- 1 root root 3 2020-01-01 00:00 a.txt\n\n"

        assert len(parse_listing(text, "/")) == 1

    def test_empty_listing(self):
        """An empty listing yields no entries."""
        assert parse_listing("", "/sdcard/") == []

    def test_name_with_spaces(self):
        """Names are taken verbatim to the end of the line."""
        entries = parse_listing(
            "-rw-r--r-- 1 u0_a1 u0_a1 77 2022-03-04 05:06 my holiday  photo.jpg",
            "/sdcard/",
        )

        assert entries[0].name == "my holiday  photo.jpg"
        assert entries[0].path == "/sdcard/my holiday  photo.jpg"

    def test_dot_entries_are_skipped(self):
        """The '.' and '..' entries of 'ls -a' are not returned."""
        text = (
            "drwxr-xr-x 4 root root 4096 2020-01-01 00:00 .\n"
            "drwxr-xr-x 9 root root 4096 2020-01-01 00:00 ..\n"
            "drwxr-xr-x 2 root root 4096 2020-01-01 00:00 .hidden\n"
        )

        entries = parse_listing(text, "/data/")

        assert [entry.name for entry in entries] == [".hidden"]

    def test_unreadable_file(self):
        """A permission string without any 'r' is not readable."""
        entries = parse_listing("--w------- 1 root root 10 2020-01-01 00:00 x", "/")

        assert entries[0].is_readable is False

    def test_read_bit_in_other_slot_counts_as_readable(self):
        """Any 'r' after the type character grants readability."""
        entries = parse_listing("--w----r-- 1 root root 10 2020-01-01 00:00 x", "/")

        assert entries[0].is_readable is True

    def test_custom_separator(self):
        """Directory paths use the configured separator."""
        entries = parse_listing(
            "drwxr-xr-x 2 root root 4096 2020-01-01 00:00 Music", "\\sdcard\\", "\\"
        )

        assert entries[0].path == "\\sdcard\\Music\\"

    def test_missing_date_raises(self):
        """A line without a date-time token is fatal."""
        text = (
            "-rw-r--r-- 1 root root 3 2020-01-01 00:00 a.txt\n"
            "ls: /data: Permission denied\n"
        )

        with pytest.raises(ListingParseError) as exc_info:
            parse_listing(text, "/")

        assert exc_info.value.line == "ls: /data: Permission denied"

    def test_invalid_date_raises(self):
        """A token that is not a real date is fatal."""
        with pytest.raises(ListingParseError, match="Cannot parse date"):
            parse_listing("-rw-r--r-- 1 root root 3 2020-13-01 00:00 a.txt", "/")

    def test_missing_size_raises(self):
        """A file line without a numeric size before the date is fatal."""
        with pytest.raises(ListingParseError, match="Cannot parse file size"):
            parse_listing("-rw-r--r-- 1 root root 2020-01-01 00:00 a.txt", "/")


class TestExtractFileSize:
    """Tests for extract_file_size."""

    def test_size_before_token(self):
        """Digits directly before the token are the size."""
        line = "-rw-r--r-- 1 root root 1024 2020-01-02 03:04 photo.jpg"

        assert extract_file_size(line, line.index("2020")) == 1024

    def test_variable_width_columns(self):
        """Extra padding between columns does not matter."""
        line = "-rw-r--r--   1 media_rw   media_rw 7 2020-01-02 03:04 a"

        assert extract_file_size(line, line.index("2020")) == 7

    def test_zero_size(self):
        """Empty files have size 0."""
        line = "-rw-r--r-- 1 root root 0 2020-01-02 03:04 empty"

        assert extract_file_size(line, line.index("2020")) == 0

    def test_no_digits_raises(self):
        """A non-numeric size field is an error."""
        line = "-rw-r--r-- 1 root root big 2020-01-02 03:04 a"

        with pytest.raises(ListingParseError):
            extract_file_size(line, line.index("2020"))
