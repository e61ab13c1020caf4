"""Unit tests for utility functions."""

from datetime import datetime

from pydroidsync.utils import ensure_trailing_separator, format_size, format_timestamp


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        """Small sizes are shown in bytes."""
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        """Sizes below one megabyte are shown in KB."""
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        """Sizes below one gigabyte are shown in MB."""
        assert format_size(5 * 1024 * 1024) == "5.0 MB"

    def test_gigabytes(self):
        """Large sizes are shown in GB."""
        assert format_size(3 * 1024 * 1024 * 1024) == "3.0 GB"


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_minute_resolution(self):
        """Timestamps are shown like the device listing."""
        assert format_timestamp(datetime(2020, 1, 2, 3, 4, 59)) == "2020-01-02 03:04"


class TestEnsureTrailingSeparator:
    """Tests for ensure_trailing_separator function."""

    def test_appends_separator(self):
        """A missing separator is appended."""
        assert ensure_trailing_separator("/sdcard") == "/sdcard/"

    def test_keeps_existing_separator(self):
        """An existing separator is not doubled."""
        assert ensure_trailing_separator("/sdcard/") == "/sdcard/"

    def test_custom_separator(self):
        """The separator can be chosen."""
        assert ensure_trailing_separator("\\sdcard", "\\") == "\\sdcard\\"
