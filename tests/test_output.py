"""Unit tests for the output formatter."""

import json

from pydroidsync.output import OutputFormatter


class TestOutputFormatter:
    """Tests for OutputFormatter."""

    def test_info_printed(self, capsys):
        """Informational messages go to stdout."""
        OutputFormatter().info("Syncing: /sdcard/ -> ./phone")

        assert "Syncing: /sdcard/ -> ./phone" in capsys.readouterr().out

    def test_quiet_suppresses_info(self, capsys):
        """Quiet mode hides informational messages."""
        out = OutputFormatter(quiet=True)

        out.info("hidden")
        out.success("hidden")

        assert capsys.readouterr().out == ""

    def test_error_never_suppressed(self, capsys):
        """Errors are printed to stderr even when quiet."""
        OutputFormatter(quiet=True).error("boom")

        assert "Error: boom" in capsys.readouterr().err

    def test_markup_in_messages_is_literal(self, capsys):
        """Square brackets in paths are not treated as markup."""
        OutputFormatter().info("/sdcard/abcd[test]")

        assert "/sdcard/abcd[test]" in capsys.readouterr().out

    def test_json_output(self, capsys):
        """JSON mode writes machine-readable output only."""
        out = OutputFormatter(json_output=True)

        out.info("not shown")
        out.output_json({"downloads": 3})

        assert json.loads(capsys.readouterr().out) == {"downloads": 3}

    def test_table(self, capsys):
        """Rows are rendered with their headers."""
        OutputFormatter().output_table(
            [{"name": "photo.jpg", "size": "1.0 KB"}],
            ["name", "size"],
            {"name": "Name", "size": "Size"},
        )

        output = capsys.readouterr().out
        assert "Name" in output
        assert "photo.jpg" in output
