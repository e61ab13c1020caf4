"""Output formatting for the pydroidsync CLI."""

import json
import sys
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .utils import format_size


class OutputFormatter:
    """Formats user-facing output as rich text or JSON."""

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize output formatter.

        Args:
            json_output: Emit machine-readable JSON instead of text
            quiet: Suppress non-essential output
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def print(self, message: str = "") -> None:
        """Print a plain message unless quiet or in JSON mode."""
        if not self.quiet and not self.json_output:
            self.console.print(escape(message))

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet and not self.json_output:
            self.console.print(escape(message))

    def success(self, message: str) -> None:
        """Print a success message."""
        if not self.quiet and not self.json_output:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        """Print a warning to stderr."""
        if not self.quiet:
            self.err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Print an error to stderr (never suppressed)."""
        self.err_console.print(f"[red]Error:[/red] {escape(message)}")

    def output_json(self, data: Any) -> None:
        """Write data as JSON to stdout."""
        sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")
        sys.stdout.flush()

    def output_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str],
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        """Print rows as a table.

        Args:
            rows: Row dictionaries
            columns: Keys to display, in order
            headers: Optional mapping of key to column title
        """
        headers = headers or {}
        table = Table(show_header=True, header_style="bold")
        for column in columns:
            table.add_column(headers.get(column, column))
        for row in rows:
            table.add_row(*(escape(str(row.get(column, ""))) for column in columns))
        self.console.print(table)

    def format_size(self, size_bytes: int) -> str:
        """Format a byte count for display."""
        return format_size(size_bytes)
