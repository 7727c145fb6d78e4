"""Console output for CLI messages.

Messages go to standard error so that standard output carries only data.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from frontmatter_gen.types import Frontmatter


class TUI:
    """Text output helpers for frontmatter-gen."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize TUI.

        Args:
            console: Console to print to; defaults to standard error.
        """
        self.console = console or Console(stderr=True)

    def show_frontmatter(self, frontmatter: Frontmatter, title: str = "Front Matter") -> None:
        """Display frontmatter fields as a table sorted by key.

        Args:
            frontmatter: Parsed mapping.
            title: Table title.
        """
        if not frontmatter:
            self.console.print("[yellow]No fields found[/yellow]")
            return

        table = Table(title=title)
        table.add_column("Key", style="cyan")
        table.add_column("Type")
        table.add_column("Value")

        for key in sorted(frontmatter):
            value = frontmatter[key]
            table.add_row(Text(key), type(value).__name__, Text(str(value)))

        self.console.print(table)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def show_warning(self, message: str) -> None:
        """Show warning message."""
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def show_info(self, message: str) -> None:
        """Show info message."""
        self.console.print(f"[blue]i[/blue] {escape(message)}")
