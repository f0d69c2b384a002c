"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from orderindex.domain.order.model.aggregate import Order


class Console:
    """CLI output manager wrapping rich."""

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
        quiet: bool = False,
    ) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    # -------------------------------------------------------------------------
    # Structured output
    # -------------------------------------------------------------------------

    def table(
        self,
        rows: list[dict[str, Any]],
        columns: list[tuple[str, str]],  # (key, header)
        *,
        title: str | None = None,
        numbered: bool = False,
    ) -> None:
        """Print a table.

        Args:
            rows: List of dicts containing row data.
            columns: List of (key, header) tuples defining columns.
            title: Optional table title.
            numbered: Add a # column with row numbers.
        """
        table = Table(title=title, show_header=True, header_style="bold")

        if numbered:
            table.add_column("#", style="dim", width=3)

        for _, header in columns:
            table.add_column(header)

        for i, row in enumerate(rows, 1):
            values = [str(row.get(key, "")) for key, _ in columns]
            if numbered:
                table.add_row(str(i), *values)
            else:
                table.add_row(*values)

        self._console.print(table)

    def order_detail(self, order: Order) -> None:
        """Print one order with its items."""
        lines = [
            f"[cyan]Customer:[/cyan] {order.customer_id}    "
            f"[cyan]Status:[/cyan] {order.status}    "
            f"[cyan]Total:[/cyan] {order.total}",
            f"[cyan]Created:[/cyan] {order.created_at.isoformat()}    "
            f"[cyan]Updated:[/cyan] {order.updated_at.isoformat()}",
            "",
        ]
        for item in order.items:
            lines.append(
                f"  {item.product_name} [dim]({item.product_id})[/dim]  "
                f"{item.quantity} x {item.price} = {item.subtotal}"
            )
        if not order.items:
            lines.append("[dim]No items[/dim]")

        self._console.print(
            Panel(
                "\n".join(lines),
                title=f"[bold]Order {order.uuid}[/bold]",
                border_style="blue",
                padding=(1, 2),
            )
        )

    def status(self, message: str):
        """Return a status context manager for long operations."""
        return self._console.status(message)


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
