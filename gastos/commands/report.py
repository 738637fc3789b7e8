"""Summary command for viewing expenses over a date range."""

from datetime import date

from rich.markup import escape
from rich.table import Table

from gastos.commands.common import console, fail, format_ars, open_stores
from gastos.dates import resolve_range
from gastos.domain.aggregation import RangeSummary, summarize
from gastos.domain.models import Amount
from gastos.errors import GastosError


def format_period(start: date, end: date) -> str:
    """Format a range for display.

    Args:
        start: First day of the range.
        end: Last day of the range.

    Returns:
        Single date when both bounds match, otherwise "start → end".
    """
    if start == end:
        return start.isoformat()
    return f"{start.isoformat()} → {end.isoformat()}"


def calculate_histogram_bar_length(amount: Amount, max_amount: Amount, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((amount / max_amount) * bar_width)


def render_category_totals(summary: RangeSummary, histogram: bool, bar_width: int = 30) -> None:
    """Render one line per category, with optional histogram bars."""
    max_amount = max(summary.by_category.values())
    for category, amount in summary.by_category.items():
        line = f"  {category.value.upper():12} {format_ars(amount):>14}"
        if histogram:
            line += " " + "█" * calculate_histogram_bar_length(amount, max_amount, bar_width)
        console.print(line)


def render_records(summary: RangeSummary) -> None:
    """Render the filtered expenses, most recent first."""
    if not summary.records:
        console.print("[dim]No expenses in this range[/dim]")
        return

    table = Table(title=f"Expenses ({len(summary.records)})")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Id", style="dim")

    for record in summary.records:
        table.add_row(
            record.date.isoformat(),
            escape(record.description) or "—",
            record.category.value.upper(),
            format_ars(record.amount),
            record.id,
        )

    console.print(table)


def summary_command(
    start: str | None = None,
    end: str | None = None,
    month: str | None = None,
    histogram: bool = True,
) -> None:
    """Show total, per-category totals and expenses for a date range."""
    try:
        range_start, range_end = resolve_range(start, end, month, date.today())
        expenses, _ = open_stores()
    except GastosError as e:
        fail(e)

    summary = summarize(expenses.list(), range_start, range_end)

    console.print(f"[bold cyan]{format_period(range_start, range_end)}[/bold cyan]\n")
    console.print(f"[bold]Total:[/bold] {format_ars(summary.total)}\n")
    render_category_totals(summary, histogram)
    console.print()
    render_records(summary)
