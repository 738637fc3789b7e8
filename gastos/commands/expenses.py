"""Commands that add, remove and clear expenses."""

import sys
from datetime import date

import typer
from rich.markup import escape

from gastos.commands.common import console, fail, format_ars, open_stores, warn_unsaved
from gastos.domain.models import ExpenseRecord
from gastos.errors import GastosError, NotFoundError, PersistenceError


def print_record(record: ExpenseRecord) -> None:
    """Print a single expense on one line."""
    description = escape(record.description) or "—"
    console.print(
        f"  [cyan]{record.date.isoformat()}[/cyan]  {record.category.value.upper():10} "
        f"{format_ars(record.amount):>12}  {description}  [dim]{record.id}[/dim]"
    )


def add_command(
    amount: str,
    description: str = "",
    category: str = "comida",
    when: str | None = None,
) -> None:
    """Add an expense."""
    try:
        expenses, _ = open_stores()
        record = expenses.add(amount, description, category, when or date.today())
    except PersistenceError as e:
        if e.result is None:
            fail(e)
        warn_unsaved(e)
    except GastosError as e:
        fail(e)

    console.print("[green]✓[/green] Expense saved")
    print_record(record)


def remove_command(record_id: str, yes: bool = False) -> None:
    """Remove an expense by id."""
    try:
        expenses, _ = open_stores()
    except GastosError as e:
        fail(e)

    try:
        existing = expenses.get(record_id)
    except NotFoundError:
        console.print(f"[yellow]No expense with id {record_id}[/yellow]")
        return

    print_record(existing)
    if not yes and not typer.confirm("Delete this expense?", default=False):
        console.print("[dim]Cancelled[/dim]")
        sys.exit(1)

    try:
        expenses.remove(record_id)
    except PersistenceError as e:
        warn_unsaved(e)

    console.print("[green]✓[/green] Expense deleted")


def clear_command(yes: bool = False) -> None:
    """Delete every expense."""
    try:
        expenses, _ = open_stores()
    except GastosError as e:
        fail(e)

    count = len(expenses)
    if not yes and not typer.confirm(f"Delete ALL {count} expenses?", default=False):
        console.print("[dim]Cancelled[/dim]")
        sys.exit(1)

    try:
        expenses.clear()
    except PersistenceError as e:
        warn_unsaved(e)

    console.print(f"[green]✓[/green] Deleted {count} expenses")
