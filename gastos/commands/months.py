"""Commands for saving and restoring named months."""

import sys

import typer
from rich.markup import escape
from rich.table import Table

from gastos.commands.common import console, fail, format_ars, open_stores, warn_unsaved
from gastos.domain.aggregation import total
from gastos.errors import GastosError, PersistenceError


def save_month_command(name: str) -> None:
    """Save the current expenses under a month name."""
    try:
        expenses, months = open_stores()
        records = expenses.list()
        saved_as = months.save(name, records)
    except PersistenceError as e:
        if e.result is None:
            fail(e)
        warn_unsaved(e)
    except GastosError as e:
        fail(e)

    console.print(f"[green]✓[/green] Saved: {escape(saved_as)} ({len(records)} expenses)")


def load_month_command(name: str, yes: bool = False) -> None:
    """Replace the current expenses with a saved month."""
    try:
        expenses, months = open_stores()
        records = months.load(name)
    except GastosError as e:
        fail(e)

    if not yes and not typer.confirm(
        f'This will replace your {len(expenses)} current expenses with "{name}". Continue?', default=False
    ):
        console.print("[dim]Cancelled[/dim]")
        sys.exit(1)

    try:
        expenses.replace_all(records)
    except PersistenceError as e:
        warn_unsaved(e)

    console.print(f"[green]✓[/green] Loaded {escape(name)} ({len(records)} expenses)")


def months_command() -> None:
    """List saved months."""
    try:
        _, months = open_stores()
    except GastosError as e:
        fail(e)

    names = months.list_names()
    if not names:
        console.print("[yellow]No saved months yet[/yellow]")
        return

    table = Table(title=f"Saved months ({len(names)})")
    table.add_column("Name", style="cyan")
    table.add_column("Expenses", justify="right")
    table.add_column("Total", justify="right")

    for name in names:
        records = months.load(name)
        table.add_row(escape(name), str(len(records)), format_ars(total(records)))

    console.print(table)


def delete_month_command(name: str, yes: bool = False) -> None:
    """Delete a saved month."""
    try:
        _, months = open_stores()
        records = months.load(name)
    except GastosError as e:
        fail(e)

    if not yes and not typer.confirm(f'Delete saved month "{name}" ({len(records)} expenses)?', default=False):
        console.print("[dim]Cancelled[/dim]")
        sys.exit(1)

    try:
        months.delete(name)
    except PersistenceError as e:
        warn_unsaved(e)

    console.print(f"[green]✓[/green] Deleted {escape(name)}")
