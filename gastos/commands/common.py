"""Helpers shared by the command modules."""

import sys
from decimal import ROUND_HALF_UP, Decimal
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from gastos.config import build_backend, load_config
from gastos.errors import GastosError, PersistenceError
from gastos.store import ExpenseStore, SnapshotStore

console = Console()


def open_stores() -> tuple[ExpenseStore, SnapshotStore]:
    """Build both stores on the configured backend.

    Raises:
        ValidationError: If the configuration is invalid.
        PersistenceError: If the backend cannot be opened or read.
    """
    backend = build_backend(load_config())
    return ExpenseStore(backend), SnapshotStore(backend)


def format_ars(amount: Decimal) -> str:
    """Format an amount as Argentine pesos without decimals (e.g. "$ 1.500")."""
    whole = int(amount.to_integral_value(rounding=ROUND_HALF_UP))
    return "$ " + f"{whole:,}".replace(",", ".")


def fail(error: GastosError) -> NoReturn:
    """Print an error and exit with status 1."""
    if isinstance(error, PersistenceError):
        console.print(f"[red]Storage error: {escape(str(error))}[/red]", style="bold")
    else:
        console.print(f"[red]{escape(str(error))}[/red]", style="bold")
    sys.exit(1)


def warn_unsaved(error: PersistenceError) -> NoReturn:
    """Report a change that was applied but could not be saved, then exit 1."""
    console.print(f"[yellow]Warning: change applied but not saved: {escape(str(error))}[/yellow]")
    sys.exit(1)
