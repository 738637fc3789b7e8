"""CLI entry point for gastos."""

import typer

from gastos.commands.admin import backup_command, init_command
from gastos.commands.expenses import add_command, clear_command, remove_command
from gastos.commands.export import ExportFormat, export_command
from gastos.commands.months import delete_month_command, load_month_command, months_command, save_month_command
from gastos.commands.report import summary_command
from gastos.logging_utils import configure_logging

app = typer.Typer(
    name="gastos",
    help="Control de gastos - simple expense tracking for the family",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Control de gastos - simple expense tracking for the family."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize gastos configuration and data storage."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: <data dir>/backups)"),
) -> None:
    """Backup your data and configuration files."""
    backup_command(output_dir)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Amount spent, e.g. 1500"),
    description: str = typer.Option("", "--desc", "-d", help="What the expense was for"),
    category: str = typer.Option("comida", "--category", "-c", help="casa, personal, ocio, comida, eventuales or lolo"),
    when: str = typer.Option(None, "--date", help="Date of the expense (YYYY-MM-DD, default: today)"),
) -> None:
    """Add an expense."""
    add_command(amount, description, category, when)


@app.command()
def remove(
    record_id: str = typer.Argument(..., metavar="ID", help="Expense id (see 'gastos summary')"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete an expense."""
    remove_command(record_id, yes)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete ALL expenses."""
    clear_command(yes)


@app.command()
def summary(
    start: str = typer.Option(None, "--from", help="First day (YYYY-MM-DD, default: today)"),
    end: str = typer.Option(None, "--to", help="Last day (YYYY-MM-DD, default: today)"),
    month: str = typer.Option(None, "--month", help="Whole month (YYYY-MM), overrides --from/--to"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show totals and expenses for a date range."""
    summary_command(start, end, month, histogram)


@app.command()
def export(
    fmt: ExportFormat = typer.Argument(..., metavar="FORMAT", help="csv, xlsx or json"),
    start: str = typer.Option(None, "--from", help="First day for xlsx (YYYY-MM-DD, default: today)"),
    end: str = typer.Option(None, "--to", help="Last day for xlsx (YYYY-MM-DD, default: today)"),
    month: str = typer.Option(None, "--month", help="Whole month for xlsx (YYYY-MM)"),
    output_dir: str = typer.Option(None, "--output", "-o", help="Output directory (default: config or cwd)"),
) -> None:
    """Export expenses to CSV, Excel or JSON."""
    export_command(fmt, start, end, month, output_dir)


@app.command(name="save-month")
def save_month(
    name: str = typer.Argument(..., help="Month name, e.g. 'Enero 2026'"),
) -> None:
    """Save the current expenses as a named month."""
    save_month_command(name)


@app.command(name="load-month")
def load_month(
    name: str = typer.Argument(..., help="Saved month name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Replace the current expenses with a saved month."""
    load_month_command(name, yes)


@app.command(name="months")
def months() -> None:
    """List saved months."""
    months_command()


@app.command(name="delete-month")
def delete_month(
    name: str = typer.Argument(..., help="Saved month name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a saved month."""
    delete_month_command(name, yes)


if __name__ == "__main__":
    app()
