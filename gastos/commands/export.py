"""Export command writing CSV, XLSX or JSON files."""

import sys
from datetime import date
from enum import StrEnum
from pathlib import Path

from rich.markup import escape

from gastos.commands.common import console, fail, open_stores
from gastos.config import get_export_dir, load_config
from gastos.dates import resolve_range
from gastos.domain.aggregation import summarize
from gastos.errors import GastosError
from gastos.exporters import ExportFile, export_csv, export_json, export_xlsx


class ExportFormat(StrEnum):
    CSV = "csv"
    XLSX = "xlsx"
    JSON = "json"


def export_command(
    fmt: ExportFormat,
    start: str | None = None,
    end: str | None = None,
    month: str | None = None,
    output_dir: str | None = None,
) -> None:
    """Export expenses to a file.

    CSV and JSON contain every expense; XLSX covers the selected range.
    """
    try:
        config = load_config()
        range_start, range_end = resolve_range(start, end, month, date.today())
        expenses, _ = open_stores()
    except GastosError as e:
        fail(e)

    records = expenses.list()
    export: ExportFile
    if fmt is ExportFormat.CSV:
        export = export_csv(records)
    elif fmt is ExportFormat.JSON:
        export = export_json(records)
    else:
        export = export_xlsx(summarize(records, range_start, range_end))

    if output_dir:
        target_dir = Path(output_dir).expanduser()
    else:
        target_dir = get_export_dir(config) or Path.cwd()

    try:
        path = export.write_to(target_dir)
    except OSError as e:
        console.print(f"[red]Export failed: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported to: {escape(str(path))}")
