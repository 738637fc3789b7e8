"""Pure functions that shape records into export rows and text.

Nothing here writes files; gastos.exporters turns these shapes into bytes.
"""

import json
from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from gastos.domain.aggregation import RangeSummary, sort_chronological
from gastos.domain.models import ExpenseRecord

CSV_FILENAME = "gastos_export.csv"
JSON_FILENAME = "gastos_export.json"
CSV_HEADER = ("date", "category", "amount", "desc")

SUMMARY_SHEET = "Resumen"
DETAIL_SHEET = "Detalle"
DETAIL_COLUMNS = ("Fecha", "Categoria", "Monto", "Descripcion")


def xlsx_filename(start: date, end: date) -> str:
    """Suggested spreadsheet filename embedding both range bounds."""
    return f"resumen_gastos_{start.isoformat()}_a_{end.isoformat()}.xlsx"


def format_decimal_comma(amount: Decimal) -> str:
    """Render an amount in plain notation with a comma decimal separator.

    Examples:
        Decimal("1500") -> "1500"
        Decimal("12.50") -> "12,50"
    """
    return format(amount, "f").replace(".", ",")


def escape_quotes(text: str) -> str:
    """Double embedded quotes for a quoted delimited field."""
    return text.replace('"', '""')


def csv_row(record: ExpenseRecord) -> str:
    """Render one record as a fully quoted delimited row."""
    fields = (
        record.date.isoformat(),
        record.category.value.upper(),
        format_decimal_comma(record.amount),
        escape_quotes(record.description),
    )
    return ",".join(f'"{value}"' for value in fields)


def csv_text(records: Iterable[ExpenseRecord]) -> str:
    """Render the full record list as delimited text.

    The header row is unquoted; data rows follow in the given order,
    separated by newlines.
    """
    lines = [",".join(CSV_HEADER)]
    lines.extend(csv_row(record) for record in records)
    return "\n".join(lines)


def summary_rows(summary: RangeSummary) -> list[list[Any]]:
    """Rows of the spreadsheet summary sheet.

    Args:
        summary: Summary for the exported range.

    Returns:
        Rows with range bounds, grand total and one row per category.
        Blank rows are empty lists.
    """
    rows: list[list[Any]] = [
        ["RESUMEN DE GASTOS"],
        ["Desde", summary.start.isoformat()],
        ["Hasta", summary.end.isoformat()],
        [],
        ["TOTAL", float(summary.total)],
        [],
        ["TOTALES POR CATEGORÍA"],
    ]
    rows.extend([category.value.upper(), float(amount)] for category, amount in summary.by_category.items())
    return rows


def detail_rows(records: Iterable[ExpenseRecord]) -> list[dict[str, Any]]:
    """Rows of the spreadsheet detail sheet, oldest first.

    Args:
        records: Filtered records for the exported range.

    Returns:
        One dict per record keyed by DETAIL_COLUMNS, with numeric amounts.
    """
    return [
        {
            "Fecha": record.date.isoformat(),
            "Categoria": record.category.value.upper(),
            "Monto": float(record.amount),
            "Descripcion": record.description,
        }
        for record in sort_chronological(list(records))
    ]


def json_text(records: Iterable[ExpenseRecord], exported_at: datetime) -> str:
    """Render a JSON backup of all records with its export timestamp."""
    payload = {
        "exportedAt": exported_at.isoformat(),
        "items": [record.to_dict() for record in records],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
