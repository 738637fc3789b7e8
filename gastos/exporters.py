"""Render expense data into downloadable files.

Each exporter returns an ExportFile holding a suggested filename and the file
bytes. Nothing here touches the stores; writing to disk is left to callers.
"""

import io
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from gastos.domain.aggregation import RangeSummary
from gastos.domain.export import (
    CSV_FILENAME,
    DETAIL_COLUMNS,
    DETAIL_SHEET,
    JSON_FILENAME,
    SUMMARY_SHEET,
    csv_text,
    detail_rows,
    json_text,
    summary_rows,
    xlsx_filename,
)
from gastos.domain.models import ExpenseRecord

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass(frozen=True)
class ExportFile:
    """Immutable export payload."""

    filename: str
    content: bytes
    media_type: str

    def write_to(self, directory: Path) -> Path:
        """Write the payload into directory and return the file path."""
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.content)
        return path


def export_csv(records: Sequence[ExpenseRecord]) -> ExportFile:
    """Export the full record list as delimited text."""
    return ExportFile(CSV_FILENAME, csv_text(records).encode("utf-8"), "text/csv")


def export_json(records: Sequence[ExpenseRecord], exported_at: datetime | None = None) -> ExportFile:
    """Export the full record list as a JSON backup."""
    if exported_at is None:
        exported_at = datetime.now(timezone.utc)
    return ExportFile(JSON_FILENAME, json_text(records, exported_at).encode("utf-8"), "application/json")


def export_xlsx(summary: RangeSummary) -> ExportFile:
    """Export a range summary as a two-sheet workbook.

    Args:
        summary: Summary of the selected range; its records become the detail sheet.

    Returns:
        ExportFile named after the range bounds.
    """
    summary_frame = pd.DataFrame(summary_rows(summary))
    detail_frame = pd.DataFrame(detail_rows(summary.records), columns=list(DETAIL_COLUMNS))

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        summary_frame.to_excel(writer, sheet_name=SUMMARY_SHEET, header=False, index=False)
        detail_frame.to_excel(writer, sheet_name=DETAIL_SHEET, index=False)

    return ExportFile(xlsx_filename(summary.start, summary.end), buffer.getvalue(), XLSX_MEDIA_TYPE)
