"""Tests for the gastos command line."""

import json
import re
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gastos.cli import app
from gastos.commands.common import format_ars
from gastos.commands.report import calculate_histogram_bar_length, format_period

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("GASTOS_CONFIG", raising=False)
    monkeypatch.setenv("COLUMNS", "200")


def ids_in(output: str) -> list[str]:
    return re.findall(r"\b[0-9a-f]{32}\b", output)


class TestFormatting:
    """Tests for display helpers."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            ("0", "$ 0"),
            ("1500", "$ 1.500"),
            ("1234567", "$ 1.234.567"),
            ("99.5", "$ 100"),
            ("1e30", "$ 1" + ".000" * 10),
        ],
    )
    def test_format_ars(self, amount: str, expected: str) -> None:
        """Should group thousands with dots and drop decimals."""
        from decimal import Decimal

        assert format_ars(Decimal(amount)) == expected

    def test_format_period(self) -> None:
        """Should collapse single-day ranges."""
        from datetime import date

        assert format_period(date(2026, 1, 5), date(2026, 1, 5)) == "2026-01-05"
        assert format_period(date(2026, 1, 1), date(2026, 1, 5)) == "2026-01-01 → 2026-01-05"

    def test_histogram_bar_length(self) -> None:
        """Should scale bars to the largest amount."""
        from decimal import Decimal

        assert calculate_histogram_bar_length(Decimal(50), Decimal(100), 30) == 15
        assert calculate_histogram_bar_length(Decimal(0), Decimal(0), 30) == 0


class TestExpenseCommands:
    """Tests for add, remove, clear and summary."""

    def test_init_creates_config(self, tmp_path: Path) -> None:
        """Should write the config file and prepare storage."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (tmp_path / "config" / "gastos" / "config.toml").exists()
        assert (tmp_path / "data" / "gastos" / "gastos.db").exists()

    def test_init_refuses_to_overwrite(self) -> None:
        """Should exit 1 when config exists without --force."""
        runner.invoke(app, ["init"])

        assert runner.invoke(app, ["init"]).exit_code == 1
        assert runner.invoke(app, ["init", "--force"]).exit_code == 0

    def test_add_and_summary(self) -> None:
        """Should show the added expense in the summary for its day."""
        result = runner.invoke(app, ["add", "1500", "--desc", "super", "--category", "comida", "--date", "2026-01-05"])
        assert result.exit_code == 0, result.output
        runner.invoke(app, ["add", "300", "--category", "ocio", "--date", "2026-01-06"])

        result = runner.invoke(app, ["summary", "--from", "2026-01-05", "--to", "2026-01-05"])

        assert result.exit_code == 0, result.output
        assert "Total: $ 1.500" in result.output
        assert "super" in result.output

    def test_add_rejects_invalid_amount(self) -> None:
        """Should exit 1 and store nothing."""
        result = runner.invoke(app, ["add", "0", "--date", "2026-01-05"])

        assert result.exit_code == 1
        summary = runner.invoke(app, ["summary", "--month", "2026-01"])
        assert "No expenses in this range" in summary.output

    def test_add_rejects_unknown_category(self) -> None:
        """Should exit 1 for categories outside the fixed set."""
        result = runner.invoke(app, ["add", "10", "--category", "viajes"])

        assert result.exit_code == 1
        assert "Invalid category" in result.output

    def test_remove_with_confirmation(self) -> None:
        """Should delete after confirming."""
        added = runner.invoke(app, ["add", "10", "--desc", "borrar", "--date", "2026-01-05"])
        (record_id,) = ids_in(added.output)

        declined = runner.invoke(app, ["remove", record_id], input="n\n")
        assert declined.exit_code == 1

        result = runner.invoke(app, ["remove", record_id], input="y\n")
        assert result.exit_code == 0

        summary = runner.invoke(app, ["summary", "--month", "2026-01"])
        assert "borrar" not in summary.output

    def test_remove_unknown_id_is_not_an_error(self) -> None:
        """Should report and exit 0."""
        result = runner.invoke(app, ["remove", "nope", "--yes"])

        assert result.exit_code == 0
        assert "No expense with id nope" in result.output

    def test_clear(self) -> None:
        """Should delete everything with --yes."""
        runner.invoke(app, ["add", "10", "--date", "2026-01-05"])

        result = runner.invoke(app, ["clear", "--yes"])

        assert result.exit_code == 0
        summary = runner.invoke(app, ["summary", "--month", "2026-01"])
        assert "No expenses in this range" in summary.output

    def test_reversed_range_shows_nothing(self) -> None:
        """Should show an empty summary when --from is after --to."""
        runner.invoke(app, ["add", "10", "--date", "2026-02-05"])

        result = runner.invoke(app, ["summary", "--from", "2026-02-10", "--to", "2026-02-01"])

        assert result.exit_code == 0
        assert "Total: $ 0" in result.output

    def test_add_rejects_oversized_amount(self) -> None:
        """Should exit 1 without storing amounts above the maximum."""
        result = runner.invoke(app, ["add", "1e30", "--date", "2026-01-05"])

        assert result.exit_code == 1
        assert "must not exceed" in result.output
        summary = runner.invoke(app, ["summary", "--from", "2026-01-05", "--to", "2026-01-05"])
        assert summary.exit_code == 0, summary.output
        assert "Total: $ 0" in summary.output

    def test_largest_amount_is_shown_and_removable(self) -> None:
        """Should print, summarize and remove the largest accepted amount."""
        added = runner.invoke(app, ["add", "1000000000000", "--date", "2026-01-05"])
        assert added.exit_code == 0, added.output
        assert "$ 1.000.000.000.000" in added.output

        summary = runner.invoke(app, ["summary", "--from", "2026-01-05", "--to", "2026-01-05"])
        assert summary.exit_code == 0, summary.output

        (record_id,) = ids_in(added.output)
        assert runner.invoke(app, ["remove", record_id, "--yes"]).exit_code == 0

    def test_unsaved_change_exits_1(self, monkeypatch: pytest.MonkeyPatch, failing_backend) -> None:
        """Should warn that the change was applied but not saved."""
        monkeypatch.setattr("gastos.commands.common.build_backend", lambda config: failing_backend)

        result = runner.invoke(app, ["add", "10", "--date", "2026-01-05"])

        assert result.exit_code == 1
        assert "change applied but not saved" in result.output
        assert "quota exceeded" in result.output


class TestMonthCommands:
    """Tests for save-month, load-month, months and delete-month."""

    def test_save_clear_load(self) -> None:
        """Should restore saved expenses after clearing."""
        runner.invoke(app, ["add", "1500", "--desc", "super", "--date", "2026-01-05"])
        runner.invoke(app, ["add", "300", "--desc", "cine", "--category", "ocio", "--date", "2026-01-06"])

        assert runner.invoke(app, ["save-month", "Enero 2026"]).exit_code == 0
        assert runner.invoke(app, ["clear", "--yes"]).exit_code == 0

        result = runner.invoke(app, ["load-month", "Enero 2026", "--yes"])
        assert result.exit_code == 0, result.output

        summary = runner.invoke(app, ["summary", "--month", "2026-01"])
        assert "super" in summary.output
        assert "cine" in summary.output

    def test_load_unknown_month_fails(self) -> None:
        """Should exit 1 and keep current expenses."""
        runner.invoke(app, ["add", "10", "--desc", "queda", "--date", "2026-01-05"])

        result = runner.invoke(app, ["load-month", "Nonexistent", "--yes"])

        assert result.exit_code == 1
        assert "not found" in result.output
        summary = runner.invoke(app, ["summary", "--month", "2026-01"])
        assert "queda" in summary.output

    def test_save_blank_name_fails(self) -> None:
        """Should reject blank month names."""
        result = runner.invoke(app, ["save-month", "   "])

        assert result.exit_code == 1

    def test_months_lists_saved_names(self) -> None:
        """Should list saved months, and forget deleted ones."""
        runner.invoke(app, ["add", "10", "--date", "2026-01-05"])
        runner.invoke(app, ["save-month", "Enero"])

        listed = runner.invoke(app, ["months"])
        assert "Enero" in listed.output

        assert runner.invoke(app, ["delete-month", "Enero", "--yes"]).exit_code == 0
        assert "No saved months yet" in runner.invoke(app, ["months"]).output

    def test_month_names_with_brackets(self) -> None:
        """Should print month names literally."""
        runner.invoke(app, ["add", "10", "--date", "2026-01-05"])

        saved = runner.invoke(app, ["save-month", "[/x] enero"])
        assert saved.exit_code == 0, saved.output
        assert "Saved: [/x] enero" in saved.output

        loaded = runner.invoke(app, ["load-month", "[/x] enero", "--yes"])
        assert loaded.exit_code == 0, loaded.output
        assert "Loaded [/x] enero" in loaded.output

        assert "[/x] enero" in runner.invoke(app, ["months"]).output

        deleted = runner.invoke(app, ["delete-month", "[/x] enero", "--yes"])
        assert deleted.exit_code == 0, deleted.output
        assert "Deleted [/x] enero" in deleted.output

    def test_delete_month_unknown_name_fails(self) -> None:
        """Should exit 1 for months that were never saved."""
        result = runner.invoke(app, ["delete-month", "Nonexistent", "--yes"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete_month_declined_keeps_month(self) -> None:
        """Should keep the month when the confirmation is declined."""
        runner.invoke(app, ["add", "10", "--date", "2026-01-05"])
        runner.invoke(app, ["save-month", "Enero"])

        result = runner.invoke(app, ["delete-month", "Enero"], input="n\n")

        assert result.exit_code == 1
        assert "Enero" in runner.invoke(app, ["months"]).output

    def test_delete_month_confirmed(self) -> None:
        """Should delete after confirming and leave current expenses alone."""
        runner.invoke(app, ["add", "10", "--desc", "queda", "--date", "2026-01-05"])
        runner.invoke(app, ["save-month", "Enero"])

        result = runner.invoke(app, ["delete-month", "Enero"], input="y\n")

        assert result.exit_code == 0, result.output
        assert "No saved months yet" in runner.invoke(app, ["months"]).output
        assert "queda" in runner.invoke(app, ["summary", "--month", "2026-01"]).output

    def test_unsaved_month_exits_1(self, monkeypatch: pytest.MonkeyPatch, failing_backend) -> None:
        """Should warn when a saved month could not be written."""
        monkeypatch.setattr("gastos.commands.common.build_backend", lambda config: failing_backend)

        result = runner.invoke(app, ["save-month", "Enero"])

        assert result.exit_code == 1
        assert "change applied but not saved" in result.output


class TestExportCommand:
    """Tests for export."""

    def test_export_csv(self, tmp_path: Path) -> None:
        """Should write the CSV into the output directory."""
        runner.invoke(app, ["add", "12.5", "--desc", 'bar "X"', "--date", "2026-01-05"])

        result = runner.invoke(app, ["export", "csv", "--output", str(tmp_path / "out")])

        assert result.exit_code == 0, result.output
        content = (tmp_path / "out" / "gastos_export.csv").read_text(encoding="utf-8")
        assert content == 'date,category,amount,desc\n"2026-01-05","COMIDA","12,5","bar ""X"""'

    def test_export_xlsx_named_after_range(self, tmp_path: Path) -> None:
        """Should embed the range in the spreadsheet filename."""
        runner.invoke(app, ["add", "100", "--date", "2026-01-05"])

        result = runner.invoke(app, ["export", "xlsx", "--month", "2026-01", "--output", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "resumen_gastos_2026-01-01_a_2026-01-31.xlsx").exists()

    def test_export_json(self, tmp_path: Path) -> None:
        """Should write a JSON backup with every item."""
        runner.invoke(app, ["add", "100", "--date", "2026-01-05"])

        result = runner.invoke(app, ["export", "json", "--output", str(tmp_path)])

        assert result.exit_code == 0, result.output
        payload = json.loads((tmp_path / "gastos_export.json").read_text(encoding="utf-8"))
        assert len(payload["items"]) == 1


class TestBackupCommand:
    """Tests for backup."""

    def test_backup_copies_database(self, tmp_path: Path) -> None:
        """Should copy the data file into the backup directory."""
        runner.invoke(app, ["init"])
        runner.invoke(app, ["add", "100", "--date", "2026-01-05"])

        result = runner.invoke(app, ["backup", "--output", str(tmp_path / "bk")])

        assert result.exit_code == 0, result.output
        assert list((tmp_path / "bk").glob("gastos_*.db"))
        assert list((tmp_path / "bk").glob("config_*.toml"))
