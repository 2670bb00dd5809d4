"""Tests for the CSV and Excel report writers."""

import csv
from decimal import Decimal
from pathlib import Path

import pytest
from openpyxl import load_workbook

from mint_ledger.config import OutputConfig
from mint_ledger.models.report import YearSummary
from mint_ledger.output import CSVExporter, ExcelWriter


@pytest.fixture
def summary() -> YearSummary:
    """A small pre-computed summary."""
    return YearSummary(
        year=2012,
        group_field="Description",
        income_totals={"ACME Corp": Decimal("4000.00")},
        spending_totals={
            "Amazon": Decimal("30.00"),
            "Landlord": Decimal("1200.00"),
            "=HYPERLINK(\"x\")": Decimal("1.50"),
        },
        income_count=2,
        spending_count=4,
        excluded_count=3,
    )


class TestCSVExporter:
    """Tests for CSVExporter."""

    def read_rows(self, path: Path) -> list[list[str]]:
        with open(path, newline="", encoding="utf-8") as f:
            return list(csv.reader(f))

    def test_sections_and_totals(self, tmp_path: Path, summary: YearSummary) -> None:
        """Test the written file holds each section with totals."""
        path = CSVExporter().export(tmp_path / "out" / "report.csv", summary)
        rows = self.read_rows(path)

        assert ["Year", "2012"] in rows
        assert ["Excluded transactions", "3"] in rows
        assert ["Total Income", "4000.00"] in rows
        assert ["Total Spending", "1231.50"] in rows
        assert rows[-1] == ["NET", "2768.50"]

    def test_spending_largest_first(self, tmp_path: Path, summary: YearSummary) -> None:
        """Test groups are written in descending order."""
        rows = self.read_rows(CSVExporter().export(tmp_path / "report.csv", summary))

        start = rows.index(["SPENDING", ""]) + 1
        assert [r[0] for r in rows[start:start + 3]] == ["Landlord", "Amazon", "'=HYPERLINK(\"x\")"]

    def test_formula_cells_neutralised(self, tmp_path: Path, summary: YearSummary) -> None:
        """Test group names starting with '=' are quote-prefixed."""
        rows = self.read_rows(CSVExporter().export(tmp_path / "report.csv", summary))
        assert not any(r and r[0].startswith("=") for r in rows)

    def test_decimal_places(self, tmp_path: Path, summary: YearSummary) -> None:
        """Test configured precision is used for money."""
        exporter = CSVExporter(OutputConfig(decimal_places=0))
        rows = self.read_rows(exporter.export(tmp_path / "report.csv", summary))

        assert ["Total Income", "4000"] in rows


class TestExcelWriter:
    """Tests for ExcelWriter."""

    def test_sheets(self, tmp_path: Path, summary: YearSummary) -> None:
        """Test the workbook has one sheet per section."""
        path = ExcelWriter().write(tmp_path / "report.xlsx", summary)
        wb = load_workbook(path)

        assert wb.sheetnames == ["Summary", "Income", "Spending"]

    def test_spending_sheet(self, tmp_path: Path, summary: YearSummary) -> None:
        """Test grouped rows are written largest first with numeric totals."""
        wb = load_workbook(ExcelWriter().write(tmp_path / "report.xlsx", summary))
        ws = wb["Spending"]

        assert ws.cell(row=1, column=1).value == "Description"
        assert ws.cell(row=2, column=1).value == "Landlord"
        assert ws.cell(row=2, column=2).value == pytest.approx(1200.0)
        assert ws.cell(row=4, column=1).value == "'=HYPERLINK(\"x\")"

    def test_summary_net(self, tmp_path: Path, summary: YearSummary) -> None:
        """Test the summary sheet carries the net."""
        wb = load_workbook(ExcelWriter().write(tmp_path / "report.xlsx", summary))
        ws = wb["Summary"]

        labels = {ws.cell(row=r, column=1).value: ws.cell(row=r, column=2).value for r in range(1, ws.max_row + 1)}
        assert labels["Net"] == pytest.approx(2768.5)
        assert labels["Excluded transactions"] == 3
