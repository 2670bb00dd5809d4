"""Excel workbook writer for year summaries."""

from decimal import Decimal
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from mint_ledger.config import OutputConfig
from mint_ledger.models.report import YearSummary
from mint_ledger.utils.logging_config import get_logger
from mint_ledger.utils.sanitize import sanitize_cell

logger = get_logger(__name__)


class ExcelWriter:
    """Writes a YearSummary to a workbook.

    Generates sheets:
    - Summary (totals and net)
    - Income (grouped, largest first)
    - Spending (grouped, largest first)
    """

    SHEET_SUMMARY = "Summary"
    SHEET_INCOME = "Income"
    SHEET_SPENDING = "Spending"

    def __init__(self, output_config: OutputConfig | None = None):
        """Initialize Excel writer.

        Args:
            output_config: Output settings (defaults if None).
        """
        self.output_config = output_config or OutputConfig()

        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(
            start_color="4472C4", end_color="4472C4", fill_type="solid"
        )
        self.money_positive = Font(color="006600")  # Dark green
        self.money_negative = Font(color="CC0000")  # Dark red
        self.right_aligned = Alignment(horizontal="right")

    def write(self, output_path: Path, summary: YearSummary) -> Path:
        """Write a summary to an Excel workbook.

        Args:
            output_path: Path for output file.
            summary: Pre-computed year summary.

        Returns:
            Path to the saved workbook.
        """
        logger.info(f"Writing Excel workbook to {output_path}")

        wb = Workbook()
        if wb.active:
            wb.remove(wb.active)

        self._create_summary_sheet(wb, summary)
        self._create_group_sheet(wb, self.SHEET_INCOME, summary.group_field, summary.sorted_income())
        self._create_group_sheet(wb, self.SHEET_SPENDING, summary.group_field, summary.sorted_spending())

        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel workbook saved: {output_path}")
        return output_path

    def _create_summary_sheet(self, wb: Workbook, summary: YearSummary) -> None:
        ws = wb.create_sheet(self.SHEET_SUMMARY)

        ws.cell(row=1, column=1, value=f"{summary.year} SUMMARY").font = Font(bold=True, size=14)

        rows: list[tuple[str, object]] = [
            ("Grouped by", sanitize_cell(summary.group_field)),
            ("Income transactions", summary.income_count),
            ("Spending transactions", summary.spending_count),
            ("Excluded transactions", summary.excluded_count),
        ]
        row = 3
        for label, value in rows:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1

        row += 1
        for label, amount in (
            ("Total Income", summary.total_income),
            ("Total Spending", summary.total_spending),
            ("Net", summary.net),
        ):
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            self._write_money(ws, row, 2, amount)
            row += 1

        ws.column_dimensions["A"].width = 25
        ws.column_dimensions["B"].width = 18

    def _create_group_sheet(
        self,
        wb: Workbook,
        title: str,
        group_field: str,
        rows: list[tuple[object, Decimal]],
    ) -> None:
        ws = wb.create_sheet(title)

        for col, header in enumerate([group_field, "Total"], 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill

        for row, (key, amount) in enumerate(rows, start=2):
            ws.cell(row=row, column=1, value=sanitize_cell(str(key)))
            self._write_money(ws, row, 2, amount)

        ws.column_dimensions["A"].width = 40
        ws.column_dimensions["B"].width = 18
        ws.freeze_panes = "A2"

        logger.debug(f"Created {title} sheet with {len(rows)} groups")

    def _write_money(self, ws: Worksheet, row: int, column: int, amount: Decimal) -> None:
        # openpyxl writes Decimal as a number; keep full precision and format for display
        cell = ws.cell(row=row, column=column, value=amount)
        cell.number_format = self._money_format()
        cell.font = self.money_negative if amount < 0 else self.money_positive
        cell.alignment = self.right_aligned

    def _money_format(self) -> str:
        places = self.output_config.decimal_places
        decimals = "." + "0" * places if places else ""
        symbol = self.output_config.currency_symbol
        return f'"{symbol}"#,##0{decimals};[Red]-"{symbol}"#,##0{decimals}'
