"""CSV exporter for year summaries."""

import csv
from decimal import Decimal
from pathlib import Path

from mint_ledger.config import OutputConfig
from mint_ledger.models.report import YearSummary
from mint_ledger.utils.decimal_utils import format_currency
from mint_ledger.utils.logging_config import get_logger
from mint_ledger.utils.sanitize import sanitize_cell

logger = get_logger(__name__)


class CSVExporter:
    """Writes a YearSummary to a single CSV file.

    Layout:
    - report header (year, grouping field, transaction counts)
    - INCOME section, largest group first, with total
    - SPENDING section, largest group first, with total
    - NET row
    """

    def __init__(self, output_config: OutputConfig | None = None):
        """Initialize CSV exporter.

        Args:
            output_config: Output settings (defaults if None).
        """
        self.output_config = output_config or OutputConfig()

    def export(self, output_path: Path, summary: YearSummary) -> Path:
        """Export a summary to CSV.

        Args:
            output_path: File to write; parent directories are created.
            summary: Pre-computed year summary.

        Returns:
            Path to the created file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)

            writer.writerow(["REPORT SUMMARY", ""])
            writer.writerow(["Year", str(summary.year)])
            writer.writerow(["Grouped by", sanitize_cell(summary.group_field)])
            writer.writerow(["Income transactions", str(summary.income_count)])
            writer.writerow(["Spending transactions", str(summary.spending_count)])
            writer.writerow(["Excluded transactions", str(summary.excluded_count)])
            writer.writerow([])

            writer.writerow(["INCOME", ""])
            for key, amount in summary.sorted_income():
                writer.writerow([sanitize_cell(str(key)), self._money(amount)])
            writer.writerow(["Total Income", self._money(summary.total_income)])
            writer.writerow([])

            writer.writerow(["SPENDING", ""])
            for key, amount in summary.sorted_spending():
                writer.writerow([sanitize_cell(str(key)), self._money(amount)])
            writer.writerow(["Total Spending", self._money(summary.total_spending)])
            writer.writerow([])

            writer.writerow(["NET", self._money(summary.net)])

        logger.info(f"Exported {summary.year} summary to {output_path}")
        return output_path

    def _money(self, amount: Decimal) -> str:
        return format_currency(amount, self.output_config.decimal_places)
