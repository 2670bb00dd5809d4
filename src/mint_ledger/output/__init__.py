"""Output generation for year summaries."""

from mint_ledger.output.csv_exporter import CSVExporter
from mint_ledger.output.excel_writer import ExcelWriter

__all__ = ["CSVExporter", "ExcelWriter"]
