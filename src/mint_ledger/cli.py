"""Command-line interface for mint-ledger."""

import argparse
import os
import sys
from collections.abc import Hashable, Mapping, Sequence
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mint_ledger import __version__
from mint_ledger.config import Config, ConfigError, load_config, validate_year
from mint_ledger.models.report import YearSummary
from mint_ledger.models.transaction import RawRecord, Transaction, UnknownField
from mint_ledger.parsers import MalformedRecord, ParseError, parse_transaction, read_records
from mint_ledger.processing.aggregator import top
from mint_ledger.processing.report_generator import generate_year_summary
from mint_ledger.utils.decimal_utils import format_currency
from mint_ledger.utils.logging_config import LogContext, get_logger, setup_logging

# Load environment variables from .env file (if it exists)
load_dotenv()

# Names a settings.yaml to use when --config is not given
CONFIG_ENV_VAR = "MINT_LEDGER_CONFIG"

REPORT_CHOICES = ("net", "spending", "income")

console = Console()
logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="mint-ledger",
        description=(
            "Classify a Mint transactions export into income and spending "
            "and report the totals for one year"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -i transactions.csv -y 2012
  %(prog)s -i transactions.csv -y 2012 --report spending --top 10
  %(prog)s -i transactions.csv -y 2012 --group-by Category -o report.xlsx
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-i", "--input",
        type=Path,
        required=True,
        help="Mint transactions CSV export",
    )

    parser.add_argument(
        "-y", "--year",
        type=int,
        default=None,
        help="Year to report on (default: target_year from settings)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to settings.yaml (default: ${CONFIG_ENV_VAR} or config/settings.yaml)",
    )

    parser.add_argument(
        "--report",
        choices=REPORT_CHOICES,
        default="net",
        help="What to print: the net total, or the top spending/income groups (default: net)",
    )

    parser.add_argument(
        "--group-by",
        default=None,
        help="Field to group totals by (default: Description)",
    )

    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Number of groups to show for spending/income reports",
    )

    parser.add_argument(
        "--delimiter",
        default=",",
        help="Field delimiter of the input file (default: ',')",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Strict mode: abort on the first malformed row instead of skipping it",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Also write the summary to a .csv or .xlsx file",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (-v, -vv)",
    )

    return parser


def get_log_level(verbosity: int) -> str:
    """Convert verbosity count to log level.

    Args:
        verbosity: Number of -v flags.

    Returns:
        Log level string.
    """
    if verbosity >= 2:
        return "DEBUG"
    elif verbosity >= 1:
        return "INFO"
    else:
        return "WARNING"


def load_transactions(
    records: Sequence[RawRecord], strict: bool = False
) -> tuple[list[Transaction], list[str]]:
    """Parse raw records, applying the skip-or-abort policy.

    Args:
        records: Raw records in file order (row 2 is the first data row).
        strict: Re-raise the first MalformedRecord instead of skipping.

    Returns:
        Tuple of (parsed transactions, messages for skipped rows).

    Raises:
        MalformedRecord: In strict mode, for the first bad row.
    """
    transactions: list[Transaction] = []
    skipped: list[str] = []

    for row_num, record in enumerate(records, start=2):
        try:
            transactions.append(parse_transaction(record))
        except MalformedRecord as e:
            if strict:
                raise
            message = f"Row {row_num}: {e}"
            skipped.append(message)
            logger.warning(f"Skipping malformed record. {message}")

    return transactions, skipped


def display_groups(
    title: str,
    summary: YearSummary,
    grouped: Mapping[Hashable, Decimal],
    limit: int,
    places: int = 2,
) -> None:
    """Print the largest groups as a table."""
    table = Table(title=title)
    table.add_column(escape(summary.group_field))
    table.add_column("Total", justify="right")

    shown = top(grouped, limit)
    for key, amount in shown:
        table.add_row(escape(str(key)), format_currency(amount, places))

    if len(grouped) > len(shown):
        table.caption = f"{len(grouped) - len(shown)} more groups not shown"

    console.print(table)
    logger.debug(f"Displayed {len(shown)} of {len(grouped)} groups")


def display_summary(summary: YearSummary, total_records: int, skipped: list[str]) -> None:
    """Print processing statistics."""
    console.print("\n[bold]Processing Summary[/bold]")
    console.print(f"  Records read: {total_records}")
    console.print(f"  Income transactions: {summary.income_count}")
    console.print(f"  Spending transactions: {summary.spending_count}")
    console.print(f"  Excluded transactions: {summary.excluded_count}")

    if skipped:
        console.print(f"\n[yellow]Skipped rows ({len(skipped)}):[/yellow]")
        for message in skipped[:10]:
            console.print(f"  - {escape(message)}")
        if len(skipped) > 10:
            console.print(f"  ... and {len(skipped) - 10} more")


def write_output(output_path: Path, summary: YearSummary, config: Config) -> Path:
    """Write the summary as CSV or Excel depending on the file extension."""
    from mint_ledger.output import CSVExporter, ExcelWriter

    if output_path.suffix.lower() == ".xlsx":
        return ExcelWriter(config.output).write(output_path, summary)
    return CSVExporter(config.output).export(output_path, summary)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings_path = args.config
    if settings_path is None and os.environ.get(CONFIG_ENV_VAR):
        settings_path = Path(os.environ[CONFIG_ENV_VAR])

    try:
        config = load_config(settings_path)
    except (ConfigError, FileNotFoundError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    log_level = get_log_level(args.verbose) if args.verbose else config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file, console_output=args.verbose > 0)

    try:
        if args.year is not None:
            target_year = validate_year(args.year)
        elif config.target_year is not None:
            target_year = config.target_year
        else:
            console.print("[red]Error: no target year; pass --year or set target_year in settings[/red]")
            return 1
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    group_field = args.group_by or config.output.group_by
    limit = args.top if args.top is not None else config.output.top
    if limit < 0:
        console.print("[red]Error: --top must be non-negative[/red]")
        return 1

    try:
        with LogContext(logger, "read", path=args.input):
            records = read_records(args.input, delimiter=args.delimiter)
        transactions, skipped = load_transactions(records, strict=args.strict)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    except ParseError as e:
        # MalformedRecord in strict mode lands here too
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    try:
        summary = generate_year_summary(
            transactions,
            target_year,
            rules=config.rules,
            group_field=group_field,
        )
    except UnknownField as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    places = config.output.decimal_places
    if args.report == "net":
        console.print(format_currency(summary.net, places))
    elif args.report == "spending":
        display_groups(f"Spending {target_year}", summary, summary.spending_totals, limit, places)
        console.print(f"Total spending: {format_currency(summary.total_spending, places)}")
    else:
        display_groups(f"Income {target_year}", summary, summary.income_totals, limit, places)
        console.print(f"Total income: {format_currency(summary.total_income, places)}")

    if args.output is not None:
        try:
            written = write_output(args.output, summary, config)
        except OSError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            return 1
        console.print(f"[green]Summary written to {escape(str(written))}[/green]")

    if args.verbose or skipped:
        display_summary(summary, len(records), skipped)

    return 0


if __name__ == "__main__":
    sys.exit(main())
