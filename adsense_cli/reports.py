"""Report CLI commands."""

import csv
import json
from pathlib import Path
from typing import Annotated, Any

import typer
from googleapiclient.errors import HttpError
from rich.table import Table

from adsense_cli.client import account_name, build_sheets_service
from adsense_cli.config import ConfigurationError, Settings
from adsense_cli.report_params import ReportQuery, report_to_table, to_method_kwargs
from adsense_cli.sheets import SpreadsheetWriter, spreadsheet_url
from adsense_cli.utils import (
    console,
    get_service,
    get_settings,
    handle_api_error,
    parse_date,
    print_error,
    print_info,
    print_success,
    print_warning,
    spinner,
)

app = typer.Typer(help="Generate reports")

DEFAULT_TITLE = "AdSense Report"

SUPPORTED_SUFFIXES = (".json", ".csv")


def get_sheets_writer(settings: Settings) -> SpreadsheetWriter:
    """Build a spreadsheet writer or exit with a readable error."""
    try:
        return SpreadsheetWriter(build_sheets_service(settings))
    except ConfigurationError as e:
        print_error("Configuration Error", e.message)
        raise typer.Exit(1) from None


def generate_report(service: Any, account: str, query: ReportQuery) -> dict[str, Any]:
    """Run a report query against an account."""
    return (
        service.accounts()
        .reports()
        .generate(account=account_name(account), **to_method_kwargs(query.to_params()))
        .execute()
    )


def print_report_table(headers: list[str], rows: list[list[Any]], title: str) -> None:
    """Print report rows as a styled table."""
    table = Table(
        title=title,
        show_header=True,
        header_style="header",
        border_style="muted",
        row_styles=["", "dim"],
    )

    for header in headers:
        table.add_column(header)

    for row in rows:
        table.add_row(*[str(value) if value is not None else "-" for value in row])

    console.print(table)


def check_output_path(output: Path) -> None:
    """Reject report files with an unsupported suffix."""
    suffix = output.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        print_error("Unsupported Format", f"File format '{suffix}' is not supported", "Supported formats: .json, .csv")
        raise typer.Exit(1)


def save_report(headers: list[str], rows: list[list[Any]], output: Path) -> None:
    """Save report to file."""
    if output.suffix.lower() == ".json":
        data = [dict(zip(headers, row)) for row in rows]
        output.write_text(json.dumps(data, indent=2, default=str))
    else:
        with output.open("w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            writer.writerows(rows)

    print_success(f"Report saved to {output}")


@app.command("generate")
def generate(
    account: Annotated[str, typer.Argument(help="Account ID (pub-...) or resource name (accounts/pub-...)")],
    ad_client_id: Annotated[
        str,
        typer.Argument(help="Ad client reporting dimension ID (see `adsense ad-clients list`)"),
    ],
    spreadsheet: Annotated[
        str | None,
        typer.Option("--spreadsheet", "-s", help="Write into this spreadsheet ID instead of creating one"),
    ] = None,
    title: Annotated[
        str,
        typer.Option("--title", "-t", help="Title of the spreadsheet to create"),
    ] = DEFAULT_TITLE,
    end: Annotated[
        str | None,
        typer.Option("--end", "-e", help="Last day of the 7-day window (YYYY-MM-DD, default: today)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Save to file (JSON or CSV) instead of a spreadsheet"),
    ] = None,
    print_only: Annotated[
        bool,
        typer.Option("--print", help="Print the report instead of writing a spreadsheet (not with --output)"),
    ] = False,
) -> None:
    """Generate a 7-day daily report for one ad client.

    By default the report is written to a new spreadsheet. The target
    spreadsheet can also be set with ADSENSE_SPREADSHEET_ID.

    Examples:
        adsense reports generate pub-123 ca-pub-123
        adsense reports generate pub-123 ca-pub-123 --spreadsheet 1AbC...
        adsense reports generate pub-123 ca-pub-123 --end 2024-03-08 --print
        adsense reports generate pub-123 ca-pub-123 -o report.csv
    """
    if output and print_only:
        print_error("Conflicting Options", "--output and --print cannot be used together")
        raise typer.Exit(1)
    if output:
        check_output_path(output)

    today = parse_date(end) if end else None
    query = ReportQuery.for_ad_client(ad_client_id, today=today)

    settings = get_settings()
    service = get_service(settings)

    try:
        with spinner("Generating report..."):
            response = generate_report(service, account, query)
    except HttpError as e:
        handle_api_error(e)
        raise typer.Exit(1) from None

    headers, rows = report_to_table(response)
    if not rows:
        print_warning("No rows returned for the specified period")
        return

    period = f"{query.start_date.isoformat()} to {query.end_date.isoformat()}"

    if output:
        save_report(headers, rows, output)
        return

    if print_only:
        print_report_table(headers, rows, f"Report ({period})")
        return

    writer = get_sheets_writer(settings)
    spreadsheet_id = spreadsheet or settings.spreadsheet_id

    try:
        with spinner("Writing report to spreadsheet..."):
            if not spreadsheet_id:
                spreadsheet_id = writer.create(title)
                print_info(f"Created spreadsheet '{title}'")
            writer.write_table(spreadsheet_id, headers, rows)
    except HttpError as e:
        handle_api_error(e)
        raise typer.Exit(1) from None

    print_success(f"Wrote {len(rows)} rows ({period})", details=spreadsheet_url(spreadsheet_id))
