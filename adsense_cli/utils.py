"""Shared utilities for CLI commands."""

import csv
import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from googleapiclient.errors import HttpError
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from adsense_cli.client import build_adsense_service
from adsense_cli.config import ConfigurationError, Settings, load_settings

# Custom theme for consistent styling
ADSENSE_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "highlight": "magenta",
        "muted": "dim",
        "header": "bold cyan",
        "value": "white",
        "label": "blue",
    }
)

console = Console(theme=ADSENSE_THEME)
error_console = Console(stderr=True, theme=ADSENSE_THEME)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def get_settings(env_file: Path | None = Path(".env")) -> Settings:
    """Load settings or exit with a readable error.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    try:
        return load_settings(env_file)
    except ConfigurationError as e:
        print_error("Configuration Error", e.message)
        error_console.print()
        print_info_panel(
            "Environment Variables",
            "• ADSENSE_CREDENTIALS_FILE (required)\n• ADSENSE_SPREADSHEET_ID\n• ADSENSE_PAGE_SIZE",
        )
        raise typer.Exit(1) from None


def get_service(settings: Settings) -> Any:
    """Build an AdSense service or exit with a readable error.

    Raises:
        typer.Exit: If the credentials cannot be loaded.
    """
    try:
        return build_adsense_service(settings)
    except ConfigurationError as e:
        print_error("Configuration Error", e.message)
        raise typer.Exit(1) from None


def handle_api_error(e: HttpError) -> None:
    """Handle and display an API error.

    Args:
        e: The exception to handle.
    """
    details_parts = []

    if e.uri:
        details_parts.append(f"Request: {e.uri}")

    details_parts.append(f"Status code: {e.status_code}")

    # Show the JSON error body when it is short enough to be useful
    try:
        body = json.loads(e.content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        body = None
    if body:
        body_str = json.dumps(body, indent=2)
        if len(body_str) < 500:
            details_parts.append(f"Response: {body_str}")

    print_error("API Error", e.reason or "Request failed", details="\n".join(details_parts))


# ============================================================================
# Styled Output Functions
# ============================================================================


def print_success(message: str, details: str | None = None) -> None:
    """Print a success message with a checkmark.

    Args:
        message: The success message.
        details: Optional additional details.
    """
    text = Text()
    text.append("✓ ", style="success")
    text.append(message)
    if details:
        text.append(f"\n  {details}", style="muted")
    console.print(text)


def print_error(title: str, message: str, details: str | None = None) -> None:
    """Print an error message in a styled panel.

    Args:
        title: Error title.
        message: Error message.
        details: Optional additional details.
    """
    content = Text(message)
    if details:
        content.append(f"\n{details}", style="muted")

    panel = Panel(
        content,
        title=f"[error]✗ {title}[/error]",
        border_style="red",
        padding=(0, 1),
    )
    error_console.print(panel)


def print_warning(message: str) -> None:
    """Print a warning message."""
    text = Text()
    text.append("⚠ ", style="warning")
    text.append(message, style="warning")
    console.print(text)


def print_info(message: str) -> None:
    """Print an info message."""
    text = Text()
    text.append("ℹ ", style="info")
    text.append(message)
    console.print(text)


def print_info_panel(title: str, content: str) -> None:
    """Print information in a styled panel."""
    panel = Panel(
        content,
        title=f"[info]{title}[/info]",
        border_style="cyan",
        padding=(0, 1),
    )
    console.print(panel)


def print_result_panel(title: str, data: dict[str, Any]) -> None:
    """Print a result in a styled panel with key-value pairs.

    Args:
        title: Panel title.
        data: Dictionary of key-value pairs to display.
    """
    lines = [f"[label]{key}:[/label] [value]{value}[/value]" for key, value in data.items()]

    panel = Panel(
        "\n".join(lines),
        title=f"[success]{title}[/success]",
        border_style="green",
        padding=(0, 1),
    )
    console.print(panel)


# ============================================================================
# Table Output
# ============================================================================


def print_table(
    data: list[dict[str, Any]],
    columns: list[str],
    title: str | None = None,
    column_labels: dict[str, str] | None = None,
) -> None:
    """Print data as a rich table.

    Args:
        data: List of dictionaries to display.
        columns: Column names to include.
        title: Optional table title.
        column_labels: Optional mapping of column names to display labels.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="header",
        border_style="muted",
        row_styles=["", "dim"],
    )

    labels = column_labels or {}
    for col in columns:
        label = labels.get(col, col.replace("_", " ").title())
        table.add_column(label)

    for row in data:
        table.add_row(*[str(row.get(col, "")) for col in columns])

    console.print(table)


def print_json(data: Any, title: str | None = None) -> None:
    """Print data as syntax-highlighted JSON."""
    json_str = json.dumps(data, indent=2, default=str)

    syntax = Syntax(
        json_str,
        "json",
        theme="monokai",
        line_numbers=False,
        word_wrap=True,
    )

    if title:
        panel = Panel(syntax, title=f"[info]{title}[/info]", border_style="cyan")
        console.print(panel)
    else:
        console.print(syntax)


def print_csv(data: list[dict[str, Any]], columns: list[str]) -> None:
    """Print data as CSV."""
    writer = csv.DictWriter(sys.stdout, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    writer.writerows(data)


def output_data(
    data: list[dict[str, Any]],
    columns: list[str],
    format: OutputFormat,
    title: str | None = None,
    column_labels: dict[str, str] | None = None,
) -> None:
    """Output data in the specified format.

    Args:
        data: Data to output.
        columns: Column names for table/CSV output.
        format: Output format.
        title: Optional title for table output.
        column_labels: Optional mapping of column names to display labels.
    """
    if format == OutputFormat.JSON:
        print_json(data, title)
    elif format == OutputFormat.CSV:
        print_csv(data, columns)
    else:
        print_table(data, columns, title, column_labels)


# ============================================================================
# Progress Indicators
# ============================================================================


@contextmanager
def spinner(message: str) -> Iterator[None]:
    """Show a spinner while executing a block.

    Example:
        with spinner("Loading accounts..."):
            accounts = list(list_all(service.accounts().list, "accounts"))
    """
    with console.status(f"[info]{message}[/info]", spinner="dots"):
        yield


# ============================================================================
# Utility Functions
# ============================================================================


def parse_date(value: str) -> date:
    """Parse a date string in YYYY-MM-DD format.

    Raises:
        typer.BadParameter: If the date format is invalid.
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date format: '{value}'. Use YYYY-MM-DD format.") from None
