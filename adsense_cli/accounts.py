"""Account CLI commands."""

from typing import Annotated, Any

import typer
from googleapiclient.errors import HttpError

from adsense_cli.pagination import list_all
from adsense_cli.utils import (
    OutputFormat,
    get_service,
    get_settings,
    handle_api_error,
    output_data,
    print_warning,
    spinner,
)

app = typer.Typer(help="List AdSense accounts")

ACCOUNT_COLUMNS = [
    "name",
    "display_name",
    "state",
    "time_zone",
]

ACCOUNT_COLUMN_LABELS = {
    "name": "Resource Name",
    "time_zone": "Time Zone",
}


def account_to_dict(account: dict[str, Any]) -> dict[str, Any]:
    """Convert an account resource to a display dictionary."""
    return {
        "name": account.get("name", ""),
        "display_name": account.get("displayName", ""),
        "state": account.get("state", ""),
        "time_zone": account.get("timeZone", {}).get("id", ""),
    }


@app.command("list")
def list_accounts(
    page_size: Annotated[
        int | None,
        typer.Option("--page-size", "-p", min=1, help="Items per API page (default from settings)"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """List every account the credentials can access.

    Examples:
        adsense accounts list
        adsense accounts list --format json
    """
    settings = get_settings()
    service = get_service(settings)

    try:
        with spinner("Fetching accounts..."):
            accounts = [
                account_to_dict(a)
                for a in list_all(
                    service.accounts().list,
                    "accounts",
                    page_size=page_size or settings.page_size,
                )
            ]
    except HttpError as e:
        handle_api_error(e)
        raise typer.Exit(1) from None

    if not accounts:
        print_warning("No accounts found")
        return

    output_data(
        accounts,
        ACCOUNT_COLUMNS,
        format,
        title=f"Accounts ({len(accounts)})",
        column_labels=ACCOUNT_COLUMN_LABELS,
    )
