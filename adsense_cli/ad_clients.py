"""Ad client CLI commands."""

from typing import Annotated, Any

import typer
from googleapiclient.errors import HttpError

from adsense_cli.client import account_name
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

app = typer.Typer(help="List ad clients")

AD_CLIENT_COLUMNS = [
    "name",
    "product_code",
    "reporting_dimension_id",
    "state",
]

AD_CLIENT_COLUMN_LABELS = {
    "name": "Resource Name",
    "reporting_dimension_id": "Reporting Dimension ID",
}


def ad_client_to_dict(ad_client: dict[str, Any]) -> dict[str, Any]:
    """Convert an ad client resource to a display dictionary."""
    return {
        "name": ad_client.get("name", ""),
        "product_code": ad_client.get("productCode", ""),
        "reporting_dimension_id": ad_client.get("reportingDimensionId", ""),
        "state": ad_client.get("state", ""),
    }


@app.command("list")
def list_ad_clients(
    account: Annotated[str, typer.Argument(help="Account ID (pub-...) or resource name (accounts/pub-...)")],
    page_size: Annotated[
        int | None,
        typer.Option("--page-size", "-p", min=1, help="Items per API page (default from settings)"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """List the ad clients of an account.

    The reporting dimension ID is what `adsense reports generate` expects.

    Examples:
        adsense ad-clients list pub-1234567890123456
        adsense ad-clients list accounts/pub-1234567890123456 --format csv
    """
    settings = get_settings()
    service = get_service(settings)
    parent = account_name(account)

    try:
        with spinner("Fetching ad clients..."):
            ad_clients = [
                ad_client_to_dict(c)
                for c in list_all(
                    service.accounts().adclients().list,
                    "adClients",
                    page_size=page_size or settings.page_size,
                    parent=parent,
                )
            ]
    except HttpError as e:
        handle_api_error(e)
        raise typer.Exit(1) from None

    if not ad_clients:
        print_warning(f"No ad clients found for {parent}")
        return

    output_data(
        ad_clients,
        AD_CLIENT_COLUMNS,
        format,
        title=f"Ad Clients ({len(ad_clients)})",
        column_labels=AD_CLIENT_COLUMN_LABELS,
    )
