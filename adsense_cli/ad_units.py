"""Ad unit CLI commands."""

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

app = typer.Typer(help="List ad units")

AD_UNIT_COLUMNS = [
    "name",
    "display_name",
    "state",
    "type",
]

AD_UNIT_COLUMN_LABELS = {
    "name": "Resource Name",
}


def _colorize_state(state: str) -> str:
    """Add color to state values."""
    if state == "ACTIVE":
        return "[green]ACTIVE[/green]"
    elif state == "ARCHIVED":
        return "[dim]ARCHIVED[/dim]"
    return state


def ad_unit_to_dict(ad_unit: dict[str, Any], colorize: bool = False) -> dict[str, Any]:
    """Convert an ad unit resource to a display dictionary."""
    state = ad_unit.get("state", "")
    return {
        "name": ad_unit.get("name", ""),
        "display_name": ad_unit.get("displayName", ""),
        "state": _colorize_state(state) if colorize else state,
        "type": ad_unit.get("contentAdsSettings", {}).get("type", ""),
    }


@app.command("list")
def list_ad_units(
    ad_client: Annotated[
        str,
        typer.Argument(help="Ad client resource name (accounts/pub-.../adclients/ca-pub-...)"),
    ],
    page_size: Annotated[
        int | None,
        typer.Option("--page-size", "-p", min=1, help="Items per API page (default from settings)"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """List the ad units of an ad client.

    Examples:
        adsense ad-units list accounts/pub-123/adclients/ca-pub-123
        adsense ad-units list accounts/pub-123/adclients/ca-pub-123 --format json
    """
    settings = get_settings()
    service = get_service(settings)

    try:
        with spinner("Fetching ad units..."):
            ad_units = [
                ad_unit_to_dict(u, colorize=format == OutputFormat.TABLE)
                for u in list_all(
                    service.accounts().adclients().adunits().list,
                    "adUnits",
                    page_size=page_size or settings.page_size,
                    parent=ad_client,
                )
            ]
    except HttpError as e:
        handle_api_error(e)
        raise typer.Exit(1) from None

    if not ad_units:
        print_warning(f"No ad units found for {ad_client}")
        return

    output_data(
        ad_units,
        AD_UNIT_COLUMNS,
        format,
        title=f"Ad Units ({len(ad_units)})",
        column_labels=AD_UNIT_COLUMN_LABELS,
    )
