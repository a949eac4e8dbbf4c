"""Main CLI application."""

from typing import Annotated

import typer
from rich.console import Console

from adsense_cli import accounts, ad_clients, ad_units, auth, reports

app = typer.Typer(
    name="adsense",
    help="AdSense Management API CLI - List accounts, ad clients, ad units, and generate reports.",
    rich_markup_mode="rich",
)

console = Console()

# Register sub-commands
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(accounts.app, name="accounts", help="List accounts")
app.add_typer(ad_clients.app, name="ad-clients", help="List ad clients")
app.add_typer(ad_units.app, name="ad-units", help="List ad units")
app.add_typer(reports.app, name="reports", help="Generate reports")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from adsense_cli import __version__

        console.print(f"adsense-cli {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """AdSense Management API CLI.

    List your AdSense accounts, ad clients and ad units, and write
    7-day ad client reports to Google Sheets from the command line.

    Set up authentication using environment variables:

        export ADSENSE_CREDENTIALS_FILE="/path/to/credentials.json"
        export ADSENSE_SPREADSHEET_ID="optional-default-spreadsheet"

    Or test your credentials:

        adsense auth test
    """
    if ctx.invoked_subcommand is None and not version:
        console.print(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
