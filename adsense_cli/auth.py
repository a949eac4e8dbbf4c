"""Authentication CLI commands."""

from pathlib import Path
from typing import Annotated

import typer
from googleapiclient.errors import HttpError
from rich.table import Table

from adsense_cli.config import Settings
from adsense_cli.utils import (
    console,
    get_service,
    get_settings,
    handle_api_error,
    print_info,
    print_result_panel,
    spinner,
)

app = typer.Typer(help="Authentication commands")

EnvFileOption = Annotated[
    Path | None,
    typer.Option("--env-file", "-e", help="Path to .env file"),
]


def _settings_table(settings: Settings, title: str) -> Table:
    table = Table(
        title=title,
        show_header=True,
        header_style="header",
        border_style="muted",
    )
    table.add_column("Setting", style="label")
    table.add_column("Value")

    table.add_row("ADSENSE_CREDENTIALS_FILE", str(settings.credentials_file))
    table.add_row("ADSENSE_SPREADSHEET_ID", settings.spreadsheet_id or "[muted]<not set>[/muted]")
    table.add_row("ADSENSE_PAGE_SIZE", str(settings.page_size))
    return table


@app.command("show")
def show_config(env_file: EnvFileOption = Path(".env")) -> None:
    """Show current configuration.

    Displays configuration loaded from environment variables and .env file.

    Examples:
        adsense auth show
        adsense auth show --env-file .env.production
    """
    settings = get_settings(env_file)
    source = f"from {env_file}" if env_file and env_file.exists() else "from environment variables"
    print_info(f"Loaded configuration {source}")
    console.print(_settings_table(settings, "Current Configuration"))


@app.command("test")
def test_auth(env_file: EnvFileOption = Path(".env")) -> None:
    """Test authentication credentials.

    Loads the configuration, then lists a single account to confirm the
    credentials are accepted by the AdSense Management API.

    Examples:
        adsense auth test
        adsense auth test --env-file .env.production
    """
    print_info("Testing AdSense API credentials...")
    settings = get_settings(env_file)
    console.print(_settings_table(settings, "Configuration"))
    console.print()

    service = get_service(settings)

    try:
        with spinner("Authenticating with the AdSense API..."):
            response = service.accounts().list(pageSize=1).execute()
    except HttpError as e:
        handle_api_error(e)
        raise typer.Exit(1) from None

    accounts = response.get("accounts") or []
    print_result_panel(
        "Authentication Successful",
        {
            "First Account": accounts[0].get("name", "-") if accounts else "-",
            "More Accounts": "yes" if response.get("nextPageToken") else "no",
        },
    )
