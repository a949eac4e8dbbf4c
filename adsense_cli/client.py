"""Construction of authenticated Google API services."""

import json
from pathlib import Path
from typing import Any

from google.auth.credentials import Credentials
from google.oauth2 import credentials as user_credentials
from google.oauth2 import service_account
from googleapiclient.discovery import build

from adsense_cli.config import ConfigurationError, Settings

ADSENSE_SCOPES = ["https://www.googleapis.com/auth/adsense.readonly"]
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def load_credentials(path: Path, scopes: list[str]) -> Credentials:
    """Load credentials from a service account key or an authorized user file.

    Args:
        path: Path to the JSON credentials file.
        scopes: OAuth scopes to request.

    Raises:
        ConfigurationError: If the file is missing or not a known format.
    """
    if not path.exists():
        raise ConfigurationError(f"Credentials file not found: {path}")

    try:
        info = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Credentials file is not valid JSON: {path}") from e

    kind = info.get("type")
    if kind == "service_account":
        return service_account.Credentials.from_service_account_info(info, scopes=scopes)
    if kind == "authorized_user":
        return user_credentials.Credentials.from_authorized_user_info(info, scopes=scopes)
    raise ConfigurationError(f"Unsupported credentials type '{kind}' in {path}")


def build_adsense_service(settings: Settings) -> Any:
    """Build an AdSense Management API v2 service."""
    creds = load_credentials(settings.credentials_file, ADSENSE_SCOPES)
    return build("adsense", "v2", credentials=creds, cache_discovery=False)


def build_sheets_service(settings: Settings) -> Any:
    """Build a Google Sheets API v4 service."""
    creds = load_credentials(settings.credentials_file, SHEETS_SCOPES)
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


def account_name(account: str) -> str:
    """Normalize an account ID to its resource name.

    Example:
        >>> account_name("pub-123")
        'accounts/pub-123'
    """
    return account if account.startswith("accounts/") else f"accounts/{account}"
