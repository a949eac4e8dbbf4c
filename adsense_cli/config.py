"""Settings loaded from the environment and an optional .env file."""

from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when settings are missing or invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Settings(BaseSettings):
    """CLI settings.

    Every field can be set through an ``ADSENSE_``-prefixed environment
    variable, e.g. ``ADSENSE_CREDENTIALS_FILE``.
    """

    model_config = SettingsConfigDict(env_prefix="ADSENSE_", extra="ignore")

    credentials_file: Path = Field(description="Service account key or authorized user token (JSON)")
    spreadsheet_id: str | None = Field(default=None, description="Default spreadsheet for reports")
    page_size: int = Field(default=50, ge=1, le=10000, description="Page size for list calls")


def load_settings(env_file: Path | None = Path(".env")) -> Settings:
    """Load settings, reading ``env_file`` when it exists.

    Raises:
        ConfigurationError: If a setting is missing or invalid.
    """
    try:
        if env_file and env_file.exists():
            return Settings(_env_file=env_file)  # type: ignore[call-arg]
        return Settings(_env_file=None)  # type: ignore[call-arg]
    except ValidationError as e:
        problems = ", ".join(f"ADSENSE_{str(err['loc'][0]).upper()}: {err['msg']}" for err in e.errors())
        raise ConfigurationError(f"Invalid settings ({problems})") from e
