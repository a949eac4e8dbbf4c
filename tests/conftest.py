"""Shared fixtures."""

from pathlib import Path
from typing import Any

import pytest

from adsense_cli.config import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(credentials_file=tmp_path / "credentials.json", page_size=50)  # type: ignore[call-arg]


@pytest.fixture
def use_service(monkeypatch: pytest.MonkeyPatch, settings: Settings):
    """Patch a command module so it uses the given fake service and settings."""

    def _use(module: Any, service: Any) -> None:
        monkeypatch.setattr(module, "get_settings", lambda *args, **kwargs: settings)
        monkeypatch.setattr(module, "get_service", lambda _settings: service)

    return _use
