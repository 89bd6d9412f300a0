"""Tests for settings."""

from datetime import date

import pytest
from pydantic import ValidationError

from nutrition_analytics.config import Settings, local_today


def test_settings_defaults(settings: Settings) -> None:
    assert settings.timezone == "UTC"
    assert settings.default_water_target_ml == 2500
    assert settings.activity_grid_days == 100
    assert settings.water_write_retries == 3


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "env-key")
    monkeypatch.setenv("ACTIVITY_GRID_DAYS", "30")

    settings = Settings()

    assert settings.supabase_url == "https://env.supabase.co"
    assert settings.activity_grid_days == 30


def test_settings_reject_non_positive_water_target() -> None:
    with pytest.raises(ValidationError):
        Settings(
            supabase_url="https://example.supabase.co",
            supabase_service_key="service-key",
            default_water_target_ml=0,
        )


def test_local_today_returns_date() -> None:
    assert isinstance(local_today("Pacific/Auckland"), date)
