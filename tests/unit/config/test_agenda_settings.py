# ============================================================================
# Tests for Settings
# ============================================================================
"""Unit tests for the engine settings."""

import pytest
from pydantic import ValidationError

from agenda_turnos.config import settings as settings_module
from agenda_turnos.config.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_defaults(self) -> None:
        """Should expose the engine defaults."""
        settings = Settings(_env_file=None)

        assert settings.CACHE_TTL_SECONDS == 30.0
        assert settings.EXPRESS_WINDOW_START_HOUR == 7
        assert settings.EXPRESS_WINDOW_END_HOUR == 22
        assert settings.AVAILABILITY_MINUTE_STEP == 5
        assert settings.AVAILABILITY_MAX_BLOCK_MINUTES == 60
        assert settings.DEFAULT_CURRENCY == "ARS"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read values from environment variables."""
        monkeypatch.setenv("TURNOS_API_BASE_URL", "https://api.turnos.test")
        monkeypatch.setenv("CACHE_TTL_SECONDS", "5")
        monkeypatch.setenv("DEFAULT_CURRENCY", "usd")

        settings = Settings(_env_file=None)

        assert settings.TURNOS_API_BASE_URL == "https://api.turnos.test"
        assert settings.CACHE_TTL_SECONDS == 5.0
        assert settings.DEFAULT_CURRENCY == "USD"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("EXPRESS_WINDOW_END_HOUR", 24),
            ("AVAILABILITY_MINUTE_STEP", 0),
            ("DEFAULT_CURRENCY", "PESOS"),
            ("LOG_FORMAT", "xml"),
        ],
    )
    def test_invalid_values(self, field: str, value) -> None:
        """Should reject out-of-range values."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_is_development(self) -> None:
        """Should treat DEBUG or a dev environment as development."""
        assert Settings(_env_file=None, ENVIRONMENT="dev").is_development
        assert not Settings(_env_file=None).is_development

    def test_get_settings_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should return the same instance on every call."""
        monkeypatch.setattr(settings_module, "_settings_instance", None)

        assert get_settings() is get_settings()
