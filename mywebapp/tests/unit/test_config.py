"""Tests for MyWebApp settings loading and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mywebapp.config import Environment, Settings
from mywebapp.error_handling import ErrorCode, WebAppError
from mywebapp.server import load_settings


class TestSettingsDefaults:
    def test_listens_on_port_80_on_all_interfaces(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.PORT == 80
        assert settings.HOST == "0.0.0.0"

    def test_operational_endpoints_disabled_by_default(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.OPS_ENDPOINTS_ENABLED is False

    def test_default_environment_is_development(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.ENVIRONMENT == Environment.DEVELOPMENT


class TestSettingsFromEnvironment:
    def test_prefixed_variables_override_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYWEBAPP_PORT", "8080")
        monkeypatch.setenv("MYWEBAPP_OPS_ENDPOINTS_ENABLED", "true")

        settings = Settings(_env_file=None)

        assert settings.PORT == 8080
        assert settings.OPS_ENDPOINTS_ENABLED is True

    def test_unprefixed_port_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "9999")

        assert Settings(_env_file=None).PORT == 80

    def test_environment_read_from_global_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.ENVIRONMENT == Environment.PRODUCTION


class TestSettingsValidation:
    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_rejects_out_of_range_port(self, port: int) -> None:
        with pytest.raises(ValidationError, match="PORT must be between 1 and 65535"):
            Settings(_env_file=None, PORT=port)

    def test_rejects_non_numeric_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYWEBAPP_PORT", "eighty")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_log_level_is_normalised(self) -> None:
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError, match="Unknown LOG_LEVEL"):
            Settings(_env_file=None, LOG_LEVEL="chatty")

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, GRACEFUL_TIMEOUT=0)


class TestLoadSettings:
    def test_returns_settings_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYWEBAPP_PORT", "8080")

        assert load_settings().PORT == 8080

    def test_validation_failure_becomes_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MYWEBAPP_PORT", "abc")
        monkeypatch.setenv("MYWEBAPP_LOG_LEVEL", "chatty")

        with pytest.raises(WebAppError) as exc_info:
            load_settings()

        error = exc_info.value
        assert error.error_code == ErrorCode.CONFIGURATION_ERROR
        assert error.error_detail.operation == "load_settings"
        assert sorted(error.error_detail.details["fields"]) == ["LOG_LEVEL", "PORT"]
        assert len(error.error_detail.details["errors"]) == 2
        assert "2 invalid field(s)" in str(error)
