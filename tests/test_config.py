"""
Tests for the settings snapshot and the startup configuration check.
"""

import pytest
from pydantic import ValidationError

from taskhub.config import REQUIRED_SETTINGS, Settings, load_settings, validate_settings
from taskhub.core.exceptions import ConfigurationException

from conftest import COMPLETE_SETTINGS, make_settings


class TestValidateSettings:
    """Tests for validate_settings."""

    def test_complete_settings_pass(self) -> None:
        """A complete snapshot validates without error."""
        assert validate_settings(make_settings()) is None

    @pytest.mark.parametrize("key", REQUIRED_SETTINGS)
    def test_missing_required_setting_rejected(self, key: str) -> None:
        """Each required setting left empty is reported by its env name."""
        with pytest.raises(ConfigurationException) as exc_info:
            validate_settings(make_settings(**{key: ""}))

        assert exc_info.value.details == {"key": key.upper()}
        assert key.upper() in exc_info.value.message

    def test_whitespace_value_is_present(self) -> None:
        """Only an empty value counts as missing; whitespace is kept as given."""
        settings = make_settings(jwt_secret="   ")

        validate_settings(settings)
        assert settings.jwt_secret == "   "

    def test_first_missing_setting_reported(self) -> None:
        """Checks run in declared order and stop at the first gap."""
        settings = make_settings(jwt_key="", email_host="")

        with pytest.raises(ConfigurationException) as exc_info:
            validate_settings(settings)

        assert exc_info.value.details["key"] == "JWT_KEY"

    def test_port_is_not_required(self, monkeypatch) -> None:
        """PORT falls back to its default instead of failing."""
        monkeypatch.delenv("PORT", raising=False)
        values = {k: v for k, v in COMPLETE_SETTINGS.items() if k != "port"}
        settings = Settings(_env_file=None, **values)

        validate_settings(settings)
        assert settings.port == 3009

    def test_validation_is_deterministic(self) -> None:
        """Repeated checks on the same snapshot give the same outcome."""
        complete = make_settings()
        incomplete = make_settings(db_uri="")

        for _ in range(3):
            validate_settings(complete)

        messages = set()
        for _ in range(3):
            with pytest.raises(ConfigurationException) as exc_info:
                validate_settings(incomplete)
            messages.add(exc_info.value.message)
        assert messages == {"DB_URI is not defined in the environment variables."}

    def test_custom_required_list(self) -> None:
        """Only the listed fields are checked."""
        settings = make_settings(email_service="")
        validate_settings(settings, required=("db_uri",))


class TestLoadSettings:
    """Tests for building the snapshot from the environment."""

    def test_reads_environment_variables(self, monkeypatch) -> None:
        """Upper-case environment variables populate the fields."""
        monkeypatch.setenv("DB_URI", "postgresql+asyncpg://db/tasks")
        monkeypatch.setenv("NODE_ENV", "production")
        monkeypatch.setenv("PORT", "8080")

        settings = load_settings(_env_file=None)

        assert settings.db_uri == "postgresql+asyncpg://db/tasks"
        assert settings.environment == "production"
        assert settings.port == 8080

    def test_default_port(self, monkeypatch) -> None:
        """PORT defaults to 3009."""
        monkeypatch.delenv("PORT", raising=False)
        assert load_settings(_env_file=None).port == 3009

    def test_empty_port_uses_default(self, monkeypatch) -> None:
        """An empty PORT falls back to 3009 instead of failing to parse."""
        for key, value in COMPLETE_SETTINGS.items():
            if key != "port":
                monkeypatch.setenv(key.upper(), value)
        monkeypatch.setenv("PORT", "")

        settings = load_settings(_env_file=None)

        validate_settings(settings)
        assert settings.port == 3009

    def test_empty_required_variable_still_missing(self, monkeypatch) -> None:
        """Empty required variables stay empty and fail validation."""
        for key, value in COMPLETE_SETTINGS.items():
            if key != "port":
                monkeypatch.setenv(key.upper(), value)
        monkeypatch.setenv("EMAIL_HOST", "")

        settings = load_settings(_env_file=None)

        with pytest.raises(ConfigurationException, match="EMAIL_HOST"):
            validate_settings(settings)

    def test_invalid_port_is_configuration_error(self, monkeypatch) -> None:
        """Unparseable values surface as ConfigurationException."""
        monkeypatch.setenv("PORT", "not-a-port")

        with pytest.raises(ConfigurationException, match="PORT") as exc_info:
            load_settings(_env_file=None)

        assert exc_info.value.details == {"keys": ["PORT"]}

    def test_settings_are_immutable(self) -> None:
        """The snapshot cannot be changed after startup."""
        settings = make_settings()

        with pytest.raises(ValidationError):
            settings.db_uri = "postgresql+asyncpg://elsewhere/db"
