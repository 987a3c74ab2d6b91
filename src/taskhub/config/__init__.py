"""
Configuration Module
====================

Application settings loaded once at startup using Pydantic.

The snapshot is immutable after construction and is handed to every
component that needs it (``app.state.settings``). Nothing re-reads the
process environment after bootstrap.
"""

from functools import lru_cache
from typing import Any, List, Tuple

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskhub.core.exceptions import ConfigurationException


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Required fields default to an empty string so that completeness is
    decided by ``validate_settings`` rather than by the model constructor.
    Empty environment variables count as unset, so ``PORT=`` falls back to
    its default and an empty required variable stays empty.
    """

    # ========== Application ==========
    app_name: str = Field(default="taskhub", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    node_env: str = Field(default="", description="Deployment environment tag")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3009, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    db_uri: str = Field(default="", description="Database connection URL (async driver)")

    # ========== Token signing ==========
    jwt_secret: str = Field(default="", description="JWT signing secret")
    jwt_key: str = Field(default="", description="JWT key material")

    # ========== Outbound mail ==========
    email_user: str = Field(default="", description="SMTP username")
    email_pass: str = Field(default="", description="SMTP password")
    email_host: str = Field(default="", description="SMTP host")
    email_service: str = Field(default="", description="Mail service identifier")

    # ========== CORS ==========
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    @property
    def environment(self) -> str:
        return self.node_env


# Fixed at build time; checked in this order.
REQUIRED_SETTINGS: Tuple[str, ...] = (
    "db_uri",
    "jwt_secret",
    "jwt_key",
    "email_user",
    "email_pass",
    "email_host",
    "email_service",
    "node_env",
)


def validate_settings(
    settings: Settings,
    required: Tuple[str, ...] = REQUIRED_SETTINGS,
) -> None:
    """
    Fail fast on the first required setting that is missing or empty.

    Args:
        settings: Configuration snapshot to check
        required: Field names that must hold a non-empty value

    Raises:
        ConfigurationException: Naming the missing environment variable
    """
    for key in required:
        value = getattr(settings, key, None)
        if value is None or (isinstance(value, str) and not value):
            env_name = key.upper()
            raise ConfigurationException(
                f"{env_name} is not defined in the environment variables.",
                details={"key": env_name},
            )


def load_settings(**overrides: Any) -> Settings:
    """
    Build a fresh settings snapshot from the environment and ``.env``.

    Keyword overrides take precedence over the environment.

    Raises:
        ConfigurationException: If a provided value cannot be parsed
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        keys = [
            ".".join(str(part) for part in err["loc"]).upper() for err in e.errors()
        ]
        raise ConfigurationException(
            f"Invalid value for {', '.join(keys)} in the environment variables.",
            details={"keys": keys},
        ) from e


@lru_cache()
def get_settings() -> Settings:
    """Returns the cached process-wide Settings instance."""
    return load_settings()
