"""Configuration management for movieapp-db.

This module handles application configuration using Pydantic settings.
Values come from an already resolved ``EnvironmentSnapshot`` (process
environment merged with the ``.env`` file, see ``movieapp_db.environment``);
the settings classes never read ``os.environ`` or ``.env`` themselves, so the
environment is resolved exactly once.

Variable names are matched exactly (``DATABASE_URL``, not ``database_url``).
"""

from __future__ import annotations

from typing import ClassVar

import structlog
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from movieapp_db.environment import EnvironmentSnapshot

logger = structlog.get_logger()

DEVELOPMENT_ENV = "development"


class EnvironmentSettings(BaseSettings):
    """Settings populated only from a resolved environment snapshot.

    Subclasses map each field to the environment variable it is read from in
    ``env_vars``.
    """

    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    env_vars: ClassVar[dict[str, str]] = {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment and .env were already merged into the snapshot.
        return (init_settings,)

    @classmethod
    def from_environment(cls, environment: EnvironmentSnapshot):
        """Build settings from the variables of ``environment`` named in ``env_vars``.

        Args:
            environment: Resolved environment snapshot.

        Returns:
            Validated settings instance.
        """
        values = {
            field: environment.values[var]
            for field, var in cls.env_vars.items()
            if var in environment.values
        }
        return cls(**values)


class DatabaseSettings(EnvironmentSettings):
    """The variables the connection descriptor is built from."""

    env_vars: ClassVar[dict[str, str]] = {
        "database_url": "DATABASE_URL",
        "app_env": "APP_ENV",
    }

    database_url: str | None = Field(
        default=None,
        description="PostgreSQL connection URL (required to build the connection descriptor)",
    )
    app_env: str | None = Field(
        default=None,
        description="Runtime mode; 'development' enables verbose SQL logging",
    )

    @property
    def is_development(self) -> bool:
        return self.app_env == DEVELOPMENT_ENV


class LoggingSettings(EnvironmentSettings):
    """Log output settings for the CLI and tooling processes."""

    env_vars: ClassVar[dict[str, str]] = {
        "log_level": "LOG_LEVEL",
        "log_json": "LOG_JSON",
    }

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json: bool = Field(
        default=False,
        description="Render log events as JSON lines instead of console output",
    )

    @classmethod
    def from_environment(cls, environment: EnvironmentSnapshot) -> LoggingSettings:
        """Build logging settings, falling back to defaults on invalid values."""
        try:
            return super().from_environment(environment)
        except ValidationError as e:
            logger.warning(
                "invalid_logging_settings",
                error_count=e.error_count(),
                fields=[".".join(str(part) for part in err["loc"]) for err in e.errors()],
            )
            return cls()
