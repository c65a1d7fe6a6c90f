"""Connection descriptor for the movie app PostgreSQL database.

The descriptor is the single configuration object shared by the application's
data-access layer and by the migration tooling. It says how to reach the
database (``connection_uri``), which entities the schema is made of, and where
migration units are found. Schema changes only ever go through migrations:
``auto_synchronize`` is fixed to ``False``.

Typical usage::

    from movieapp_db.descriptor import get_descriptor

    descriptor = get_descriptor()  # built once per process
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from movieapp_db.config import DatabaseSettings
from movieapp_db.entities import Base, MovieHistory, User, Watchlist
from movieapp_db.environment import EnvironmentSnapshot, load_environment
from movieapp_db.exceptions import ConfigurationError

logger = structlog.get_logger()

DATABASE_URL_VAR = "DATABASE_URL"

SCHEMA_ENTITIES: tuple[type[Base], ...] = (User, MovieHistory, Watchlist)

# Resolved against the installed ``movieapp_db`` package directory.
MIGRATION_LOCATOR = "migrations/versions/[0-9]*_*.py"


class EngineKind(str, Enum):
    """Supported database engines."""

    POSTGRES = "postgres"


class ConnectionDescriptor(BaseModel):
    """Immutable description of the database connection and the schema it governs."""

    model_config = ConfigDict(frozen=True)

    engine_kind: EngineKind = Field(default=EngineKind.POSTGRES, description="Database engine")
    connection_uri: str = Field(min_length=1, description="Full connection string")
    schema_entities: tuple[type[Base], ...] = Field(
        default=SCHEMA_ENTITIES,
        description="Entities whose tables this connection manages",
    )
    migration_locator: str = Field(
        default=MIGRATION_LOCATOR,
        description="Glob pattern of migration units, relative to the package directory",
    )
    auto_synchronize: Literal[False] = Field(
        default=False,
        description="Schema changes must go through migrations; never enabled",
    )
    verbose_logging: bool = Field(default=False, description="Echo SQL statements")

    @field_validator("connection_uri")
    @classmethod
    def _reject_blank_uri(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("connection_uri must not be blank")
        return v

    @property
    def entity_names(self) -> list[str]:
        return [entity.__name__ for entity in self.schema_entities]

    def migration_paths(self, base_dir: Path) -> list[Path]:
        """Return the files matched by ``migration_locator`` under ``base_dir``."""

        return sorted(base_dir.glob(self.migration_locator))


def _warn_if_env_file_missing(environment: EnvironmentSnapshot) -> None:
    if environment.file_error is None:
        return

    if environment.in_ambient(DATABASE_URL_VAR):
        logger.info(
            "env_file_not_loaded",
            path=str(environment.env_file),
            error=environment.file_error,
        )
        return

    logger.warning(
        "env_file_not_loaded",
        path=str(environment.env_file),
        error=environment.file_error,
        hint="Could not load .env file. Make sure .env exists in the project root.",
    )


def build_descriptor(
    environment: EnvironmentSnapshot | None = None,
    *,
    env_file: Path | str | None = None,
) -> ConnectionDescriptor:
    """Resolve the environment and build the connection descriptor.

    Args:
        environment: A pre-resolved environment. If None, the process
            environment is merged with ``env_file``.
        env_file: Location of the environment file. Defaults to ``<cwd>/.env``.
            Ignored when ``environment`` is given.

    Returns:
        ConnectionDescriptor: The validated descriptor.

    Raises:
        ConfigurationError: If ``DATABASE_URL`` is missing or empty after
            environment resolution. Only ``DATABASE_URL`` and ``APP_ENV`` are
            read; other variables never cause a failure.
    """
    if environment is None:
        environment = load_environment(env_file)

    _warn_if_env_file_missing(environment)

    settings = DatabaseSettings.from_environment(environment)
    database_url = settings.database_url
    if database_url is None or not database_url.strip():
        raise ConfigurationError(
            f"{DATABASE_URL_VAR} is not defined. Please check your .env file "
            f"and ensure {DATABASE_URL_VAR} is set."
        )

    descriptor = ConnectionDescriptor(
        engine_kind=EngineKind.POSTGRES,
        connection_uri=database_url,
        schema_entities=SCHEMA_ENTITIES,
        migration_locator=MIGRATION_LOCATOR,
        auto_synchronize=False,
        verbose_logging=settings.is_development,
    )
    logger.info(
        "connection_descriptor_built",
        engine_kind=descriptor.engine_kind.value,
        entities=descriptor.entity_names,
        verbose_logging=descriptor.verbose_logging,
        env_file_loaded=environment.loaded_file,
    )
    return descriptor


@lru_cache
def get_descriptor() -> ConnectionDescriptor:
    """Get the process-wide connection descriptor.

    The descriptor is built on first use and cached for the lifetime of the
    process. A failed build raises and is not cached.

    Returns:
        ConnectionDescriptor: The shared descriptor instance.
    """
    return build_descriptor()
