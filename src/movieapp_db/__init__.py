"""movieapp-db - connection descriptor and migrations for the movie app database.

This package resolves the database configuration from the environment, exposes
it as a process-wide connection descriptor, and ships the schema entities and
migration units that the application and migration tooling share.
"""

__version__ = "0.1.0"

from movieapp_db.config import DatabaseSettings, LoggingSettings
from movieapp_db.descriptor import (
    ConnectionDescriptor,
    EngineKind,
    build_descriptor,
    get_descriptor,
)
from movieapp_db.exceptions import ConfigurationError, MigrationError

__all__ = [
    "ConfigurationError",
    "ConnectionDescriptor",
    "DatabaseSettings",
    "EngineKind",
    "LoggingSettings",
    "MigrationError",
    "build_descriptor",
    "get_descriptor",
    "__version__",
]
