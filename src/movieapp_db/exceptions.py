"""Custom exceptions for movieapp-db."""


class MovieAppDbError(Exception):
    """Base exception for all movieapp-db errors."""


class ConfigurationError(MovieAppDbError):
    """Exception raised for configuration related errors."""


class MigrationError(MovieAppDbError):
    """Exception raised when a migration unit cannot be loaded, applied or reverted."""
