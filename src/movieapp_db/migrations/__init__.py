"""Schema migrations.

Migration units live in ``versions/`` and are discovered through the connection
descriptor's ``migration_locator``.
"""

from .runner import AppliedMigration, MigrationRunner, MigrationUnit

__all__ = ["AppliedMigration", "MigrationRunner", "MigrationUnit"]
