"""Migration units, applied in timestamp order by ``MigrationRunner``."""
