"""Discover, apply and revert ordered migration units.

A migration unit is a Python module named ``<timestamp>_<slug>.py`` exposing
``up(connection)`` and ``down(connection)``. Units are ordered by their integer
timestamp. Applied units are recorded in the ``migrations`` table, one row per
unit, inside the same transaction that applied it.
"""

from __future__ import annotations

import importlib.util
import re
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

import structlog
from sqlalchemy import BigInteger, Column, Engine, Integer, MetaData, String, Table, select
from sqlalchemy.engine import Connection

from movieapp_db.descriptor import ConnectionDescriptor
from movieapp_db.exceptions import MigrationError

logger = structlog.get_logger()

PACKAGE_DIR = Path(__file__).resolve().parents[1]

MIGRATIONS_TABLE = "migrations"

_UNIT_NAME = re.compile(r"^(?P<timestamp>\d+)_(?P<name>[A-Za-z0-9_]+)$")

_metadata = MetaData()
migrations_table = Table(
    MIGRATIONS_TABLE,
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("timestamp", BigInteger, nullable=False),
    Column("name", String(255), nullable=False),
)


@dataclass(frozen=True)
class MigrationUnit:
    """A discovered migration unit."""

    timestamp: int
    name: str
    path: Path
    module: ModuleType

    @property
    def label(self) -> str:
        return f"{self.timestamp}_{self.name}"

    def up(self, connection: Connection) -> None:
        self.module.up(connection)

    def down(self, connection: Connection) -> None:
        self.module.down(connection)


@dataclass(frozen=True)
class AppliedMigration:
    """A row of the ``migrations`` bookkeeping table."""

    id: int
    timestamp: int
    name: str

    @property
    def label(self) -> str:
        return f"{self.timestamp}_{self.name}"


def _load_unit(path: Path) -> MigrationUnit:
    match = _UNIT_NAME.match(path.stem)
    if match is None:
        raise MigrationError(f"Migration file name must look like <timestamp>_<name>.py: {path.name}")

    module_name = f"movieapp_db_migration_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise MigrationError(f"Cannot load migration module from {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise MigrationError(f"Migration {path.name} failed to import: {e}") from e

    for hook in ("up", "down"):
        if not callable(getattr(module, hook, None)):
            raise MigrationError(f"Migration {path.name} does not define {hook}(connection)")

    return MigrationUnit(
        timestamp=int(match.group("timestamp")),
        name=match.group("name"),
        path=path,
        module=module,
    )


class MigrationRunner:
    """Applies migration units against a database engine."""

    def __init__(self, engine: Engine, locator: str, base_dir: Path = PACKAGE_DIR) -> None:
        """Create a runner.

        Args:
            engine: Engine bound to the target database.
            locator: Glob pattern of migration files, relative to ``base_dir``.
            base_dir: Directory the locator is resolved against.
        """

        self._engine = engine
        self._locator = locator
        self._base_dir = base_dir

    @classmethod
    def from_descriptor(
        cls,
        descriptor: ConnectionDescriptor,
        engine: Engine | None = None,
        base_dir: Path = PACKAGE_DIR,
    ) -> MigrationRunner:
        """Create a runner for the descriptor's database and migration locator."""

        if engine is None:
            from movieapp_db.database import create_engine_from_descriptor

            engine = create_engine_from_descriptor(descriptor)
        return cls(engine, descriptor.migration_locator, base_dir=base_dir)

    def discover(self) -> list[MigrationUnit]:
        """Load every migration unit matched by the locator, ordered by timestamp."""

        units = [_load_unit(path) for path in sorted(self._base_dir.glob(self._locator))]
        units.sort(key=lambda unit: unit.timestamp)

        seen: dict[int, MigrationUnit] = {}
        for unit in units:
            if unit.timestamp in seen:
                raise MigrationError(
                    f"Duplicate migration timestamp {unit.timestamp}: "
                    f"{seen[unit.timestamp].path.name} and {unit.path.name}"
                )
            seen[unit.timestamp] = unit

        logger.debug("migrations_discovered", count=len(units), locator=self._locator)
        return units

    def applied(self) -> list[AppliedMigration]:
        """Return recorded migrations, oldest first."""

        with self._engine.begin() as conn:
            migrations_table.create(conn, checkfirst=True)
            rows = conn.execute(
                select(migrations_table).order_by(
                    migrations_table.c.timestamp, migrations_table.c.id
                )
            ).all()

        return [AppliedMigration(id=row.id, timestamp=row.timestamp, name=row.name) for row in rows]

    def pending(self) -> list[MigrationUnit]:
        """Return discovered units that have not been applied yet."""

        done = {m.timestamp for m in self.applied()}
        return [unit for unit in self.discover() if unit.timestamp not in done]

    def run(self) -> list[MigrationUnit]:
        """Apply all pending units, each in its own transaction.

        Returns:
            The units applied by this call, in order.

        Raises:
            MigrationError: If a unit fails. That unit is rolled back; units
                applied before it stay applied.
        """

        pending = self.pending()
        if not pending:
            logger.info("migrations_up_to_date")
            return []

        applied: list[MigrationUnit] = []
        for unit in pending:
            try:
                with self._engine.begin() as conn:
                    unit.up(conn)
                    conn.execute(
                        migrations_table.insert().values(timestamp=unit.timestamp, name=unit.name)
                    )
            except Exception as e:
                logger.error("migration_failed", migration=unit.label, error=str(e))
                raise MigrationError(f"Migration {unit.label} failed: {e}") from e

            logger.info("migration_applied", migration=unit.label)
            applied.append(unit)

        return applied

    def revert(self) -> MigrationUnit | None:
        """Revert the most recently applied unit.

        Returns:
            The reverted unit, or None if no migration has been applied.

        Raises:
            MigrationError: If the unit's file is missing or its ``down`` fails.
        """

        applied = self.applied()
        if not applied:
            logger.info("migrations_nothing_to_revert")
            return None

        last = applied[-1]
        units = {unit.timestamp: unit for unit in self.discover()}
        unit = units.get(last.timestamp)
        if unit is None:
            raise MigrationError(f"Migration {last.label} is recorded but its file was not found")

        try:
            with self._engine.begin() as conn:
                unit.down(conn)
                conn.execute(migrations_table.delete().where(migrations_table.c.id == last.id))
        except Exception as e:
            logger.error("migration_revert_failed", migration=unit.label, error=str(e))
            raise MigrationError(f"Reverting migration {unit.label} failed: {e}") from e

        logger.info("migration_reverted", migration=unit.label)
        return unit
