"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from sqlalchemy import Engine, create_engine

from movieapp_db.descriptor import get_descriptor

SAMPLE_DATABASE_URL = "postgres://u:p@h/db"

_ENV_VARS = ("DATABASE_URL", "APP_ENV", "LOG_LEVEL", "LOG_JSON")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Run each test from an empty working directory without database variables."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    get_descriptor.cache_clear()

    yield tmp_path

    get_descriptor.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def sample_database_url() -> str:
    """Provide a sample PostgreSQL connection string."""
    return SAMPLE_DATABASE_URL


@pytest.fixture
def write_env_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a .env file (default: in the working directory) and return its path."""

    def _write(content: str, path: Path | None = None) -> Path:
        target = path or tmp_path / ".env"
        target.write_text(textwrap.dedent(content), encoding="utf-8")
        return target

    return _write


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Provide an empty directory for synthetic migration units."""
    path = tmp_path / "migration_units" / "versions"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_migration(migrations_dir: Path) -> Callable[..., Path]:
    """Write a migration unit whose up/down execute the given SQL statements."""

    def _write(filename: str, up_sql: str, down_sql: str) -> Path:
        path = migrations_dir / filename
        path.write_text(
            textwrap.dedent(
                f'''
                from sqlalchemy import text


                def up(connection):
                    connection.execute(text({up_sql!r}))


                def down(connection):
                    connection.execute(text({down_sql!r}))
                '''
            ),
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    """Provide a file-backed SQLite engine for migration runner tests."""
    engine = create_engine(f"sqlite:///{tmp_path / 'migrations.sqlite3'}")
    yield engine
    engine.dispose()
