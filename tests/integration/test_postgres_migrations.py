"""Integration tests against a live PostgreSQL database.

Set MOVIEAPP_TEST_DATABASE_URL to a disposable database to run them; every
shipped migration is applied and then reverted.
"""

import os

import pytest
from sqlalchemy import inspect

from movieapp_db.database import create_engine_from_descriptor
from movieapp_db.descriptor import build_descriptor
from movieapp_db.environment import load_environment
from movieapp_db.migrations import MigrationRunner

TEST_DATABASE_URL = os.environ.get("MOVIEAPP_TEST_DATABASE_URL")


@pytest.mark.integration
@pytest.mark.skipif(not TEST_DATABASE_URL, reason="MOVIEAPP_TEST_DATABASE_URL not set")
class TestPostgresMigrations:
    """Apply and revert the shipped migration units."""

    def test_migrations_round_trip(self, tmp_path) -> None:
        env = load_environment(tmp_path / "absent.env", environ={"DATABASE_URL": TEST_DATABASE_URL})
        descriptor = build_descriptor(env)
        engine = create_engine_from_descriptor(descriptor)
        runner = MigrationRunner.from_descriptor(descriptor, engine=engine)

        try:
            applied = runner.run()
            assert [u.timestamp for u in applied] == [u.timestamp for u in runner.discover()]

            tables = set(inspect(engine).get_table_names())
            assert {"users", "movie_history", "watchlist", "migrations"} <= tables

            columns = {c["name"] for c in inspect(engine).get_columns("movie_history")}
            assert {"userId", "englishTitle", "trailerKey", "isWatched", "isNotInterested"} <= columns
        finally:
            while runner.revert() is not None:
                pass
            engine.dispose()

        assert "movie_history" not in inspect(engine).get_table_names()
