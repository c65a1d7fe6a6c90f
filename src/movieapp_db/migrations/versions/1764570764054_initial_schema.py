"""Create the users, movie_history and watchlist tables and their user foreign keys."""

from sqlalchemy import text
from sqlalchemy.engine import Connection

from movieapp_db.migrations.bootstrap import ensure_base_schema

# (table, constraint name)
_USER_FOREIGN_KEYS = (
    ("movie_history", "FK_237347e79c31cc957ae1fb6fff1"),
    ("watchlist", "FK_03878f3f177c680cc195900f80a"),
)

_ADD_USER_FOREIGN_KEY = """
DO $$
BEGIN
    IF NOT EXISTS (
        SELECT 1 FROM pg_constraint
        WHERE conrelid = '"{table}"'::regclass AND contype = 'f'
    ) THEN
        ALTER TABLE "{table}" ADD CONSTRAINT "{name}"
            FOREIGN KEY ("userId") REFERENCES "users"("id")
            ON DELETE NO ACTION ON UPDATE NO ACTION;
    END IF;
END
$$
"""


def up(connection: Connection) -> None:
    ensure_base_schema(connection)
    # Tables created by init.sql already carry an unnamed user foreign key.
    for table, name in _USER_FOREIGN_KEYS:
        connection.execute(text(_ADD_USER_FOREIGN_KEY.format(table=table, name=name)))


def down(connection: Connection) -> None:
    for table, name in reversed(_USER_FOREIGN_KEYS):
        connection.execute(text(f'ALTER TABLE "{table}" DROP CONSTRAINT IF EXISTS "{name}"'))
    connection.execute(text('DROP TABLE IF EXISTS "watchlist"'))
    connection.execute(text('DROP TABLE IF EXISTS "movie_history"'))
    connection.execute(text('DROP TABLE IF EXISTS "users"'))
