"""Add "englishTitle" and "trailerKey" to movie_history, plus lookup indexes.

This unit is stamped before the initial schema. On an empty database the base
tables are created here first; the initial schema unit then only adds what is
still missing.
"""

from sqlalchemy import text
from sqlalchemy.engine import Connection

from movieapp_db.migrations.bootstrap import ensure_base_schema


def up(connection: Connection) -> None:
    ensure_base_schema(connection)
    connection.execute(text('ALTER TABLE "movie_history" ADD COLUMN IF NOT EXISTS "englishTitle" text'))
    connection.execute(text('ALTER TABLE "movie_history" ADD COLUMN IF NOT EXISTS "trailerKey" text'))
    connection.execute(
        text(
            "CREATE INDEX IF NOT EXISTS idx_movie_history_user_movie "
            'ON movie_history ("userId", "movieId")'
        )
    )
    connection.execute(
        text(
            "CREATE INDEX IF NOT EXISTS idx_movie_history_user_shown "
            'ON movie_history ("userId", "shownAt")'
        )
    )


def down(connection: Connection) -> None:
    # The initial schema unit is reverted first and may have dropped the table.
    connection.execute(text("DROP INDEX IF EXISTS idx_movie_history_user_shown"))
    connection.execute(text("DROP INDEX IF EXISTS idx_movie_history_user_movie"))
    connection.execute(text('ALTER TABLE IF EXISTS "movie_history" DROP COLUMN IF EXISTS "trailerKey"'))
    connection.execute(text('ALTER TABLE IF EXISTS "movie_history" DROP COLUMN IF EXISTS "englishTitle"'))
