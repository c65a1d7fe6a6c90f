"""Add the "isWatched" and "isNotInterested" flags to movie_history.

Idempotent: databases bootstrapped from init.sql already have the columns.
"""

from sqlalchemy import text
from sqlalchemy.engine import Connection


def up(connection: Connection) -> None:
    connection.execute(
        text(
            'ALTER TABLE "movie_history" '
            'ADD COLUMN IF NOT EXISTS "isWatched" boolean NOT NULL DEFAULT false'
        )
    )
    connection.execute(
        text(
            'ALTER TABLE "movie_history" '
            'ADD COLUMN IF NOT EXISTS "isNotInterested" boolean NOT NULL DEFAULT false'
        )
    )


def down(connection: Connection) -> None:
    connection.execute(text('ALTER TABLE "movie_history" DROP COLUMN "isNotInterested"'))
    connection.execute(text('ALTER TABLE "movie_history" DROP COLUMN "isWatched"'))
