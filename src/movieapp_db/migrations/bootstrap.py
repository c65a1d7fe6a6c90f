"""Base tables shared by the first migration units.

``1735000000000_add_english_title_and_trailer_key`` is ordered before the
initial schema, so on an empty database it runs before any table exists.
Both units call ``ensure_base_schema`` first. It creates the tables in their
initial shape only where they are missing, so databases that were already
bootstrapped or migrated are left untouched.
"""

from sqlalchemy import text
from sqlalchemy.engine import Connection

BASE_TABLES = ("users", "movie_history", "watchlist")

_CREATE_STATEMENTS = (
    'CREATE EXTENSION IF NOT EXISTS "uuid-ossp"',
    """
    CREATE TABLE IF NOT EXISTS "users" (
        "id" uuid NOT NULL DEFAULT uuid_generate_v4(),
        "email" character varying NOT NULL,
        "password" text NOT NULL,
        "createdAt" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
        "updatedAt" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
        CONSTRAINT "UQ_97672ac88f789774dd47f7c8be3" UNIQUE ("email"),
        CONSTRAINT "PK_a3ffb1c0c8416b9fc6f907b7433" PRIMARY KEY ("id")
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS "movie_history" (
        "id" uuid NOT NULL DEFAULT uuid_generate_v4(),
        "userId" uuid NOT NULL,
        "movieId" character varying NOT NULL,
        "title" text NOT NULL,
        "posterPath" text,
        "userRating" integer,
        "userFeedback" text,
        "shownAt" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
        "createdAt" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
        "updatedAt" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
        CONSTRAINT "PK_260446d149c00b393d4e75fd446" PRIMARY KEY ("id")
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS "watchlist" (
        "id" uuid NOT NULL DEFAULT uuid_generate_v4(),
        "userId" uuid NOT NULL,
        "movieId" character varying NOT NULL,
        "title" text NOT NULL,
        "posterPath" text,
        "createdAt" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
        "updatedAt" TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now(),
        CONSTRAINT "PK_0c8c0dbcc8d379117138e71ad5b" PRIMARY KEY ("id")
    )
    """,
)


def ensure_base_schema(connection: Connection) -> None:
    """Create the ``uuid-ossp`` extension and any missing base table."""

    for statement in _CREATE_STATEMENTS:
        connection.execute(text(statement))
