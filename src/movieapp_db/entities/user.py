"""User ORM model.

Maps to the ``users`` table. A user owns the movies they were shown
(``movie_history``) and the movies they saved for later (``watchlist``).
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import TEXT, VARCHAR, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieapp_db.entities.base import Base, TimestampMixin

if TYPE_CHECKING:
    from movieapp_db.entities.movie_history import MovieHistory
    from movieapp_db.entities.watchlist import Watchlist


class User(TimestampMixin, Base):
    """ORM model for the ``users`` table."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4, server_default=text("uuid_generate_v4()")
    )
    email: Mapped[str] = mapped_column(VARCHAR, unique=True, nullable=False)
    # Stores the password hash, never the plain text.
    password: Mapped[str] = mapped_column(TEXT, nullable=False)

    movie_history: Mapped[list[MovieHistory]] = relationship(back_populates="user")
    watchlist: Mapped[list[Watchlist]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"
