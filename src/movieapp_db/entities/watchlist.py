"""Watchlist ORM model."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import TEXT, VARCHAR, ForeignKey, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieapp_db.entities.base import Base, TimestampMixin

if TYPE_CHECKING:
    from movieapp_db.entities.user import User

USER_FOREIGN_KEY = "FK_03878f3f177c680cc195900f80a"


class Watchlist(TimestampMixin, Base):
    """ORM model for the ``watchlist`` table: movies a user saved for later."""

    __tablename__ = "watchlist"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4, server_default=text("uuid_generate_v4()")
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        "userId", Uuid, ForeignKey("users.id", name=USER_FOREIGN_KEY), nullable=False
    )
    movie_id: Mapped[str] = mapped_column("movieId", VARCHAR, nullable=False)
    title: Mapped[str] = mapped_column(TEXT, nullable=False)
    poster_path: Mapped[Optional[str]] = mapped_column("posterPath", TEXT)

    user: Mapped[User] = relationship(back_populates="watchlist")
