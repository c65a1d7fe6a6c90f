"""MovieHistory ORM model.

One row per movie recommendation shown to a user, together with the user's
reaction to it (rating, free-text feedback, watched / not interested flags).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    TEXT,
    VARCHAR,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Uuid,
    false,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieapp_db.entities.base import Base, TimestampMixin

if TYPE_CHECKING:
    from movieapp_db.entities.user import User

USER_FOREIGN_KEY = "FK_237347e79c31cc957ae1fb6fff1"


class MovieHistory(TimestampMixin, Base):
    """ORM model for the ``movie_history`` table."""

    __tablename__ = "movie_history"
    __table_args__ = (
        Index("idx_movie_history_user_movie", "userId", "movieId"),
        Index("idx_movie_history_user_shown", "userId", "shownAt"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4, server_default=text("uuid_generate_v4()")
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        "userId", Uuid, ForeignKey("users.id", name=USER_FOREIGN_KEY), nullable=False
    )
    movie_id: Mapped[str] = mapped_column("movieId", VARCHAR, nullable=False)  # TMDB id
    title: Mapped[str] = mapped_column(TEXT, nullable=False)
    english_title: Mapped[Optional[str]] = mapped_column("englishTitle", TEXT)
    poster_path: Mapped[Optional[str]] = mapped_column("posterPath", TEXT)
    trailer_key: Mapped[Optional[str]] = mapped_column("trailerKey", TEXT)
    user_rating: Mapped[Optional[int]] = mapped_column("userRating", Integer)
    user_feedback: Mapped[Optional[str]] = mapped_column("userFeedback", TEXT)
    shown_at: Mapped[datetime] = mapped_column(
        "shownAt", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    is_watched: Mapped[bool] = mapped_column(
        "isWatched", Boolean, nullable=False, default=False, server_default=false()
    )
    is_not_interested: Mapped[bool] = mapped_column(
        "isNotInterested", Boolean, nullable=False, default=False, server_default=false()
    )

    user: Mapped[User] = relationship(back_populates="movie_history")
