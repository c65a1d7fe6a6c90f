"""Unit tests for the ORM entities."""

from sqlalchemy.orm import configure_mappers

from movieapp_db.entities import Base, MovieHistory, User, Watchlist


def test_entities_register_their_tables() -> None:
    assert set(Base.metadata.tables) == {"users", "movie_history", "watchlist"}
    assert User.__tablename__ == "users"
    assert MovieHistory.__tablename__ == "movie_history"
    assert Watchlist.__tablename__ == "watchlist"


def test_user_email_is_unique_and_required() -> None:
    email = User.__table__.c.email

    assert email.unique is True
    assert email.nullable is False


def test_movie_history_columns() -> None:
    table = MovieHistory.__table__

    assert {
        "id",
        "userId",
        "movieId",
        "title",
        "englishTitle",
        "posterPath",
        "trailerKey",
        "userRating",
        "userFeedback",
        "shownAt",
        "isWatched",
        "isNotInterested",
        "createdAt",
        "updatedAt",
    } == {column.name for column in table.columns}
    assert table.c["englishTitle"].nullable is True
    assert table.c["isWatched"].nullable is False
    assert {index.name for index in table.indexes} == {
        "idx_movie_history_user_movie",
        "idx_movie_history_user_shown",
    }


def test_attributes_map_to_camel_case_columns() -> None:
    assert MovieHistory.user_id.property.columns[0].name == "userId"
    assert MovieHistory.is_not_interested.property.columns[0].name == "isNotInterested"
    assert Watchlist.poster_path.property.columns[0].name == "posterPath"
    assert User.created_at.property.columns[0].name == "createdAt"


def test_user_foreign_keys() -> None:
    expected = {
        MovieHistory: "FK_237347e79c31cc957ae1fb6fff1",
        Watchlist: "FK_03878f3f177c680cc195900f80a",
    }
    for entity, name in expected.items():
        (fk,) = entity.__table__.c["userId"].foreign_keys
        assert fk.column is User.__table__.c.id
        assert fk.constraint.name == name


def test_relationships_are_configured() -> None:
    configure_mappers()

    assert User.movie_history.property.mapper.class_ is MovieHistory
    assert User.watchlist.property.mapper.class_ is Watchlist
    assert MovieHistory.user.property.mapper.class_ is User
    assert Watchlist.user.property.mapper.class_ is User
