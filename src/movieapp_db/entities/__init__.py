"""ORM entities managed by the movie app database.

Importing this package registers every entity on ``Base.metadata`` and makes
string-based relationship targets resolvable.
"""

from .base import Base
from .movie_history import MovieHistory
from .user import User
from .watchlist import Watchlist

__all__ = ["Base", "MovieHistory", "User", "Watchlist"]
