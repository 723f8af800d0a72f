"""SQLAlchemy models."""

from src.models.favorite import Favorite
from src.models.session import UserSession
from src.models.user import User

__all__ = [
    "User",
    "UserSession",
    "Favorite",
]
