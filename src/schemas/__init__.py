"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    OkResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.error import ErrorResponse
from src.schemas.favorite import (
    FavoriteAddResponse,
    FavoriteCreate,
    FavoriteDeleteResponse,
    FavoriteListResponse,
    FavoriteResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "CurrentUserResponse",
    "OkResponse",
    "ErrorResponse",
    "FavoriteCreate",
    "FavoriteResponse",
    "FavoriteListResponse",
    "FavoriteAddResponse",
    "FavoriteDeleteResponse",
]
