"""Favorites API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user_id, get_favorites_store, get_optional_user_id
from src.schemas.favorite import (
    FavoriteAddResponse,
    FavoriteCreate,
    FavoriteDeleteResponse,
    FavoriteListResponse,
    FavoriteResponse,
)
from src.services.favorites import FavoritesStore

router = APIRouter(prefix="/api/user/favorites", tags=["favorites"])


@router.get("", response_model=FavoriteListResponse)
def list_favorites(
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
    favorites: Annotated[FavoritesStore, Depends(get_favorites_store)],
):
    """Get the current user's favorites, newest first.

    Anonymous callers get an empty list rather than a 401.
    """
    if user_id is None:
        return FavoriteListResponse(favorites=[])

    return FavoriteListResponse(
        favorites=[FavoriteResponse.model_validate(fav) for fav in favorites.list(user_id)]
    )


@router.post("", response_model=FavoriteAddResponse)
def add_favorite(
    favorite_data: FavoriteCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    favorites: Annotated[FavoritesStore, Depends(get_favorites_store)],
):
    """Add a wallpaper to favorites. Re-adding returns the existing row unchanged."""
    result = favorites.add_if_absent(
        user_id, favorite_data.image_id, favorite_data.display_metadata()
    )
    return FavoriteAddResponse(
        favorite=FavoriteResponse.model_validate(result.favorite),
        created=result.created,
    )


@router.delete("/{image_id}", response_model=FavoriteDeleteResponse)
def remove_favorite(
    image_id: str,
    user_id: Annotated[int, Depends(get_current_user_id)],
    favorites: Annotated[FavoritesStore, Depends(get_favorites_store)],
):
    """Remove a wallpaper from favorites. Removing an unknown one deletes nothing."""
    return FavoriteDeleteResponse(deleted=favorites.remove(user_id, image_id))
