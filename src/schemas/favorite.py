"""Favorite schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FavoriteCreate(BaseModel):
    """Add a wallpaper to the current user's favorites."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    image_id: str = Field(..., min_length=1)
    title: str | None = Field(None, max_length=255)
    url: str | None = Field(None, max_length=2048)
    thumb: str | None = Field(None, max_length=2048)
    dimension_x: int | None = Field(None, ge=0)
    dimension_y: int | None = Field(None, ge=0)

    def display_metadata(self) -> dict:
        """Display metadata stored alongside the image id."""
        return self.model_dump(exclude={"image_id"})


class FavoriteResponse(BaseModel):
    """Favorite response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    image_id: str
    title: str | None
    url: str | None
    thumb: str | None
    dimension_x: int | None
    dimension_y: int | None
    created_at: datetime


class FavoriteListResponse(BaseModel):
    ok: bool = True
    favorites: list[FavoriteResponse]


class FavoriteAddResponse(BaseModel):
    """Add response; created is false when the favorite already existed."""

    ok: bool = True
    favorite: FavoriteResponse
    created: bool


class FavoriteDeleteResponse(BaseModel):
    ok: bool = True
    deleted: int
