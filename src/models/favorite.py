"""Favorite wallpaper model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import CreatedAtMixin


class Favorite(Base, CreatedAtMixin):
    """A wallpaper saved by a user, with display metadata copied from the search API."""

    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("user_id", "image_id", name="uq_favorites_user_image"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_id = Column(Text, nullable=False)  # external wallpaper id, not validated
    title = Column(String(255), nullable=True)
    url = Column(Text, nullable=True)
    thumb = Column(Text, nullable=True)
    dimension_x = Column(Integer, nullable=True)
    dimension_y = Column(Integer, nullable=True)

    # Relationships
    user = relationship("User", back_populates="favorites")
