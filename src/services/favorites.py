"""Favorites store: per-user saved wallpapers."""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.errors import StorageError
from src.models.favorite import Favorite

logger = logging.getLogger(__name__)

METADATA_FIELDS = ("title", "url", "thumb", "dimension_x", "dimension_y")


class FavoriteAddStatus(StrEnum):
    """Outcome of add_if_absent."""

    CREATED = "created"
    ALREADY_EXISTED = "already_existed"


@dataclass
class AddResult:
    status: FavoriteAddStatus
    favorite: Favorite

    @property
    def created(self) -> bool:
        return self.status == FavoriteAddStatus.CREATED


class FavoritesStore:
    """Lists, adds and removes a user's favorite wallpapers."""

    def __init__(self, db: Session):
        self.db = db

    def list(self, user_id: int) -> list[Favorite]:
        """Return the user's favorites, newest first."""
        try:
            return (
                self.db.query(Favorite)
                .filter(Favorite.user_id == user_id)
                .order_by(Favorite.created_at.desc(), Favorite.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to list favorites for user {user_id}: {e}")
            raise StorageError() from e

    def get(self, user_id: int, image_id: str) -> Favorite | None:
        try:
            return (
                self.db.query(Favorite)
                .filter(Favorite.user_id == user_id, Favorite.image_id == image_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load favorite {image_id} for user {user_id}: {e}")
            raise StorageError() from e

    def add_if_absent(
        self, user_id: int, image_id: str, metadata: dict[str, Any] | None = None
    ) -> AddResult:
        """Save a favorite unless the user already has one for this image.

        An existing favorite is returned unchanged; new metadata is ignored.
        """
        existing = self.get(user_id, image_id)
        if existing is not None:
            return AddResult(FavoriteAddStatus.ALREADY_EXISTED, existing)

        metadata = metadata or {}
        favorite = Favorite(
            user_id=user_id,
            image_id=image_id,
            **{field: metadata.get(field) for field in METADATA_FIELDS},
        )
        try:
            self.db.add(favorite)
            self.db.commit()
        except IntegrityError as e:
            # Either a concurrent add won the unique (user_id, image_id) race,
            # or the insert broke some other constraint.
            self.db.rollback()
            existing = self.get(user_id, image_id)
            if existing is None:
                logger.error(f"Failed to add favorite {image_id} for user {user_id}: {e}")
                raise StorageError() from e
            return AddResult(FavoriteAddStatus.ALREADY_EXISTED, existing)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to add favorite {image_id} for user {user_id}: {e}")
            raise StorageError() from e

        self.db.refresh(favorite)
        return AddResult(FavoriteAddStatus.CREATED, favorite)

    def remove(self, user_id: int, image_id: str) -> int:
        """Delete a favorite; returns the number of rows removed (0 or 1)."""
        try:
            deleted = (
                self.db.query(Favorite)
                .filter(Favorite.user_id == user_id, Favorite.image_id == image_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to remove favorite {image_id} for user {user_id}: {e}")
            raise StorageError() from e
        return deleted
