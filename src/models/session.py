"""Server-side login session model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import CreatedAtMixin


class UserSession(Base, CreatedAtMixin):
    """An opaque session token bound to one user until it expires."""

    __tablename__ = "sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="sessions")
