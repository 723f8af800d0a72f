"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(UTC)


class CreatedAtMixin:
    """Mixin to add a created_at timestamp column.

    The Python-side default keeps sub-second precision so newest-first ordering
    is stable on SQLite, whose CURRENT_TIMESTAMP only has whole seconds.
    """

    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
