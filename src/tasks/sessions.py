"""Celery tasks for session housekeeping."""

import logging

from src.celery_app import app as celery_app
from src.config import get_settings
from src.database import Database
from src.services.sessions import SessionManager

logger = logging.getLogger(__name__)


def purge_expired(database: Database) -> int:
    """Delete expired session rows using an already-open database."""
    db = database.session()
    try:
        return SessionManager(db).purge_expired()
    finally:
        db.close()


@celery_app.task
def purge_expired_sessions() -> dict:
    """Remove sessions whose expiry has passed.

    This task runs hourly via celery-beat. Sessions are also rejected and
    deleted lazily on lookup, so this only keeps the table from growing.

    Returns:
        dict with the number of purged sessions
    """
    database = Database(get_settings().database_url)
    database.open()
    try:
        purged = purge_expired(database)
    finally:
        database.close()

    logger.info(f"Purged {purged} expired sessions")
    return {"purged": purged}
