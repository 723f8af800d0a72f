"""Session manager: server-side session tokens and the signed session cookie.

The cookie carries the opaque token signed with the session secret (HS256 JWS),
so a tampered cookie is rejected before touching the database. The token itself
only means something while its row exists in the sessions table, which is what
makes logout and expiry effective on the server side.
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from jose import JWSError, jws
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.errors import StorageError
from src.models.session import UserSession

logger = logging.getLogger(__name__)

SESSION_MAX_AGE = timedelta(days=7)
_ALGORITHM = "HS256"
_TOKEN_BYTES = 32


def sign_token(token: str, secret: str) -> str:
    """Return the cookie value for a session token."""
    return jws.sign(token.encode("utf-8"), secret, algorithm=_ALGORITHM)


def unsign_token(value: str | None, secret: str) -> str | None:
    """Return the session token inside a cookie value, or None if it was tampered with."""
    if not value:
        return None
    try:
        payload = jws.verify(value, secret, algorithms=[_ALGORITHM])
    except JWSError:
        return None
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SessionManager:
    """Issues, resolves and destroys login sessions."""

    def __init__(self, db: Session, max_age: timedelta = SESSION_MAX_AGE):
        self.db = db
        self.max_age = max_age

    def create(self, user_id: int) -> str:
        """Start a session for a user and return its opaque token."""
        token = secrets.token_urlsafe(_TOKEN_BYTES)
        record = UserSession(
            token=token,
            user_id=user_id,
            expires_at=datetime.now(UTC) + self.max_age,
        )
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create session for user {user_id}: {e}")
            raise StorageError() from e
        return token

    def resolve(self, token: str | None) -> int | None:
        """Return the user id for a live session token, or None.

        Expired sessions are deleted as they are found.
        """
        if not token or len(token) > 64:
            return None
        try:
            record = self.db.get(UserSession, token)
            if record is None:
                return None
            if _as_utc(record.expires_at) <= datetime.now(UTC):
                self.db.delete(record)
                self.db.commit()
                return None
            return record.user_id
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Session lookup failed: {e}")
            raise StorageError() from e

    def destroy(self, token: str | None) -> None:
        """End a session. Unknown or already-destroyed tokens are ignored."""
        if not token:
            return
        try:
            deleted = self.db.query(UserSession).filter(UserSession.token == token).delete(
                synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to destroy session: {e}")
            raise StorageError("Failed to destroy session") from e
        if deleted:
            logger.info("Session destroyed")

    def purge_expired(self) -> int:
        """Delete every expired session row and return how many were removed."""
        try:
            deleted = (
                self.db.query(UserSession)
                .filter(UserSession.expires_at <= datetime.now(UTC))
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to purge expired sessions: {e}")
            raise StorageError() from e
        return deleted
