"""FastAPI dependencies for authentication and the per-request services."""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import Settings
from src.database import get_db
from src.errors import AuthError
from src.services.auth import CredentialStore
from src.services.favorites import FavoritesStore
from src.services.sessions import SessionManager, unsign_token


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_password_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


def get_credential_store(
    db: Annotated[Session, Depends(get_db)],
    pwd_context: Annotated[CryptContext, Depends(get_password_context)],
) -> CredentialStore:
    """Get credential store bound to the request's database session."""
    return CredentialStore(db, pwd_context)


def get_session_manager(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SessionManager:
    """Get session manager bound to the request's database session."""
    return SessionManager(db, max_age=timedelta(days=settings.session_max_age_days))


def get_favorites_store(
    db: Annotated[Session, Depends(get_db)],
) -> FavoritesStore:
    """Get favorites store bound to the request's database session."""
    return FavoritesStore(db)


def get_session_token(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> str | None:
    """Extract the session token from the signed session cookie, if any."""
    cookie = request.cookies.get(settings.session_cookie_name)
    return unsign_token(cookie, settings.session_secret)


def get_optional_user_id(
    token: Annotated[str | None, Depends(get_session_token)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
) -> int | None:
    """Resolve the current user id, or None for anonymous requests."""
    return sessions.resolve(token)


def get_current_user_id(
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
) -> int:
    """Resolve the current user id; anonymous requests fail with 401."""
    if user_id is None:
        raise AuthError("Not authenticated")
    return user_id
