"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from src.api.dependencies import (
    get_app_settings,
    get_credential_store,
    get_optional_user_id,
    get_session_manager,
    get_session_token,
)
from src.config import Settings
from src.errors import StorageError
from src.models.user import User
from src.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    OkResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.error import ErrorResponse
from src.services.auth import CredentialStore
from src.services.sessions import SessionManager, sign_token

router = APIRouter(prefix="/api/auth", tags=["auth"])


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the signed session cookie to a response."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_token(token, settings.session_secret),
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def _start_session(
    user: User, response: Response, sessions: SessionManager, settings: Settings
) -> AuthResponse:
    token = sessions.create(user.id)
    set_session_cookie(response, token, settings)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/register", response_model=AuthResponse)
def register(
    user_data: UserRegister,
    response: Response,
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Register a new user and log them in."""
    user = credentials.register(user_data.email, user_data.password, user_data.name)
    return _start_session(user, response, sessions, settings)


@router.post("/login", response_model=AuthResponse)
def login(
    login_data: UserLogin,
    response: Response,
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Login with email and password."""
    user = credentials.authenticate(login_data.email, login_data.password)
    return _start_session(user, response, sessions, settings)


@router.post("/logout", response_model=OkResponse)
def logout(
    response: Response,
    token: Annotated[str | None, Depends(get_session_token)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Destroy the current session, if any. The cookie is cleared either way."""
    try:
        sessions.destroy(token)
    except StorageError as e:
        failed = JSONResponse(
            status_code=e.status_code,
            content=ErrorResponse(error=e.message).model_dump(),
        )
        clear_session_cookie(failed, settings)
        return failed

    clear_session_cookie(response, settings)
    return OkResponse()


@router.get("/me", response_model=CurrentUserResponse)
def get_me(
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """Get current user information, or null when not logged in."""
    if user_id is None:
        return CurrentUserResponse(user=None)

    user = credentials.find_by_id(user_id)
    if user is None:
        return CurrentUserResponse(user=None)
    return CurrentUserResponse(user=UserResponse.model_validate(user))
