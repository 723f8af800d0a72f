"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """User registration request."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    name: str | None = Field(None, max_length=255)


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public user view (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Register/login response; the session travels in a cookie."""

    ok: bool = True
    user: UserResponse


class CurrentUserResponse(BaseModel):
    """Current user lookup; user is null when there is no session."""

    ok: bool = True
    user: UserResponse | None


class OkResponse(BaseModel):
    ok: bool = True
