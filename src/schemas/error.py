"""Error response schema shared by every endpoint."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Uniform error body."""

    ok: bool = False
    error: str
