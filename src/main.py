"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import auth, favorites
from src.config import Settings, get_settings
from src.database import Database
from src.errors import AppError
from src.schemas.error import ErrorResponse
from src.services.auth import build_password_context

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


def _validation_message(exc: RequestValidationError) -> str:
    """Summarize request validation errors as e.g. "image_id required"."""
    messages = []
    for error in exc.errors():
        field = str(error["loc"][-1]) if error["loc"] else "body"
        if error["type"] == "missing" or error["type"] == "string_too_short":
            messages.append(f"{field} required")
        else:
            messages.append(f"Invalid {field}")
    return ", ".join(messages) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure to the uniform {"ok": false, "error": ...} body."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Unhandled database error on {request.url.path}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its own database and password context."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    database = Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the database on startup and close it on shutdown."""
        database.open()
        yield
        database.close()

    app = FastAPI(
        title="Wallpaper Gallery API",
        description="Accounts, sessions and favorites for the wallpaper browser",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.pwd_context = build_password_context(settings.bcrypt_rounds)

    # The browser client runs on its own origin and sends the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router)
    app.include_router(favorites.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


def run(settings: Settings | None = None) -> None:
    """Serve the application on the configured host and port."""
    settings = settings or get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


app = create_app()


if __name__ == "__main__":
    run()
