"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SESSION_SECRET = "dev_secret"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./wallpaper.db")

    # Redis (celery broker for the session purge job)
    redis_url: str = Field(default="redis://localhost:6379/0")

    # HTTP
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=4000)
    frontend_origin: str = Field(default="http://localhost:5173")

    # Sessions
    session_secret: str = Field(default=DEFAULT_SESSION_SECRET)
    session_cookie_name: str = Field(default="wallpaper.sid")
    session_cookie_secure: bool = Field(default=False)
    session_max_age_days: int = Field(default=7)

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.session_secret == DEFAULT_SESSION_SECRET:
                raise ValueError("SESSION_SECRET must be changed in production")
            if not self.session_cookie_secure:
                raise ValueError("SESSION_COOKIE_SECURE must be enabled in production")
        return self

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_max_age_days * 24 * 3600


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
