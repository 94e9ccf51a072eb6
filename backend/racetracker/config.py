"""
Race Tracker configuration.

Every setting can come from the environment or a `.env` file
(`DATABASE_URL`, `SECRET_KEY`, `ADMIN_EMAIL`, ...), names case-insensitive.
"""

from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

ONE_WEEK = 7 * 24 * 60 * 60


class Settings(BaseSettings):
    """Runtime settings for the API and the migration environment."""

    # === Core ===
    debug: bool = Field(default=False, description="Expose /docs and /redoc")
    log_level: str = Field(default="INFO")

    # === Storage ===
    database_url: str = Field(
        default="sqlite:///./racetracker.db",
        description="Driver-less URL; the async driver is chosen from the scheme"
    )

    # === HTTP ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
    )

    # === Bearer tokens ===
    secret_key: str = Field(default="dev-secret-change-me", description="Token signing key")
    token_salt: str = Field(default="racetracker-auth")
    token_max_age_seconds: int = Field(default=ONE_WEEK, gt=0)

    # === Bootstrap admin (created or promoted at startup) ===
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    admin_name: str = "Administrator"

    @property
    def admin_configured(self) -> bool:
        return bool(self.admin_email and self.admin_password)

    @field_validator("database_url")
    @classmethod
    def normalize_postgres_scheme(cls, v: str) -> str:
        """Hosted Postgres often hands out postgres://; SQLAlchemy wants postgresql://."""
        if v.startswith("postgres://"):
            return "postgresql://" + v[len("postgres://"):]
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v):
        """Accept "https://a.app, https://b.app" as well as a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
