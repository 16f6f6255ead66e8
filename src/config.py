"""Configuration management for the application."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./trustme.db")

    # JWT
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=10080)  # 7 days

    # Uploads
    upload_dir: str = Field(default="uploads")
    uploads_url_prefix: str = Field(default="/uploads")
    max_file_size: int = Field(default=10 * 1024 * 1024)
    max_files_per_request: int = Field(default=10)
    allowed_file_types: Annotated[list[str], NoDecode] = Field(
        default=["image/jpeg", "image/jpg", "image/png"]
    )

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_origins: Annotated[list[str], NoDecode] = Field(default=["*"])

    @field_validator("allowed_file_types", "cors_origins", mode="before")
    @classmethod
    def split_comma_separated(cls, v):
        """Accept "a,b,c" from the environment as well as real lists."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("uploads_url_prefix", mode="after")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        return "/" + v.strip("/")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production" and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be changed in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance, used only by process entry points."""
    return Settings()
