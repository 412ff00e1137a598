"""
Application Configuration

Settings loaded from environment variables and an optional .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    PROJECT_NAME: str = Field(default="Learning Admin", description="Service display name")
    API_V1_PREFIX: str = Field(default="/api/v1", description="Prefix for versioned routes")
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./learning_admin.db",
        description="SQLAlchemy async database URL",
    )
    DATABASE_ECHO: bool = Field(default=False, description="Echo SQL statements")

    # Cloudinary
    CLOUDINARY_CLOUD_NAME: Optional[str] = Field(default=None, description="Cloudinary cloud name")
    CLOUDINARY_API_KEY: Optional[str] = Field(default=None, description="Cloudinary API key")
    CLOUDINARY_API_SECRET: Optional[str] = Field(default=None, description="Cloudinary API secret")
    CLOUDINARY_IMAGE_FOLDER: str = Field(default="courses", description="Folder for course images")
    CLOUDINARY_FILE_FOLDER: str = Field(default="course-contents", description="Folder for lesson files")

    # Admin gate
    ADMIN_USERNAME: str = Field(default="admin@example.com", description="Admin login name")
    ADMIN_PASSWORD: str = Field(default="change-me", description="Admin password")

    # Tutor Q&A table
    TUTOR_DATA_PATH: str = Field(
        default="resources/tutor_data.csv",
        description="CSV file with question/answer rows",
    )
    TUTOR_MATCH_THRESHOLD: float = Field(
        default=0.3,
        description="Minimum word-overlap similarity for an answer to be returned",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
