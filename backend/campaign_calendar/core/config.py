from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    PROJECT_NAME: str = "Campaign Calendar API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"
    # Keep the database at the project root so every entry point shares one file
    DATABASE_URL: str = "sqlite:///../calendar.db"
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Calendar day used for "new announcement" checks
    DISPLAY_TIMEZONE: str = "Europe/Istanbul"

    # Tabular import/export
    EXPORT_FILENAME_PREFIX: str = "kampanya_takvimi_export"
    MAX_IMPORT_BYTES: int = 1_000_000
    IMPORT_RATE_LIMIT: str = "30/minute"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Use the first X-Forwarded-For entry as caller address (behind a proxy only)
    TRUST_FORWARDED_FOR: bool = False

    # Avatar storage
    UPLOAD_DIR: str = "uploads"
    MAX_AVATAR_SIZE: int = 5 * 1024 * 1024

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: List[str] | str) -> List[str]:
        """Allow both comma-separated strings and list inputs."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
