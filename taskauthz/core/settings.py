from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database configuration
    DATABASE_URL: str | None = None

    # Bearer token verification
    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"

    # Audit trail configuration
    AUDIT_BACKEND: Literal["file", "database"] = "file"
    AUDIT_LOG_PATH: str = "./audit.log"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
