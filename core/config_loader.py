"""Application configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Certificate Admin API"
    ENV: str = "dev"  # dev | staging | prod
    DEBUG: bool = False

    # DB
    DATABASE_URL: str = "sqlite:///./certadmin.db"

    # JWT (tokens are issued elsewhere, we only verify them)
    SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = Field(default_factory=list)

    # Seeding
    SEED_ON_STARTUP: bool = True
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "change-me"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Certificates
    EXPIRING_SOON_DAYS: int = 30


settings = Settings()
