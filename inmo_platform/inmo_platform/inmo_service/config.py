"""
Configuration management for the listing service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Listing service configuration loaded from environment variables"""

    # Service Configuration
    SERVICE_NAME: str = "inmo-backend"
    SERVICE_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./inmo.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False

    # Password Hashing
    PASSWORD_HASH_SCHEME: str = "pbkdf2_sha256"
    PASSWORD_HASH_ROUNDS: int = 29000
    PASSWORD_MIN_LENGTH: int = 8
    # bcrypt truncates input past 72 bytes
    PASSWORD_MAX_BYTES: int = 72

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


def get_settings() -> Settings:
    """Build a fresh settings object from the current environment."""
    return Settings()
