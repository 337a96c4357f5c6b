"""
Environment configuration for the housing service.

Uses Pydantic's settings management to read environment variables
(and an optional ``.env`` file) with type validation and defaults.
"""

import json
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Application configuration
    APP_NAME: str = "Campus Housing Service"
    API_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/housing"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8003
    # Comma separated list or JSON array
    CORS_ORIGINS: str = "http://localhost:4200"

    # Database configuration - DATABASE_URL wins over the individual fields
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "housing"
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    DB_ECHO: bool = False

    # Room assignment transactions
    LOCK_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)
    TX_MAX_ATTEMPTS: int = Field(default=3, ge=1)
    TX_RETRY_BACKOFF_SECONDS: float = Field(default=0.05, ge=0)

    # Demo data for non-production environments
    SEED_DEMO_DATA: bool = True

    # Dining service proxy
    DINING_BASE_URL: Optional[str] = None
    DINING_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "colored"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        valid_envs = ["development", "staging", "production", "testing"]
        if v not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = ["text", "json", "colored"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of {valid_formats}")
        return v.lower()

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from a JSON array or a comma separated string"""
        value = self.CORS_ORIGINS.strip()
        if value.startswith("[") and value.endswith("]"):
            try:
                return [str(origin) for origin in json.loads(value)]
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    def get_database_url(self) -> str:
        """Construct database URL from components or use provided URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    def dining_base_urls(self) -> List[str]:
        """Candidate base URLs for the dining service, tried in order"""
        candidates = []
        if self.DINING_BASE_URL:
            candidates.append(self.DINING_BASE_URL.rstrip("/"))
        candidates.extend([
            "http://localhost:8001",
            "http://dining-server:8001",
            "http://host.docker.internal:8001",
        ])
        return candidates

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
