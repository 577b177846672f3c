"""
Configuration management using Pydantic settings.
Handles database URL, JWT secrets, upload limits and environment variables.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache
import os


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file."""

    # Application configuration
    app_name: str = "Urban Listings API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database configuration
    database_url: str = ""
    db_host: str = "localhost"
    db_port: int = 5432
    db_username: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "urban_listings"

    # JWT configuration
    jwt_secret_key: str = "dev-secret"
    jwt_refresh_secret_key: str = "dev-refresh-secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    # Password hashing work factor
    bcrypt_rounds: int = 12

    # File upload configuration
    upload_dir: str = "./uploads"
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    max_property_images: int = 10
    max_area_images: int = 5

    # API configuration
    api_prefix: str = "/api"
    cors_origin: str = "http://localhost:5173"

    # Pagination defaults
    default_page_size: int = 20
    max_page_size: int = 100

    # Outbound mail (credentials only, nothing is sent)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 5000

    @model_validator(mode="after")
    def build_database_url(self):
        """Build database URL from components if not provided directly."""
        if not self.database_url:
            self.database_url = (
                f"postgresql+asyncpg://{self.db_username}:{self.db_password}"
                f"@{self.db_host}:{self.db_port}/{self.db_name}"
            )
        elif self.database_url.startswith("postgresql://"):
            # Ensure async driver is used
            self.database_url = self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self

    @field_validator("jwt_secret_key", "jwt_refresh_secret_key")
    @classmethod
    def validate_jwt_secrets(cls, v):
        """JWT secrets must be present."""
        if not v or not v.strip():
            raise ValueError("JWT secrets cannot be empty")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        """bcrypt only accepts work factors between 4 and 31."""
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("upload_dir")
    @classmethod
    def create_upload_directories(cls, v):
        """Ensure upload directories exist."""
        if v:
            for folder in ("properties", "areas"):
                os.makedirs(os.path.join(v, folder), exist_ok=True)
        return v

    @property
    def cors_origins(self) -> List[str]:
        """CORS_ORIGIN may hold a comma separated list."""
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
