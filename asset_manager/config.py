# asset_manager/config.py
"""
Centralized configuration with validation.

Uses pydantic-settings to load and validate all environment variables at startup.
Fail fast with clear error messages if required config is missing.
"""

from functools import lru_cache
from typing import ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = Field(
        ...,
        description="Database URL for the image metadata index",
    )

    # Storage
    STORAGE_PROVIDER: str = Field(
        default="s3",
        description="Storage backend: s3, local, mock",
    )
    S3_BUCKET: str | None = Field(
        default=None,
        description="Bucket holding uploaded images (required for s3)",
    )
    S3_ENDPOINT_URL: str | None = Field(
        default=None,
        description="Custom endpoint for S3-compatible services",
    )
    S3_REGION: str = Field(
        default="us-east-1",
        description="AWS region for S3 and SQS",
    )
    LOCAL_STORAGE_PATH: str = Field(
        default="./storage",
        description="Path for local storage backend",
    )
    MOCK_CONTAINER_NAME: str = Field(
        default="mock",
        description="Container name reported by the mock backend",
    )

    # Thumbnail processing queue
    PROCESSING_QUEUE_ENABLED: bool = Field(
        default=False,
        description="Send a processing message to the queue after each upload",
    )
    PROCESSING_QUEUE_NAME: str = Field(
        default="image-processing",
        description="SQS queue consumed by the thumbnail worker",
    )
    SQS_ENDPOINT_URL: str | None = Field(
        default=None,
        description="Custom endpoint for SQS-compatible services",
    )

    # Application
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level",
    )
    LOG_JSON: bool = Field(
        default=True,
        description="Emit single-line JSON logs (disable for local development)",
    )

    STORAGE_PROVIDERS: ClassVar[set[str]] = {"s3", "local", "mock"}

    @field_validator("STORAGE_PROVIDER")
    @classmethod
    def validate_storage_provider(cls, v: str) -> str:
        name = v.lower().strip()
        if name not in cls.STORAGE_PROVIDERS:
            raise ValueError(
                f"Unknown storage provider: {v}. Available: {', '.join(sorted(cls.STORAGE_PROVIDERS))}"
            )
        return name

    @field_validator("DATABASE_URL")
    @classmethod
    def fix_database_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but SQLAlchemy needs postgresql+psycopg2://"""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+psycopg2://", 1)
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings. Call at startup to validate config."""
    return Settings()
