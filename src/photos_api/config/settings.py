# src/photos_api/config/settings.py
from typing import List, Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

SQLITE_URL_PREFIX = "sqlite:///"


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Values passed to the constructor
    2. Environment variables
    3. .env file (if exists)
    4. Default values in this class (lowest priority)

    Usage:
        from photos_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="photos-api",
        description="Application name"
    )

    host: str = Field(default="0.0.0.0", description="Interface uvicorn binds to")
    port: int = Field(default=8080, description="Port uvicorn listens on")

    # S3 Configuration
    bucket_name: str = Field(
        default="photos-api-images",
        validation_alias=AliasChoices("BUCKET_NAME", "S3_BUCKET_NAME", "bucket_name"),
        description="S3 bucket holding post images"
    )

    bucket_region: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices("BUCKET_REGION", "AWS_DEFAULT_REGION", "bucket_region"),
    )

    access_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ACCESS_KEY", "AWS_ACCESS_KEY_ID", "access_key"),
    )

    secret_access_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "SECRET_ACCESS_KEY", "AWS_SECRET_ACCESS_KEY", "secret_access_key"
        ),
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_ENDPOINT_URL", "aws_endpoint_url"),
        description="Override for S3-compatible stores such as a local moto server"
    )

    presigned_url_expiry_seconds: int = Field(
        default=3600,
        gt=0,
        description="Lifetime of the signed image URLs returned by GET /api/posts"
    )

    # Image Configuration
    max_image_width: int = Field(default=1080, gt=0)
    max_image_height: int = Field(default=1920, gt=0)

    # Database Configuration
    database_path: str = Field(
        default="photos.db",
        validation_alias=AliasChoices("DATABASE_PATH", "DATABASE_URL", "database_path"),
        description="SQLite file holding post metadata"
    )

    cors_allow_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed by the CORS middleware"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("database_path", mode="before")
    @classmethod
    def strip_sqlite_url_prefix(cls, v):
        """Accept DATABASE_URL=sqlite:///photos.db as well as a bare path; reject other URLs."""
        if isinstance(v, str) and v.startswith(SQLITE_URL_PREFIX):
            return v[len(SQLITE_URL_PREFIX):]
        if isinstance(v, str) and "://" in v:
            raise ValueError(f"Only sqlite:/// database URLs are supported, got: {v.split('://')[0]}://...")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    def get_environment_dict(self) -> dict:
        """Get configuration as a dictionary of environment variables.

        Credentials are masked so the result is safe to print.
        """
        return {
            'BUCKET_NAME': self.bucket_name,
            'BUCKET_REGION': self.bucket_region,
            'ACCESS_KEY': '***' if self.access_key else '',
            'SECRET_ACCESS_KEY': '***' if self.secret_access_key else '',
            'AWS_ENDPOINT_URL': self.aws_endpoint_url or '',
            'DATABASE_PATH': self.database_path,
            'PRESIGNED_URL_EXPIRY_SECONDS': str(self.presigned_url_expiry_seconds),
            'MAX_IMAGE_WIDTH': str(self.max_image_width),
            'MAX_IMAGE_HEIGHT': str(self.max_image_height),
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
