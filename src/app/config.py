"""Application configuration with structured settings groups."""
import logging
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


# =============================================================================
# Nested Settings Models
# =============================================================================


class PaginationSettings(BaseModel):
    """Listing defaults; requests may override page and page_size up to max_page_size."""

    default_page_size: int = 10
    max_page_size: int = 100


class S3Settings(BaseModel):
    """
    S3 storage settings.

    download_url_expiration: Lifetime of pre-signed download URLs in seconds.
    """

    bucket_name: str = "escritura-documents"
    endpoint_url: str | None = None  # For LocalStack: http://localhost:4566
    download_url_expiration: int = 3600


class AWSSettings(BaseModel):
    """AWS credentials and region settings."""

    region: str = "us-east-1"
    access_key_id: str | None = None
    secret_access_key: str | None = None


class AuthSettings(BaseModel):
    """
    Bearer token authentication.

    api_tokens maps each accepted token to the user ID it identifies.
    Example: AUTH__API_TOKENS='{"s3cr3t": "back-office"}'
    """

    api_tokens: dict[str, str] = Field(default_factory=dict)


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Application settings with nested configuration groups.

    Environment variables use double underscore as delimiter for nested values.
    Example: S3__BUCKET_NAME=documents, PAGINATION__DEFAULT_PAGE_SIZE=25
    """

    # Application metadata
    app_name: str = "Escritura API"
    app_version: str = "1.0.0"

    # Database
    database_url: str = "postgresql+asyncpg://localhost/escritura"
    database_echo: bool = False

    # Nested settings groups
    pagination: PaginationSettings = PaginationSettings()
    s3: S3Settings = S3Settings()
    aws: AWSSettings = AWSSettings()
    auth: AuthSettings = AuthSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
