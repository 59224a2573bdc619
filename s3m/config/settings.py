"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables (prefix ``S3M_``) and an
optional ``.env`` file. Nested bucket settings use ``__`` as the delimiter,
so ``bucket.name`` is read from ``S3M_BUCKET__NAME``.

Required fields default to empty strings so that a missing value is reported
together with every other missing value by ``validate_required_fields``
instead of failing on the first one.
"""

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_REGION = "us-east-1"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigValidationError(ValueError):
    """Raised when required configuration fields are blank, missing or invalid."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = missing_fields
        super().__init__(
            f"Missing or invalid configuration: {', '.join(missing_fields)}"
        )


class BucketSettings(BaseModel):
    """Settings for the target bucket (``S3M_BUCKET__*``)."""

    name: str = Field(
        default="",
        description="Name of the target bucket"
    )
    endpoint: str = Field(
        default="",
        description="S3-compatible endpoint URL, e.g. AWS S3, MinIO or Cloudflare R2"
    )
    region: Optional[str] = Field(
        default=None,
        description="Signing region. Defaults to us-east-1; use 'auto' for Cloudflare R2."
    )
    prefix: str = Field(
        default="",
        description="Key prefix applied when a caller asks for prefixing, e.g. /direct/"
    )


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    """

    # API Configuration
    api_title: str = "s3m presigned URL service"
    api_version: str = "v1"

    # Storage credentials
    access_key_id: str = Field(
        default="",
        description="Static access key ID used for the storage and presign clients"
    )
    secret_access_key: str = Field(
        default="",
        description="Static secret access key used for the storage and presign clients"
    )

    bucket: BucketSettings = Field(default_factory=BucketSettings)

    autoendpoint: bool = Field(
        default=False,
        description="Register the built-in /api/s3m HTTP endpoints"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_prefix="S3M_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def validate_required_fields(self) -> list[str]:
        """
        Validate that required fields are non-blank and the log level is known.

        Returns the environment variable names of every bad field, in a
        stable order, so the operator sees the whole list at once.
        """
        missing = []

        if not self.access_key_id.strip():
            missing.append("S3M_ACCESS_KEY_ID")
        if not self.secret_access_key.strip():
            missing.append("S3M_SECRET_ACCESS_KEY")
        if not self.bucket.name.strip():
            missing.append("S3M_BUCKET__NAME")
        if not self.bucket.endpoint.strip():
            missing.append("S3M_BUCKET__ENDPOINT")
        if self.log_level.strip().upper() not in LOG_LEVELS:
            missing.append("S3M_LOG_LEVEL")

        return missing

    def ensure_valid(self) -> "Settings":
        """Raise ConfigValidationError if any required field is blank or invalid."""
        missing = self.validate_required_fields()
        if missing:
            raise ConfigValidationError(missing)
        return self


def load_settings() -> Settings:
    """
    Read settings from the environment and validate them.

    Raises:
        ConfigValidationError: if any required field is blank.
    """
    return Settings().ensure_valid()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once per process. For tests, call
    get_settings.cache_clear() to reset.
    """
    return Settings()
