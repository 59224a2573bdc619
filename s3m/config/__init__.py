"""
Application configuration using Pydantic settings.

Configuration comes from S3M_* environment variables with sensible defaults.
"""

from .settings import (
    DEFAULT_REGION,
    BucketSettings,
    ConfigValidationError,
    Settings,
    get_settings,
    load_settings,
)

__all__ = [
    "DEFAULT_REGION",
    "BucketSettings",
    "ConfigValidationError",
    "Settings",
    "get_settings",
    "load_settings",
]
