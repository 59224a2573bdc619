"""
Presigned URL generation.

Contains the presigning service and the key/expiry rules it applies.
"""

from .models import (
    MAX_EXPIRE_MINUTES,
    PresignedUrlResult,
    apply_prefix,
    clamp_expire_minutes,
    normalize_prefix,
)
from .service import PresignError, PresignService

__all__ = [
    "MAX_EXPIRE_MINUTES",
    "PresignedUrlResult",
    "apply_prefix",
    "clamp_expire_minutes",
    "normalize_prefix",
    "PresignError",
    "PresignService",
]
