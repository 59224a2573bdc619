"""
Presigning service.

A thin façade over an SDK presign client: it clamps the expiry, optionally
puts the key under the configured prefix, and asks the client to sign a
put_object (upload) or get_object (download) request for the bucket.

The service holds no mutable state, so one instance is shared by every
request. The presign client is anything with boto3's
``generate_presigned_url(ClientMethod, Params=..., ExpiresIn=...)``.
"""

import logging
from typing import Any, Optional

from .models import (
    MAX_EXPIRE_MINUTES,
    PresignedUrlResult,
    apply_prefix,
    clamp_expire_minutes,
    normalize_prefix,
)

logger = logging.getLogger(__name__)


class PresignError(Exception):
    """Raised when a URL cannot be signed."""
    pass


class PresignService:
    """
    Generates presigned upload and download URLs for one bucket.

    Prefixing is opt-in per call through ``force_prefix``; without a
    configured prefix the flag has no effect.
    """

    def __init__(
        self,
        presign_client: Any,
        bucket: str,
        prefix: Optional[str] = None,
    ) -> None:
        if presign_client is None:
            raise ValueError("presign_client is required")
        if not bucket:
            raise ValueError("bucket is required")

        self._client = presign_client
        self._bucket = bucket
        self._prefix = normalize_prefix(prefix)

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def prefix(self) -> str:
        """The normalized prefix, or "" when none is configured."""
        return self._prefix

    def resolved_key(self, key: str, force_prefix: bool = False) -> str:
        """Return the object key that will actually be signed."""
        if force_prefix and self._prefix:
            return apply_prefix(self._prefix, key)
        return key

    def generate_upload_url(
        self,
        key: str,
        expire_minutes: int,
        force_prefix: bool = False,
    ) -> str:
        """Return a URL that allows an HTTP PUT of ``key`` for ``expire_minutes``."""
        return self.presign_upload(key, expire_minutes, force_prefix).url

    def generate_download_url(
        self,
        key: str,
        expire_minutes: int,
        force_prefix: bool = False,
    ) -> str:
        """Return a URL that allows an HTTP GET of ``key`` for ``expire_minutes``."""
        return self.presign_download(key, expire_minutes, force_prefix).url

    def presign_upload(
        self,
        key: str,
        expire_minutes: int,
        force_prefix: bool = False,
    ) -> PresignedUrlResult:
        """Like generate_upload_url, but also reports the resolved key."""
        return self._presign("put_object", key, expire_minutes, force_prefix)

    def presign_download(
        self,
        key: str,
        expire_minutes: int,
        force_prefix: bool = False,
    ) -> PresignedUrlResult:
        """Like generate_download_url, but also reports the resolved key."""
        return self._presign("get_object", key, expire_minutes, force_prefix)

    def _presign(
        self,
        client_method: str,
        key: str,
        expire_minutes: int,
        force_prefix: bool,
    ) -> PresignedUrlResult:
        minutes = clamp_expire_minutes(expire_minutes)
        if minutes > MAX_EXPIRE_MINUTES:
            raise PresignError(
                f"Expiry of {minutes} minutes exceeds the maximum of "
                f"{MAX_EXPIRE_MINUTES} minutes"
            )

        resolved = self.resolved_key(key, force_prefix)

        try:
            url = self._client.generate_presigned_url(
                client_method,
                Params={
                    "Bucket": self._bucket,
                    "Key": resolved,
                },
                ExpiresIn=minutes * 60,
            )
        except Exception as e:
            logger.error(
                "Failed to generate presigned URL",
                extra={
                    "operation": client_method,
                    "key": resolved,
                    "error": str(e),
                }
            )
            raise PresignError(f"Presigned URL generation failed: {e}") from e

        logger.debug(
            "Generated presigned URL",
            extra={
                "operation": client_method,
                "key": resolved,
                "expire_minutes": minutes,
            }
        )

        return PresignedUrlResult(url=url, key=resolved)
