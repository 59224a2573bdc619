"""
Object storage clients for presigning.

Builds the two boto3 clients the service needs from static credentials:
- a storage client, used once at startup to check that the bucket is reachable
- a presign client, used to sign upload/download URLs

Any S3-compatible endpoint works (AWS S3, MinIO, Cloudflare R2). Signing is
done locally by botocore; only the startup check touches the network.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import boto3
from botocore.config import Config

from ...config.settings import DEFAULT_REGION, Settings

logger = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the configured bucket cannot be reached at startup."""

    def __init__(self, bucket: str, cause: BaseException) -> None:
        self.bucket = bucket
        self.cause = cause
        super().__init__(f"Unable to access bucket '{bucket}': {cause}")


@dataclass(frozen=True)
class StorageConfig:
    """Connection settings shared by the storage and presign clients."""
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    endpoint_url: str
    region: str = DEFAULT_REGION

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        return cls(
            access_key_id=settings.access_key_id,
            secret_access_key=settings.secret_access_key,
            bucket_name=settings.bucket.name,
            endpoint_url=settings.bucket.endpoint,
            region=resolve_region(settings.bucket.region),
        )


@dataclass(frozen=True)
class StorageClients:
    """The storage client and presign client built for one process."""
    s3_client: Any
    presign_client: Any


def resolve_region(region: Optional[str]) -> str:
    """Return the configured region, or us-east-1 when unset or blank."""
    if region is None or not region.strip():
        return DEFAULT_REGION
    return region.strip()


def _boto_client(config: StorageConfig) -> Any:
    # Path-style addressing keeps the bucket out of the hostname, which
    # MinIO and most self-hosted endpoints require.
    boto_config = Config(
        signature_version="s3v4",
        s3={"addressing_style": "path"},
    )

    return boto3.client(
        "s3",
        endpoint_url=config.endpoint_url,
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        region_name=config.region,
        config=boto_config,
    )


def create_s3_client(config: StorageConfig) -> Any:
    """Create the storage client used for the bucket reachability check."""
    client = _boto_client(config)

    logger.info(
        "Initialized storage client",
        extra={
            "bucket": config.bucket_name,
            "endpoint": config.endpoint_url,
            "region": config.region,
        }
    )

    return client


def create_presign_client(config: StorageConfig) -> Any:
    """Create the client used to sign URLs (same credentials, region, endpoint)."""
    client = _boto_client(config)

    logger.debug(
        "Initialized presign client",
        extra={"endpoint": config.endpoint_url, "region": config.region}
    )

    return client


def verify_bucket_access(s3_client: Any, bucket_name: str) -> None:
    """
    HEAD the bucket once to fail fast on a wrong bucket, region or credentials.

    Raises:
        StartupError: wrapping whatever the client raised.
    """
    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except Exception as e:
        logger.error(
            "Bucket reachability check failed",
            extra={"bucket": bucket_name, "error": str(e)}
        )
        raise StartupError(bucket_name, e) from e

    logger.info("Bucket reachable", extra={"bucket": bucket_name})


def create_storage_clients(
    config: StorageConfig,
    s3_client: Optional[Any] = None,
    presign_client: Optional[Any] = None,
) -> StorageClients:
    """
    Build both clients and check that the bucket is reachable.

    Args:
        config: Connection settings
        s3_client: Caller-supplied storage client, used instead of building one
        presign_client: Caller-supplied presign client, used instead of building one

    Returns:
        StorageClients, only after the reachability check succeeded

    Raises:
        StartupError: if the bucket cannot be reached
    """
    if s3_client is None:
        s3_client = create_s3_client(config)
    if presign_client is None:
        presign_client = create_presign_client(config)

    verify_bucket_access(s3_client, config.bucket_name)

    return StorageClients(s3_client=s3_client, presign_client=presign_client)
