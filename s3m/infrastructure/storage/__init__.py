"""
Object storage integration for presigning.

Supports AWS S3 and S3-compatible stores (MinIO, Cloudflare R2).
"""

from .client import (
    StartupError,
    StorageClients,
    StorageConfig,
    create_presign_client,
    create_s3_client,
    create_storage_clients,
    resolve_region,
    verify_bucket_access,
)

__all__ = [
    "StartupError",
    "StorageClients",
    "StorageConfig",
    "create_presign_client",
    "create_s3_client",
    "create_storage_clients",
    "resolve_region",
    "verify_bucket_access",
]
