"""
Composition root.

Builds the components in dependency order: validated settings, then the
storage/presign clients (with the bucket reachability check), then the
presigning service. Callers may hand in their own clients or service; those
replace the ones that would otherwise be built.

Both the FastAPI application and the command-line script start here.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .config.settings import Settings, load_settings
from .core.presign import PresignService
from .infrastructure.storage.client import (
    StorageClients,
    StorageConfig,
    create_storage_clients,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Components:
    """Everything a process needs to serve presign requests."""
    settings: Settings
    clients: StorageClients
    service: PresignService


def build_presign_service(settings: Settings, clients: StorageClients) -> PresignService:
    """Create the service for the configured bucket and prefix."""
    return PresignService(
        presign_client=clients.presign_client,
        bucket=settings.bucket.name,
        prefix=settings.bucket.prefix,
    )


def bootstrap(
    settings: Optional[Settings] = None,
    s3_client: Optional[Any] = None,
    presign_client: Optional[Any] = None,
    service: Optional[PresignService] = None,
) -> Components:
    """
    Validate configuration, build clients and build the service.

    Raises:
        ConfigValidationError: if required settings are blank (no network call is made)
        StartupError: if the bucket is not reachable
    """
    if settings is None:
        settings = load_settings()
    else:
        settings.ensure_valid()

    config = StorageConfig.from_settings(settings)
    clients = create_storage_clients(
        config,
        s3_client=s3_client,
        presign_client=presign_client,
    )

    if service is None:
        service = build_presign_service(settings, clients)

    logger.info(
        "Presign service ready",
        extra={
            "bucket": config.bucket_name,
            "region": config.region,
            "prefix": service.prefix,
        }
    )

    return Components(settings=settings, clients=clients, service=service)
