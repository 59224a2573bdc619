"""
FastAPI dependency injection.

The application factory builds the settings, clients and presigning service
once and stores them on ``app.state``; these dependencies hand them to route
handlers. Tests can replace any of them through ``app.dependency_overrides``.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from ..config.settings import Settings
from ..core.presign import PresignService
from ..infrastructure.storage.client import StorageClients

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Provide the settings the application was created with."""
    return request.app.state.settings


def get_presign_service(request: Request) -> PresignService:
    """Provide the shared presigning service."""
    return request.app.state.presign_service


def get_storage_clients(request: Request) -> StorageClients:
    """Provide the shared storage and presign clients."""
    return request.app.state.storage_clients


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

SettingsDep = Annotated[Settings, Depends(get_app_settings)]
PresignServiceDep = Annotated[PresignService, Depends(get_presign_service)]
StorageClientsDep = Annotated[StorageClients, Depends(get_storage_clients)]
