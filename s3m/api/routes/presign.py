"""
Presigned URL endpoints.

Mounted under /api/s3m, and only when S3M_AUTOENDPOINT=true. Both routes are
GET-only and return the signed URL with the key it was signed for.

Example:
    GET /api/s3m/upload?key=myfile.png&expireMinutes=5
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from ...core.presign import MAX_EXPIRE_MINUTES
from ..dependencies import PresignServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class SignedUrlResponse(BaseModel):
    """A presigned URL and the object key it grants access to."""
    url: str = Field(description="Presigned URL")
    key: str = Field(description="Object key the URL was signed for")


KeyParam = Annotated[
    str,
    Query(min_length=1, description="Object key in the bucket"),
]
ExpireMinutesParam = Annotated[
    int,
    Query(
        alias="expireMinutes",
        le=MAX_EXPIRE_MINUTES,
        description="Link validity in minutes (values below 1 are raised to 1)",
    ),
]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/upload",
    response_model=SignedUrlResponse,
    status_code=status.HTTP_200_OK,
    summary="Presigned upload URL",
    description="Generate a URL that allows uploading the object with HTTP PUT",
)
async def upload(
    service: PresignServiceDep,
    key: KeyParam,
    expire_minutes: ExpireMinutesParam = 1,
) -> SignedUrlResponse:
    result = service.presign_upload(key, expire_minutes, force_prefix=True)

    logger.info(
        "Issued upload URL",
        extra={"key": result.key, "expire_minutes": expire_minutes}
    )

    return SignedUrlResponse(url=result.url, key=result.key)


@router.get(
    "/download",
    response_model=SignedUrlResponse,
    status_code=status.HTTP_200_OK,
    summary="Presigned download URL",
    description="Generate a URL that allows downloading the object with HTTP GET",
)
async def download(
    service: PresignServiceDep,
    key: KeyParam,
    expire_minutes: ExpireMinutesParam = 1,
) -> SignedUrlResponse:
    result = service.presign_download(key, expire_minutes, force_prefix=True)

    logger.info(
        "Issued download URL",
        extra={"key": result.key, "expire_minutes": expire_minutes}
    )

    return SignedUrlResponse(url=result.url, key=result.key)
