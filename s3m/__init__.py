"""
s3m - presigned upload/download URLs for S3-compatible object storage.

This package contains:
- core: Presigning service and key/expiry rules
- infrastructure: boto3 client construction and the startup bucket check
- api: Optional FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
