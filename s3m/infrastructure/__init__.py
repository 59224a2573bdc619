"""
Infrastructure layer - external service integrations.

- storage: boto3 clients for S3-compatible object storage
"""
