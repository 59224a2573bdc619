"""
Shared fixtures.

Presigning is a local computation in botocore, so tests use real boto3
clients with fake credentials. The only network call (HEAD bucket) is
answered by botocore's Stubber.
"""

import pytest
from botocore.stub import Stubber

from s3m.config.settings import BucketSettings, Settings
from s3m.infrastructure.storage.client import (
    StorageConfig,
    create_presign_client,
    create_s3_client,
)

TEST_ENDPOINT = "https://s3.example.test"
TEST_BUCKET = "test-bucket"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's S3M_* variables out of the tests."""
    for name in (
        "S3M_ACCESS_KEY_ID",
        "S3M_SECRET_ACCESS_KEY",
        "S3M_BUCKET__NAME",
        "S3M_BUCKET__ENDPOINT",
        "S3M_BUCKET__REGION",
        "S3M_BUCKET__PREFIX",
        "S3M_AUTOENDPOINT",
        "S3M_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings():
    """Build Settings directly, ignoring any .env file."""
    def _make(**overrides):
        bucket = {
            "name": TEST_BUCKET,
            "endpoint": TEST_ENDPOINT,
            "region": "us-east-1",
        }
        bucket.update(overrides.pop("bucket", {}))
        values = {
            "access_key_id": "AKIDEXAMPLE",
            "secret_access_key": "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
            "bucket": BucketSettings(**bucket),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def storage_config():
    return StorageConfig(
        access_key_id="AKIDEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
        bucket_name=TEST_BUCKET,
        endpoint_url=TEST_ENDPOINT,
        region="us-east-1",
    )


@pytest.fixture
def presign_client(storage_config):
    return create_presign_client(storage_config)


@pytest.fixture
def stubbed_s3_client(storage_config):
    """
    Storage client whose HEAD bucket calls are answered by a Stubber.

    Returns (client, stubber); queue responses before use.
    """
    client = create_s3_client(storage_config)
    stubber = Stubber(client)
    stubber.activate()
    yield client, stubber
    stubber.deactivate()


@pytest.fixture
def reachable_s3_client(stubbed_s3_client):
    """Storage client that answers one HEAD bucket call successfully."""
    client, stubber = stubbed_s3_client
    stubber.add_response("head_bucket", {}, {"Bucket": TEST_BUCKET})
    return client


@pytest.fixture
def unreachable_s3_client(stubbed_s3_client):
    """Storage client whose HEAD bucket call fails with 404."""
    client, stubber = stubbed_s3_client
    stubber.add_client_error(
        "head_bucket",
        service_error_code="404",
        service_message="Not Found",
        http_status_code=404,
        expected_params={"Bucket": TEST_BUCKET},
    )
    return client
