"""
Test configuration and fixtures for the event platform.

Every AWS call runs against moto: one DynamoDB table keyed by pk/sk and one
S3 bucket, created fresh per test.
"""

import boto3
import pytest
from moto import mock_aws

from event_platform import Dependencies, PlatformConfig

REGION = "us-east-1"
TABLE_NAME = "events-test"
BUCKET_NAME = "events-test-assets"


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture
def platform_config():
    """Configuration pointing at the mocked table and bucket."""
    return PlatformConfig(
        table_name=TABLE_NAME,
        bucket_name=BUCKET_NAME,
        region_name=REGION,
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        dynamodb_endpoint_url=None,
        s3_endpoint_url=None,
        assets_base_url=None,
        environment="test",
        log_level="DEBUG",
    )


@pytest.fixture
def mock_aws_services():
    with mock_aws():
        yield


@pytest.fixture
def platform_table(mock_aws_services):
    """Create the single platform table."""
    dynamodb = boto3.resource('dynamodb', region_name=REGION)
    return dynamodb.create_table(
        TableName=TABLE_NAME,
        KeySchema=[
            {'AttributeName': 'pk', 'KeyType': 'HASH'},
            {'AttributeName': 'sk', 'KeyType': 'RANGE'},
        ],
        AttributeDefinitions=[
            {'AttributeName': 'pk', 'AttributeType': 'S'},
            {'AttributeName': 'sk', 'AttributeType': 'S'},
        ],
        BillingMode='PAY_PER_REQUEST',
    )


@pytest.fixture
def platform_bucket(mock_aws_services):
    """Create the platform bucket and return an S3 client for assertions."""
    s3 = boto3.client('s3', region_name=REGION)
    s3.create_bucket(Bucket=BUCKET_NAME)
    return s3


@pytest.fixture
def deps(platform_config, platform_table, platform_bucket):
    """Dependencies wired to the mocked resources."""
    return Dependencies(platform_config)
