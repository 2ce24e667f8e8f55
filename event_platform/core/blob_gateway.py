"""
Thin S3 Blob Gateway

Counterpart of TableGateway for the platform bucket. Objects are written once
and read by key; the gateway exposes exactly that plus a paginated listing,
and maps botocore ClientErrors to domain exceptions.
"""

import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import PlatformConfig
from ..exceptions import (
    ConnectionError,
    ItemNotFoundError,
    NotFoundError,
    RetryableError,
)

logger = logging.getLogger(__name__)


def map_s3_error(
    error: ClientError,
    operation: str,
    bucket_name: str,
    key: Optional[str] = None
) -> Exception:
    """Map S3 ClientError to domain-specific exceptions.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetObject")
        bucket_name: The S3 bucket name
        key: Optional object key for context

    Returns:
        Appropriate domain exception
    """
    error_code = error.response['Error']['Code']
    error_message = error.response['Error'].get('Message', '')

    context = f"{operation} on {bucket_name}"
    if key:
        context += f" (key: {key})"
    full_message = f"{context}: {error_message}"

    if error_code in ('NoSuchKey', '404', 'NotFound'):
        return ItemNotFoundError(f"Object not found - {full_message}", {'bucket': bucket_name, 'key': key}, original_error=error)

    elif error_code == 'NoSuchBucket':
        return NotFoundError(f"Bucket not found - {full_message}", 'bucket', bucket_name, original_error=error)

    elif error_code in ('SlowDown', 'RequestTimeout', 'InternalError', 'ServiceUnavailable', '503'):
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif error_code in ('AccessDenied', 'InvalidAccessKeyId', 'SignatureDoesNotMatch', 'ExpiredToken', '403'):
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    logger.warning(f"Unknown S3 error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"S3 operation failed - {full_message}", original_error=error)


class BlobGateway:
    """
    Thin gateway for S3 object operations on the platform bucket.
    """

    def __init__(self, config: PlatformConfig, bucket_name: Optional[str] = None):
        self.config = config
        self.bucket_name = bucket_name or config.bucket_name
        self._client = None

    @property
    def client(self):
        """Lazy initialization of the S3 client."""
        if self._client is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    aws_session_token=self.config.aws_session_token,
                    region_name=self.config.region_name
                )

                s3_config = {
                    'region_name': self.config.region_name,
                    'config': Config(
                        retries={'max_attempts': self.config.retries},
                        max_pool_connections=self.config.max_pool_connections,
                        read_timeout=self.config.timeout_seconds,
                        connect_timeout=self.config.timeout_seconds
                    )
                }
                if self.config.s3_endpoint_url:
                    s3_config['endpoint_url'] = self.config.s3_endpoint_url

                self._client = session.client('s3', **s3_config)
            except Exception as e:
                logger.error(f"Failed to create S3 client: {e}")
                raise ConnectionError(f"Failed to connect to S3: {e}", e) from e
        return self._client

    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        """
        Store an object.

        Args:
            key: Object key
            body: Object payload
            content_type: MIME type recorded on the object
        """
        try:
            self.client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=body,
                ContentType=content_type
            )
            logger.info(f"Put object in {self.bucket_name}: {key} ({len(body)} bytes, {content_type})")
        except ClientError as e:
            raise map_s3_error(e, "PutObject", self.bucket_name, key) from e

    def get_object(self, key: str) -> bytes:
        """
        Read an object's payload.

        Raises:
            ItemNotFoundError: The key does not exist
        """
        try:
            response = self.client.get_object(Bucket=self.bucket_name, Key=key)
            return response['Body'].read()
        except ClientError as e:
            raise map_s3_error(e, "GetObject", self.bucket_name, key) from e

    def list_objects(self, prefix: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        List every object in the bucket, following continuation tokens.

        Args:
            prefix: Optional key prefix filter

        Returns:
            Raw S3 ``Contents`` entries across all pages
        """
        list_kwargs = {'Bucket': self.bucket_name}
        if prefix:
            list_kwargs['Prefix'] = prefix

        contents: List[Dict[str, Any]] = []
        try:
            paginator = self.client.get_paginator('list_objects_v2')
            for page in paginator.paginate(**list_kwargs):
                contents.extend(page.get('Contents', []))
        except ClientError as e:
            raise map_s3_error(e, "ListObjectsV2", self.bucket_name) from e
        return contents

    def object_url(self, key: str) -> str:
        """Public URL of an object: ASSETS_BASE_URL when configured, else the S3 virtual-hosted URL."""
        if self.config.assets_base_url:
            return f"{self.config.assets_base_url.rstrip('/')}/{key}"
        return f"https://{self.bucket_name}.s3.{self.config.region_name}.amazonaws.com/{key}"


def create_blob_gateway(config: PlatformConfig) -> BlobGateway:
    """Factory function to create a BlobGateway for the configured bucket."""
    if not config.bucket_name:
        raise ConnectionError("BUCKET_NAME is not configured")
    return BlobGateway(config, config.bucket_name)
