"""
Core infrastructure components for AWS operations.

- TableGateway: Thin wrapper over the boto3 DynamoDB Table resource
- BlobGateway: Thin wrapper over the boto3 S3 client
- Dependencies: the per-process container handed to every function
"""

from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error
from .blob_gateway import BlobGateway, create_blob_gateway, map_s3_error
from .dependencies import Dependencies, build_dependencies

__all__ = [
    "TableGateway",
    "create_table_gateway",
    "map_dynamodb_error",
    "BlobGateway",
    "create_blob_gateway",
    "map_s3_error",
    "Dependencies",
    "build_dependencies",
]
