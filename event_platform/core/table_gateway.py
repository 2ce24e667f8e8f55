"""
Thin DynamoDB Table Gateway

Lightweight wrapper around the boto3 Table resource for the platform's single
table. Every record is addressed by ``pk`` + ``sk``; the gateway does not know
about events or attendees, it only:

- creates the boto3 resource lazily from PlatformConfig
- maps botocore ClientErrors to domain exceptions
- exposes the point/range operations the read and write APIs compose
"""

import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import PlatformConfig
from ..exceptions import (
    ConnectionError,
    ConflictError,
    NotFoundError,
    RetryableError,
    StoreRequestError,
)

logger = logging.getLogger(__name__)


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map DynamoDB ClientError to domain-specific exceptions.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetItem", "UpdateItem")
        table_name: The DynamoDB table name
        resource_id: Optional resource identifier for context

    Returns:
        Appropriate domain exception
    """
    error_code = error.response['Error']['Code']
    error_message = error.response['Error'].get('Message', '')

    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'ConditionalCheckFailedException':
        return ConflictError(f"Conditional check failed - {full_message}", resource_id, original_error=error)

    elif error_code == 'ResourceNotFoundException':
        return NotFoundError(f"Table not found - {full_message}", 'table', table_name, original_error=error)

    elif error_code == 'ValidationException':
        return StoreRequestError(f"Validation failed - {full_message}", original_error=error)

    elif error_code == 'ItemCollectionSizeLimitExceededException':
        return StoreRequestError(f"Item collection size limit exceeded - {full_message}", original_error=error)

    elif error_code == 'TransactionConflictException':
        return ConflictError(f"Transaction conflict - {full_message}", resource_id, original_error=error)

    elif error_code in [
        'ProvisionedThroughputExceededException', 'RequestLimitExceeded',
        'ThrottlingException', 'TooManyRequestsException'
    ]:
        return RetryableError(f"Throttling - {full_message}", original_error=error)

    elif error_code in [
        'InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException',
        'RequestTimeoutException'
    ]:
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif error_code in [
        'UnrecognizedClientException', 'AccessDeniedException',
        'ExpiredTokenException', 'InvalidSignatureException'
    ]:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


def _resource_id(key: Dict[str, Any]) -> Optional[str]:
    if not key:
        return None
    return "/".join(str(key[name]) for name in ('pk', 'sk') if name in key) or None


class TableGateway:
    """
    Thin gateway for the single-table DynamoDB operations.

    Designed to be used by the domain read/write APIs rather than directly by
    route functions.
    """

    def __init__(self, config: PlatformConfig, table_name: Optional[str] = None):
        """Initialize table gateway.

        Args:
            config: Platform configuration
            table_name: Table name override (defaults to config.table_name)
        """
        self.config = config
        self.table_name = table_name or config.table_name
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    aws_session_token=self.config.aws_session_token,
                    region_name=self.config.region_name
                )

                dynamodb_config = {
                    'region_name': self.config.region_name
                }

                if self.config.dynamodb_endpoint_url:
                    dynamodb_config['endpoint_url'] = self.config.dynamodb_endpoint_url

                boto_config = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
                dynamodb_config['config'] = boto_config

                self._dynamodb = session.resource('dynamodb', **dynamodb_config)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def table(self):
        """Get boto3 DynamoDB Table resource."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def get_item(self, key: Dict[str, Any], consistent_read: bool = False) -> Optional[Dict[str, Any]]:
        """
        Fetch a single item by its full primary key.

        Args:
            key: ``{'pk': ..., 'sk': ...}``
            consistent_read: Use a strongly consistent read

        Returns:
            The item, or None when it does not exist
        """
        try:
            response = self.table.get_item(Key=key, ConsistentRead=consistent_read)
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, _resource_id(key)) from e
        return response.get('Item')

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute DynamoDB Query operation.

        Raw pass-through to boto3 with error handling.

        Example:
            response = gateway.query(
                KeyConditionExpression=Key('pk').eq('FAD') & Key('sk').begins_with('summit#'),
                Limit=1
            )
        """
        try:
            return self.table.query(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Query", self.table_name) from e

    def query_all(self, **kwargs) -> List[Dict[str, Any]]:
        """
        Execute a Query and follow LastEvaluatedKey until the result set is exhausted.

        Args:
            **kwargs: boto3 query parameters (without ExclusiveStartKey)

        Returns:
            All matching items across pages
        """
        items: List[Dict[str, Any]] = []
        while True:
            response = self.query(**kwargs)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return items
            kwargs['ExclusiveStartKey'] = last_key

    def put_item(self, item: Dict[str, Any], condition_expression=None) -> None:
        """
        Put item into the table.

        Args:
            item: Item to store (must contain pk and sk)
            condition_expression: Optional condition for put operation

        Example:
            gateway.put_item(
                item={'pk': 'summit#ATTENDEE', 'sk': 'ada@example.com'},
                condition_expression=Attr('pk').not_exists()
            )
        """
        try:
            put_kwargs = {'Item': item}
            if condition_expression is not None:
                put_kwargs['ConditionExpression'] = condition_expression

            self.table.put_item(**put_kwargs)
            logger.info(f"Put item in {self.table_name}: {_resource_id(item)}")
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, _resource_id(item)) from e

    def update_item(
        self,
        key: Dict[str, Any],
        update_expression: str,
        expression_attribute_values: Optional[Dict[str, Any]] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
        condition_expression=None,
        return_values: str = 'NONE'
    ) -> Optional[Dict[str, Any]]:
        """
        Update item in the table.

        Args:
            key: Primary key of item to update
            update_expression: UPDATE expression
            expression_attribute_values: Values for update expression
            expression_attribute_names: Names for update expression
            condition_expression: Optional condition (string or boto3 condition)
            return_values: What to return after update

        Returns:
            Updated attributes if return_values != 'NONE'
        """
        try:
            update_kwargs = {
                'Key': key,
                'UpdateExpression': update_expression,
                'ReturnValues': return_values
            }

            if expression_attribute_values:
                update_kwargs['ExpressionAttributeValues'] = expression_attribute_values
            if expression_attribute_names:
                update_kwargs['ExpressionAttributeNames'] = expression_attribute_names
            if condition_expression is not None:
                update_kwargs['ConditionExpression'] = condition_expression

            response = self.table.update_item(**update_kwargs)
            logger.info(f"Updated item in {self.table_name}: {_resource_id(key)}")

            return response.get('Attributes') if return_values != 'NONE' else None

        except ClientError as e:
            raise map_dynamodb_error(e, "UpdateItem", self.table_name, _resource_id(key)) from e

    def delete_item(self, key: Dict[str, Any], condition_expression=None) -> None:
        """
        Delete item from the table.

        Args:
            key: Primary key of item to delete
            condition_expression: Optional condition for delete

        Example:
            gateway.delete_item(key, condition_expression=Attr('pk').exists())
        """
        try:
            delete_kwargs = {'Key': key}
            if condition_expression is not None:
                delete_kwargs['ConditionExpression'] = condition_expression

            self.table.delete_item(**delete_kwargs)
            logger.info(f"Deleted item from {self.table_name}: {_resource_id(key)}")
        except ClientError as e:
            raise map_dynamodb_error(e, "DeleteItem", self.table_name, _resource_id(key)) from e


def create_table_gateway(config: PlatformConfig) -> TableGateway:
    """
    Factory function to create a TableGateway for the configured table.

    Args:
        config: Platform configuration

    Returns:
        Configured TableGateway instance
    """
    if not config.table_name:
        raise ConnectionError("TABLE_NAME is not configured")
    return TableGateway(config, config.table_name)
