"""
Thin DynamoDB Table Gateway

Wraps a boto3 Table resource for the three calls the connector issues
(Query, PutItem, UpdateItem) and converts botocore ClientErrors into the
connector's exceptions. Request parameters are passed through untouched;
building them is the job of the expression builder.

The boto3 resource is either injected (so one connection serves every
table) or created lazily from the configuration.
"""

import logging
from typing import Any, Callable, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import DynamoDBConfig
from ..exceptions import (
    ConflictError,
    ConnectionError,
    NotFoundError,
    RetryableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


_CONFLICT_CODES = {
    'ConditionalCheckFailedException': "Conditional check failed",
    'TransactionConflictException': "Transaction conflict",
    'ResourceInUseException': "Resource in use",
}

_VALIDATION_CODES = {
    'ValidationException': "Validation failed",
    'ItemCollectionSizeLimitExceededException': "Item collection size limit exceeded",
    'LimitExceededException': "DynamoDB limit exceeded",
}

_RETRYABLE_CODES = {
    'ProvisionedThroughputExceededException': "Throttling",
    'RequestLimitExceeded': "Throttling",
    'ThrottlingException': "Throttling",
    'InternalServerError': "Service unavailable",
    'ServiceUnavailable': "Service unavailable",
    'TransactionInProgressException': "Transaction in progress",
    'RequestTimeoutException': "Request timeout",
}

_AUTH_CODES = {
    'UnrecognizedClientException',
    'AccessDeniedException',
    'InvalidSignatureException',
    'IncompleteSignatureException',
    'ExpiredTokenException',
}


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map a botocore ClientError to a connector exception.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "Query", "PutItem")
        table_name: The DynamoDB table name
        resource_id: Optional item identifier for context

    Returns:
        ConflictError, NotFoundError, ValidationError, RetryableError or
        ConnectionError (the fallback for unknown codes)
    """
    error_info = error.response.get('Error', {})
    error_code = error_info.get('Code', 'Unknown')
    error_message = error_info.get('Message', str(error))

    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"
    full_message = f"{context}: {error_message}"

    if error_code in _CONFLICT_CODES:
        return ConflictError(f"{_CONFLICT_CODES[error_code]} - {full_message}", resource_id, original_error=error)

    if error_code == 'ResourceNotFoundException':
        return NotFoundError(f"Table not found - {full_message}", 'table', table_name, original_error=error)

    if error_code in _VALIDATION_CODES:
        return ValidationError(f"{_VALIDATION_CODES[error_code]} - {full_message}", original_error=error)

    if error_code in _RETRYABLE_CODES:
        return RetryableError(f"{_RETRYABLE_CODES[error_code]} - {full_message}", original_error=error)

    if error_code in _AUTH_CODES:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


def create_dynamodb_resource(config: DynamoDBConfig):
    """Create a boto3 DynamoDB resource from configuration.

    Raises:
        ConnectionError: If the session or resource cannot be created
    """
    try:
        session = boto3.Session(
            region_name=config.resolve_region_name(),
            **config.resolve_credentials()
        )

        resource_kwargs: Dict[str, Any] = {
            'region_name': config.resolve_region_name(),
            'config': Config(
                retries={'max_attempts': config.retries},
                max_pool_connections=config.max_pool_connections,
                read_timeout=config.timeout_seconds,
                connect_timeout=config.timeout_seconds
            ),
        }
        endpoint_url = config.resolve_endpoint_url()
        if endpoint_url:
            resource_kwargs['endpoint_url'] = endpoint_url

        return session.resource('dynamodb', **resource_kwargs)
    except Exception as e:
        logger.error(f"Failed to create DynamoDB resource: {e}")
        raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e


class TableGateway:
    """
    Thin gateway for one DynamoDB table.

    Exposes only the operations the read/write APIs need and maps their
    errors; no retries, no pagination.
    """

    def __init__(self, config: DynamoDBConfig, table_name: str, dynamodb=None):
        """Initialize table gateway.

        Args:
            config: DynamoDB configuration
            table_name: Full name of the DynamoDB table
            dynamodb: Shared boto3 DynamoDB resource; created lazily if None
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = dynamodb
        self._table = None

    @property
    def dynamodb(self):
        """Injected or lazily created DynamoDB resource."""
        if self._dynamodb is None:
            self._dynamodb = create_dynamodb_resource(self.config)
        return self._dynamodb

    @property
    def table(self):
        """boto3 Table resource for this gateway's table."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def _call(self, operation: str, method: Callable[..., Dict[str, Any]], resource_id: Optional[str] = None, **kwargs) -> Dict[str, Any]:
        try:
            return method(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, operation, self.table_name, resource_id) from e

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute a DynamoDB Query.

        Example:
            response = gateway.query(
                KeyConditionExpression='owner_id = :partitionKey',
                FilterExpression='age = :age',
                ExpressionAttributeValues={':partitionKey': 'o-1', ':age': 3}
            )
        """
        return self._call("Query", self.table.query, **kwargs)

    def put_item(
        self,
        item: Dict[str, Any],
        condition_expression=None,
        resource_id: Optional[str] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Put item into the table.

        Args:
            item: Serialized item to store
            condition_expression: Optional condition for the put
            resource_id: Item identifier used in error messages
            expression_attribute_names: #alias -> name map for the condition
        """
        put_kwargs: Dict[str, Any] = {'Item': item}
        if condition_expression is not None:
            put_kwargs['ConditionExpression'] = condition_expression
        if expression_attribute_names:
            put_kwargs['ExpressionAttributeNames'] = expression_attribute_names

        self._call("PutItem", self.table.put_item, resource_id, **put_kwargs)
        logger.info(f"Put item in {self.table_name}: {resource_id or item}")

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
            update_expression: SET expression
            expression_attribute_values: Values for the expression placeholders
            expression_attribute_names: #alias -> name map for reserved words
            condition_expression: Optional condition for the update
            return_values: What to return after update

        Returns:
            Item attributes if return_values != 'NONE'
        """
        update_kwargs: Dict[str, Any] = {
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

        resource_id = "#".join(str(v) for v in key.values())
        response = self._call("UpdateItem", self.table.update_item, resource_id, **update_kwargs)
        logger.info(f"Updated item in {self.table_name}: {key}")

        return response.get('Attributes') if return_values != 'NONE' else None


def create_table_gateway(config: DynamoDBConfig, table_name: str, dynamodb=None) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: DynamoDB configuration
        table_name: Base table name; the configured prefix is applied
        dynamodb: Optional shared boto3 DynamoDB resource

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(config, config.get_table_name(table_name), dynamodb)
