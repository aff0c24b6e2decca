"""
Domain-Specific Exceptions for the DynamoDB connector

Two families live here:
1. Translation errors, raised before anything is sent to DynamoDB
   (bad attribute names, missing key values, empty clauses)
2. Store errors, produced by mapping botocore ClientErrors
   (conflicts, missing tables/items, throttling, connectivity)
"""

from typing import Any, Dict, Optional

from .base import DynamoDBConnectorError


# =============================================================================
# Translation Errors
# =============================================================================

class ValidationError(DynamoDBConnectorError):
    """Raised when input to the connector is invalid.

    Used for:
    - Attribute names that cannot be placed in an expression
    - Malformed model settings
    - ValidationException responses from DynamoDB
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        super().__init__(message, original_error, {'validation_errors': self.errors} if self.errors else None)


class MissingKeyValueError(ValidationError):
    """Raised when a read or write needs a key value nobody supplied."""

    def __init__(self, key_name: str, key_kind: str = "partition key"):
        self.key_name = key_name
        self.key_kind = key_kind
        super().__init__(
            f"Missing {key_kind} value for '{key_name}'",
            errors={key_name: f"{key_kind} value is required"},
        )


class EmptyClauseError(ValidationError):
    """Raised when a payload produced no clauses to send.

    An UpdateExpression of just ``set `` is rejected by DynamoDB, so callers
    check for it before dispatching.
    """

    def __init__(self, clause: str, table_name: Optional[str] = None):
        self.clause = clause
        self.table_name = table_name
        message = f"No attributes left to build the {clause} clause"
        if table_name:
            message += f" for table '{table_name}'"
        super().__init__(message)


class InvalidUpdateFieldError(ValidationError):
    """Raised by strict updates that try to assign a key attribute."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"Key attribute '{field_name}' cannot be updated",
            errors={field_name: "key attributes are immutable"},
        )


# =============================================================================
# Store Errors
# =============================================================================

class ItemNotFoundError(DynamoDBConnectorError):
    """Raised when an update targets an item that does not exist."""

    def __init__(self, table_name: str, key: dict, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            table_name: Name of the DynamoDB table
            key: The key that was not found
            original_error: The original exception that caused this error
        """
        self.table_name = table_name
        self.key = key
        super().__init__(
            f"Item not found in table '{table_name}' with key: {key}",
            original_error,
            {'table_name': table_name, 'key': key},
        )


class NotFoundError(DynamoDBConnectorError):
    """Raised when a DynamoDB resource such as a table or index is missing."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_name: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_type = resource_type
        self.resource_name = resource_name
        context = {}
        if resource_type:
            context['resource_type'] = resource_type
        if resource_name:
            context['resource_name'] = resource_name
        super().__init__(message, original_error, context)


class ConflictError(DynamoDBConnectorError):
    """Raised when a conditional write fails.

    Used for:
    - ConditionalCheckFailedException from DynamoDB
    - create(..., overwrite=False) on an existing key
    - Transaction conflicts
    """

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        super().__init__(message, original_error, {'resource_id': resource_id} if resource_id else None)


class ConnectionError(DynamoDBConnectorError):
    """Raised when DynamoDB cannot be reached or refuses the credentials."""

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(DynamoDBConnectorError):
    """Raised for throttling and transient service failures.

    The connector does not retry on its own; the caller decides.
    """

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)
