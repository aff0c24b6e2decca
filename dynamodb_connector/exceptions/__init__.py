# Base exception class
from .base import DynamoDBConnectorError

from .domain_exceptions import (
    ConflictError,
    ConnectionError,
    EmptyClauseError,
    InvalidUpdateFieldError,
    ItemNotFoundError,
    MissingKeyValueError,
    NotFoundError,
    RetryableError,
    ValidationError,
)

__all__ = [
    # Base exception
    "DynamoDBConnectorError",

    # Translation errors
    "EmptyClauseError",
    "InvalidUpdateFieldError",
    "MissingKeyValueError",
    "ValidationError",

    # Store errors
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "NotFoundError",
    "RetryableError",
]
