"""
DynamoDB Connector

Translates equality "where" filters and update payloads into DynamoDB key
condition, filter and update expressions, and dispatches them with boto3.
"""

from .config import DynamoDBConfig
from .connector import DynamoDBConnector
from .core import (
    KeyKind,
    TableGateway,
    build_filter_expression,
    build_update_expression,
    classify_key,
    create_table_gateway,
)
from .exceptions import (
    ConflictError,
    ConnectionError,
    DynamoDBConnectorError,
    EmptyClauseError,
    InvalidUpdateFieldError,
    ItemNotFoundError,
    MissingKeyValueError,
    NotFoundError,
    RetryableError,
    ValidationError,
)
from .handlers import ItemReadApi, ItemWriteApi
from .models import ExpressionResult, FilterExpressionResult, ModelSettings, TableKeySchema

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "ConflictError",
    "ConnectionError",
    "DynamoDBConnectorError",
    "EmptyClauseError",
    "InvalidUpdateFieldError",
    "ItemNotFoundError",
    "MissingKeyValueError",
    "NotFoundError",
    "RetryableError",
    "ValidationError",

    # Models
    "ModelSettings",
    "TableKeySchema",
    "ExpressionResult",
    "FilterExpressionResult",

    # Translation core
    "KeyKind",
    "classify_key",
    "build_filter_expression",
    "build_update_expression",

    # Dispatch
    "TableGateway",
    "create_table_gateway",
    "ItemReadApi",
    "ItemWriteApi",
    "DynamoDBConnector",
]
