"""
Core components of the connector.

- KeyClassifier: decides whether an attribute is partition key, sort key or plain attribute
- ExpressionBuilder: builds key-condition, filter and update expressions
- TableGateway: thin wrapper over boto3 table operations
"""

from .expression_builder import (
    attribute_placeholder,
    attribute_reference,
    build_filter_expression,
    build_key_condition_expression,
    build_update_expression,
)
from .key_classifier import KeyKind, classify_key
from .reserved_words import RESERVED_WORDS, is_reserved_word
from .table_gateway import TableGateway, create_dynamodb_resource, create_table_gateway, map_dynamodb_error

__all__ = [
    # KeyClassifier
    "KeyKind",
    "classify_key",

    # Reserved words
    "RESERVED_WORDS",
    "is_reserved_word",

    # ExpressionBuilder
    "attribute_placeholder",
    "attribute_reference",
    "build_filter_expression",
    "build_key_condition_expression",
    "build_update_expression",

    # TableGateway
    "TableGateway",
    "create_dynamodb_resource",
    "create_table_gateway",
    "map_dynamodb_error",
]
