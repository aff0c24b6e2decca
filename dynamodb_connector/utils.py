"""
Item serialization between plain Python values and what boto3 accepts.

boto3's resource layer rejects ``float`` and knows nothing about
``datetime``; on the way back every number arrives as ``Decimal``. These
helpers convert in both directions so callers deal in ordinary values.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import MissingKeyValueError
from .models.schema import TableKeySchema

logger = logging.getLogger(__name__)


# =============================================================================
# Value Conversion
# =============================================================================

def to_dynamodb_value(value: Any) -> Any:
    """Convert a Python value to something boto3 can store.

    Example:
        >>> to_dynamodb_value({'weight': 4.5, 'tags': ['a']})
        {'weight': Decimal('4.5'), 'tags': ['a']}
    """
    if isinstance(value, Mapping):
        return {k: to_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamodb_value(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return {to_dynamodb_value(v) for v in value}
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    # bool is an int subclass; leave it alone
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def from_dynamodb_value(value: Any) -> Any:
    """Convert a value read from DynamoDB back to plain Python.

    Whole-number Decimals become ``int``, the rest ``float``.
    """
    if isinstance(value, dict):
        return {k: from_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamodb_value(v) for v in value]
    if isinstance(value, set):
        return {from_dynamodb_value(v) for v in value}
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def serialize_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {name: to_dynamodb_value(value) for name, value in item.items()}


def deserialize_items(items: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    return [from_dynamodb_value(item) for item in items or []]


# =============================================================================
# Key Extraction
# =============================================================================

def build_item_key(
    schema: TableKeySchema,
    source: Optional[Mapping[str, Any]] = None,
    partition_key_value: Any = None,
    sort_key_value: Any = None
) -> Dict[str, Any]:
    """Build the primary key dict for an item.

    Explicit values win; otherwise they are looked up in ``source``.

    Raises:
        MissingKeyValueError: If a key the table defines has no value
    """
    source = source or {}

    if partition_key_value is None:
        partition_key_value = source.get(schema.partition_key)
    if partition_key_value is None:
        raise MissingKeyValueError(schema.partition_key)
    key = {schema.partition_key: partition_key_value}

    if schema.sort_key:
        if sort_key_value is None:
            sort_key_value = source.get(schema.sort_key)
        if sort_key_value is None:
            raise MissingKeyValueError(schema.sort_key, "sort key")
        key[schema.sort_key] = sort_key_value

    return key


__all__ = [
    "to_dynamodb_value",
    "from_dynamodb_value",
    "serialize_item",
    "deserialize_items",
    "build_item_key",
]
