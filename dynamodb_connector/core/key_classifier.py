"""
Attribute classification against a table's key schema.
"""

from enum import Enum

from ..models.schema import TableKeySchema


class KeyKind(str, Enum):
    """Role an attribute plays in a table."""
    PARTITION_KEY = "partition_key"
    SORT_KEY = "sort_key"
    ATTRIBUTE = "attribute"


def classify_key(attribute_name: str, schema: TableKeySchema) -> KeyKind:
    """Classify an attribute name as partition key, sort key or plain attribute.

    Args:
        attribute_name: Attribute name from a filter or update payload
        schema: Key schema of the target table

    Returns:
        KeyKind for the attribute

    Examples:
        >>> schema = TableKeySchema(partition_key='owner_id', sort_key='pet_id')
        >>> classify_key('owner_id', schema)
        <KeyKind.PARTITION_KEY: 'partition_key'>
        >>> classify_key('age', schema)
        <KeyKind.ATTRIBUTE: 'attribute'>
    """
    if attribute_name == schema.partition_key:
        return KeyKind.PARTITION_KEY
    if schema.sort_key is not None and attribute_name == schema.sort_key:
        return KeyKind.SORT_KEY
    return KeyKind.ATTRIBUTE
