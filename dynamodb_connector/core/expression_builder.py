"""
Expression Builder

Turns equality-only "where" payloads into DynamoDB expression strings:

- Read path: the partition key (and the sort key, when given) goes into the
  KeyConditionExpression, every other attribute into the FilterExpression.
  Key conditions are resolved by the index; filters run on what the index
  returned, so a sort key must never end up in the filter.
- Update path: every non-key attribute becomes a ``name = :name`` assignment
  of a SET clause. Key attributes identify the item and are never assigned.

Values are always bound through ``:name`` placeholders. Key values use the
fixed placeholders ``:partitionKey`` and ``:sortKey``. Names that are DynamoDB
reserved words (``status``, ``name``, ...) are written as ``#name`` and listed
in the result's ``attribute_names``; any other name is written as is.

Both builders are pure functions: no state, inputs left untouched, identical
output for identical input.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import InvalidUpdateFieldError, MissingKeyValueError, ValidationError
from ..models.expressions import (
    PARTITION_KEY_PLACEHOLDER,
    RESERVED_PLACEHOLDERS,
    SORT_KEY_PLACEHOLDER,
    UPDATE_PREFIX,
    ExpressionResult,
    FilterExpressionResult,
)
from ..models.schema import TableKeySchema
from .key_classifier import KeyKind, classify_key
from .reserved_words import is_reserved_word

logger = logging.getLogger(__name__)

# Placeholder tokens only allow alphanumerics and underscores
ATTRIBUTE_NAME_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def attribute_placeholder(attribute_name: str) -> str:
    """Return the value placeholder for a non-key attribute.

    Raises:
        ValidationError: If the name is not a plain identifier, or its
            placeholder would collide with a reserved key placeholder
    """
    if not isinstance(attribute_name, str) or not ATTRIBUTE_NAME_PATTERN.match(attribute_name):
        raise ValidationError(
            f"Invalid attribute name {attribute_name!r}: only letters, digits and underscores are allowed",
            errors={str(attribute_name): "not a plain identifier"},
        )
    placeholder = f":{attribute_name}"
    if placeholder in RESERVED_PLACEHOLDERS:
        raise ValidationError(
            f"Attribute name {attribute_name!r} collides with the reserved placeholder {placeholder}",
            errors={attribute_name: "reserved placeholder name"},
        )
    return placeholder


def attribute_reference(attribute_name: str, attribute_names: Optional[Dict[str, str]] = None) -> str:
    """Return how a name is written inside an expression.

    Reserved words become ``#name``; the alias is recorded in
    ``attribute_names`` when a dict is given.

    Example:
        >>> names = {}
        >>> attribute_reference('status', names), attribute_reference('age', names), names
        ('#status', 'age', {'#status': 'status'})
    """
    if not is_reserved_word(attribute_name):
        return attribute_name
    alias = f"#{attribute_name}"
    if attribute_names is not None:
        attribute_names[alias] = attribute_name
    return alias


def _check_key_name(name: str) -> str:
    if not ATTRIBUTE_NAME_PATTERN.match(name):
        raise ValidationError(f"Invalid key attribute name {name!r}", errors={name: "not a plain identifier"})
    return name


def build_key_condition_expression(
    schema: TableKeySchema,
    include_sort_key: bool = False,
    attribute_names: Optional[Dict[str, str]] = None
) -> str:
    """Build the KeyConditionExpression text for a table.

    Aliases for reserved key names are added to ``attribute_names``.

    Example:
        >>> build_key_condition_expression(TableKeySchema(partition_key='owner_id', sort_key='pet_id'), True)
        'owner_id = :partitionKey and pet_id = :sortKey'
    """
    partition_key = attribute_reference(_check_key_name(schema.partition_key), attribute_names)
    expression = f"{partition_key} = {PARTITION_KEY_PLACEHOLDER}"
    if include_sort_key and schema.sort_key:
        sort_key = attribute_reference(_check_key_name(schema.sort_key), attribute_names)
        expression += f" and {sort_key} = {SORT_KEY_PLACEHOLDER}"
    return expression


def build_filter_expression(
    filter_payload: Optional[Mapping[str, Any]],
    schema: TableKeySchema,
    partition_key_value: Any
) -> FilterExpressionResult:
    """Split a "where" payload into key condition and filter condition.

    Args:
        filter_payload: Attribute name -> expected value (equality only)
        schema: Key schema of the queried table
        partition_key_value: Partition key value, supplied by the caller.
            A partition key entry inside ``filter_payload`` is ignored.

    Returns:
        FilterExpressionResult whose ``expression`` is the filter clause
        ("" when every attribute was a key)

    Raises:
        MissingKeyValueError: If ``partition_key_value`` is None
        ValidationError: For attribute names unusable in an expression

    Example:
        >>> schema = TableKeySchema(partition_key='partitionKey', sort_key='sortKey')
        >>> result = build_filter_expression({'sortKey': 'S1', 'age': 30}, schema, 'P1')
        >>> result.key_condition_expression
        'partitionKey = :partitionKey and sortKey = :sortKey'
        >>> result.expression
        'age = :age'
    """
    if partition_key_value is None:
        raise MissingKeyValueError(schema.partition_key)

    placeholders: Dict[str, Any] = {PARTITION_KEY_PLACEHOLDER: partition_key_value}
    attribute_names: Dict[str, str] = {}
    clauses: List[str] = []
    has_sort_key = False

    for name, value in (filter_payload or {}).items():
        kind = classify_key(name, schema)
        if kind is KeyKind.PARTITION_KEY:
            continue
        if kind is KeyKind.SORT_KEY:
            placeholders[SORT_KEY_PLACEHOLDER] = value
            has_sort_key = True
            continue
        placeholder = attribute_placeholder(name)
        clauses.append(f"{attribute_reference(name, attribute_names)} = {placeholder}")
        placeholders[placeholder] = value

    result = FilterExpressionResult(
        key_condition_expression=build_key_condition_expression(
            schema, include_sort_key=has_sort_key, attribute_names=attribute_names
        ),
        expression=" and ".join(clauses),
        placeholders=placeholders,
        attribute_names=attribute_names,
    )
    logger.debug(
        f"Built key condition '{result.key_condition_expression}' "
        f"and filter '{result.expression}' from {len(placeholders)} placeholder(s)"
    )
    return result


def build_update_expression(
    update_payload: Optional[Mapping[str, Any]],
    schema: TableKeySchema,
    strict: bool = False
) -> ExpressionResult:
    """Build a SET clause assigning every non-key attribute of the payload.

    Key attributes are dropped: they identify the item and cannot change.

    Args:
        update_payload: Attribute name -> new value
        schema: Key schema of the updated table
        strict: Raise instead of dropping key attributes

    Returns:
        ExpressionResult; ``is_empty`` is True when nothing is left to set,
        in which case the expression is a bare ``"set "`` that DynamoDB
        would reject

    Raises:
        InvalidUpdateFieldError: In strict mode, for a key attribute
        ValidationError: For attribute names unusable in an expression
    """
    placeholders: Dict[str, Any] = {}
    attribute_names: Dict[str, str] = {}
    assignments: List[str] = []

    for name, value in (update_payload or {}).items():
        if classify_key(name, schema) is not KeyKind.ATTRIBUTE:
            if strict:
                raise InvalidUpdateFieldError(name)
            logger.debug(f"Dropping key attribute '{name}' from update payload")
            continue
        placeholder = attribute_placeholder(name)
        assignments.append(f"{attribute_reference(name, attribute_names)} = {placeholder}")
        placeholders[placeholder] = value

    result = ExpressionResult(
        expression=UPDATE_PREFIX + ", ".join(assignments),
        placeholders=placeholders,
        attribute_names=attribute_names,
    )
    logger.debug(f"Built update expression '{result.expression}'")
    return result
