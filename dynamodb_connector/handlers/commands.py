"""
Item Write API

- create: PutItem of a whole item, optionally refusing to overwrite
- update: UpdateItem with a SET clause built from the non-key attributes

Key attributes identify an item and are never part of a SET clause.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..config import DynamoDBConfig
from ..core import TableGateway, attribute_reference, build_update_expression, create_table_gateway
from ..exceptions import ConflictError, EmptyClauseError, ItemNotFoundError
from ..models import ModelSettings
from ..utils import build_item_key, from_dynamodb_value, serialize_item

logger = logging.getLogger(__name__)


class ItemWriteApi:
    """
    Write-only API over any table described by ModelSettings.
    """

    def __init__(self, config: DynamoDBConfig, dynamodb=None):
        """Initialize write API.

        Args:
            config: DynamoDB configuration
            dynamodb: Shared boto3 DynamoDB resource
        """
        self.config = config
        self.dynamodb = dynamodb
        self._gateways: Dict[str, TableGateway] = {}

    def gateway(self, settings: ModelSettings) -> TableGateway:
        if settings.table_name not in self._gateways:
            self._gateways[settings.table_name] = create_table_gateway(self.config, settings.table_name, self.dynamodb)
        return self._gateways[settings.table_name]

    def create(
        self,
        settings: ModelSettings,
        item: Mapping[str, Any],
        overwrite: bool = True
    ) -> Dict[str, Any]:
        """
        Store a new item.

        DynamoDB Operation: PutItem
        Condition (overwrite=False): attribute_not_exists(<partition key>)

        Args:
            settings: Table name and key schema
            item: Item attributes, including its key attributes
            overwrite: Replace an existing item with the same key

        Returns:
            The stored item

        Raises:
            MissingKeyValueError: Item lacks a key attribute
            ConflictError: overwrite=False and the item already exists
        """
        key = build_item_key(settings.key_schema, item)

        condition_expression = None
        attribute_names: Dict[str, str] = {}
        if not overwrite:
            partition_key = attribute_reference(settings.partition_key, attribute_names)
            condition_expression = f"attribute_not_exists({partition_key})"

        self.gateway(settings).put_item(
            serialize_item(item),
            condition_expression=condition_expression,
            resource_id="#".join(str(v) for v in key.values()),
            expression_attribute_names=attribute_names,
        )
        return dict(item)

    def update(
        self,
        settings: ModelSettings,
        data: Mapping[str, Any],
        partition_key_value: Any = None,
        sort_key_value: Any = None,
        strict: bool = False
    ) -> Dict[str, Any]:
        """
        Assign new values to the non-key attributes of an existing item.

        DynamoDB Operation: UpdateItem
        Condition: attribute_exists(<partition key>)

        Args:
            settings: Table name and key schema
            data: Attribute name -> new value; key attributes are dropped
            partition_key_value: Item partition key, else taken from ``data``
            sort_key_value: Item sort key, else taken from ``data``
            strict: Reject key attributes in ``data`` instead of dropping them

        Returns:
            The item after the update

        Raises:
            MissingKeyValueError: A key value could not be determined
            EmptyClauseError: ``data`` holds no non-key attribute
            InvalidUpdateFieldError: strict=True and ``data`` holds a key attribute
            ItemNotFoundError: No item with that key exists
            ConflictError: The update lost a transaction conflict
        """
        key = serialize_item(build_item_key(settings.key_schema, data, partition_key_value, sort_key_value))
        expressions = build_update_expression(serialize_item(data), settings.key_schema, strict=strict)
        if expressions.is_empty:
            raise EmptyClauseError("update", settings.table_name)

        attribute_names = dict(expressions.attribute_names)
        partition_key = attribute_reference(settings.partition_key, attribute_names)

        gateway = self.gateway(settings)
        try:
            attributes = gateway.update_item(
                key=key,
                update_expression=expressions.expression,
                expression_attribute_values=expressions.placeholders,
                expression_attribute_names=attribute_names,
                condition_expression=f"attribute_exists({partition_key})",
                return_values='ALL_NEW',
            )
        except ConflictError as e:
            if e.error_code != 'ConditionalCheckFailedException':
                raise
            raise ItemNotFoundError(gateway.table_name, key, original_error=e) from e

        return from_dynamodb_value(attributes or {})
