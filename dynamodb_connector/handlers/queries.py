"""
Item Read API

Runs "where" filters as a single DynamoDB Query:
- The partition key (and sort key, when filtered on) form the KeyConditionExpression
- Every other attribute becomes part of the FilterExpression
- Results come back as plain Python values

One request per call; following LastEvaluatedKey is left to the caller.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..config import DynamoDBConfig
from ..core import TableGateway, build_filter_expression, create_table_gateway
from ..exceptions import MissingKeyValueError
from ..models import FilterExpressionResult, ModelSettings
from ..utils import deserialize_items, to_dynamodb_value

logger = logging.getLogger(__name__)


class ItemReadApi:
    """
    Read-only API over any table described by ModelSettings.
    """

    def __init__(self, config: DynamoDBConfig, dynamodb=None):
        """Initialize read API.

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

    def build_query(
        self,
        settings: ModelSettings,
        where: Optional[Mapping[str, Any]] = None,
        partition_key_value: Any = None
    ) -> FilterExpressionResult:
        """
        Build the expressions for a "where" filter.

        The partition key value is taken from the argument, or else from the
        filter itself.

        Raises:
            MissingKeyValueError: If neither provides a partition key value
        """
        where = where or {}
        if partition_key_value is None:
            partition_key_value = where.get(settings.partition_key)
        if partition_key_value is None:
            raise MissingKeyValueError(settings.partition_key)

        return build_filter_expression(
            {name: to_dynamodb_value(value) for name, value in where.items()},
            settings.key_schema,
            to_dynamodb_value(partition_key_value),
        )

    def all(
        self,
        settings: ModelSettings,
        where: Optional[Mapping[str, Any]] = None,
        partition_key_value: Any = None
    ) -> List[Dict[str, Any]]:
        """
        Find all items matching an equality filter.

        DynamoDB Operation: Query

        Args:
            settings: Table name and key schema
            where: Attribute name -> expected value
            partition_key_value: Partition key value if not part of ``where``

        Returns:
            Matching items
        """
        expressions = self.build_query(settings, where, partition_key_value)
        response = self.gateway(settings).query(**expressions.to_query_params())
        items = deserialize_items(response.get('Items'))
        logger.debug(f"Query on {settings.table_name} returned {len(items)} item(s)")
        return items

    def count(
        self,
        settings: ModelSettings,
        where: Optional[Mapping[str, Any]] = None,
        partition_key_value: Any = None
    ) -> int:
        """
        Count items matching an equality filter.

        DynamoDB Operation: Query with Select=COUNT

        Returns:
            Number of matching items
        """
        expressions = self.build_query(settings, where, partition_key_value)
        response = self.gateway(settings).query(Select='COUNT', **expressions.to_query_params())
        return int(response.get('Count', 0))
