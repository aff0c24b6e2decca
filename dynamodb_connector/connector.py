"""
DynamoDB connector facade.

Owns the boto3 resource and hands it explicitly to the read and write APIs,
so every table shares one connection and nothing lives in module globals.

Example:
    connector = DynamoDBConnector(DynamoDBConfig.for_local_development())
    connector.connect()
    pets = ModelSettings(table_name='pets', partition_key='owner_id', sort_key='pet_id')
    connector.create(pets, {'owner_id': 'o-1', 'pet_id': 'p-1', 'kind': 'cat'})
    connector.all(pets, {'owner_id': 'o-1', 'kind': 'cat'})
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import DynamoDBConfig
from .core import create_dynamodb_resource
from .handlers import ItemReadApi, ItemWriteApi
from .models import ModelSettings

logger = logging.getLogger(__name__)

SettingsLike = Union[ModelSettings, Mapping[str, Any]]


def _as_model_settings(settings: SettingsLike) -> ModelSettings:
    if isinstance(settings, ModelSettings):
        return settings
    if 'dynamodb' in settings:
        return ModelSettings.from_model_settings(dict(settings))
    return ModelSettings.from_model_settings({'dynamodb': dict(settings)})


class DynamoDBConnector:
    """
    Dispatches filter/update requests for any table to DynamoDB.

    Model settings are passed with every call, either as ModelSettings or as
    the raw ``{"tableName", "partitionKey", "sortKey"}`` block.
    """

    def __init__(self, config: Optional[DynamoDBConfig] = None, dynamodb=None):
        """Initialize connector.

        Args:
            config: DynamoDB configuration (read from the environment if None)
            dynamodb: Existing boto3 DynamoDB resource to reuse
        """
        self.config = config or DynamoDBConfig.from_env()
        self._dynamodb = dynamodb
        self._read_api: Optional[ItemReadApi] = None
        self._write_api: Optional[ItemWriteApi] = None

        if self.config.enable_debug_logging:
            logging.getLogger(__package__).setLevel(logging.DEBUG)

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'DynamoDBConnector':
        """Create a connector from data-source settings."""
        return cls(DynamoDBConfig.from_settings(settings))

    def connect(self):
        """Create the shared boto3 resource if needed and return it.

        Raises:
            ConnectionError: If the resource cannot be created
        """
        if self._dynamodb is None:
            self._dynamodb = create_dynamodb_resource(self.config)
            logger.info(
                f"Connected to DynamoDB in {self.config.region_name}"
                f" ({self.config.resolve_endpoint_url() or 'default endpoint'})"
            )
        return self._dynamodb

    @property
    def read_api(self) -> ItemReadApi:
        if self._read_api is None:
            self._read_api = ItemReadApi(self.config, self.connect())
        return self._read_api

    @property
    def write_api(self) -> ItemWriteApi:
        if self._write_api is None:
            self._write_api = ItemWriteApi(self.config, self.connect())
        return self._write_api

    def all(self, settings: SettingsLike, where: Optional[Mapping[str, Any]] = None, partition_key_value: Any = None) -> List[Dict[str, Any]]:
        """Items matching ``where``; see :meth:`ItemReadApi.all`."""
        return self.read_api.all(_as_model_settings(settings), where, partition_key_value)

    def count(self, settings: SettingsLike, where: Optional[Mapping[str, Any]] = None, partition_key_value: Any = None) -> int:
        """Number of items matching ``where``; see :meth:`ItemReadApi.count`."""
        return self.read_api.count(_as_model_settings(settings), where, partition_key_value)

    def create(self, settings: SettingsLike, item: Mapping[str, Any], overwrite: bool = True) -> Dict[str, Any]:
        return self.write_api.create(_as_model_settings(settings), item, overwrite)

    def update(
        self,
        settings: SettingsLike,
        data: Mapping[str, Any],
        partition_key_value: Any = None,
        sort_key_value: Any = None,
        strict: bool = False
    ) -> Dict[str, Any]:
        return self.write_api.update(_as_model_settings(settings), data, partition_key_value, sort_key_value, strict)
