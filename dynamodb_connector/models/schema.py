"""
Table key metadata.

A model's ``dynamodb`` settings block names its table and key attributes:

    {"tableName": "pets", "partitionKey": "owner_id", "sortKey": "pet_id"}

These models parse that block and answer which role an attribute plays.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from ..exceptions import ValidationError


class TableKeySchema(BaseModel):
    """Partition key and optional sort key of a table."""

    partition_key: str = Field(alias='partitionKey', description="Partition (hash) key attribute name")
    sort_key: Optional[str] = Field(default=None, alias='sortKey', description="Sort (range) key attribute name")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator('partition_key')
    @classmethod
    def validate_partition_key(cls, v):
        if not v:
            raise ValueError("partition key name is required")
        return v

    @field_validator('sort_key')
    @classmethod
    def validate_sort_key(cls, v):
        # An empty string in settings means "no sort key"
        return v or None

    @property
    def key_fields(self) -> list:
        return [k for k in (self.partition_key, self.sort_key) if k]

    def classify(self, attribute_name: str):
        """Shortcut for :func:`dynamodb_connector.core.classify_key`."""
        from ..core.key_classifier import classify_key
        return classify_key(attribute_name, self)


class ModelSettings(BaseModel):
    """The ``dynamodb`` settings block of a model definition."""

    table_name: str = Field(alias='tableName', description="Base table name")
    partition_key: str = Field(alias='partitionKey')
    sort_key: Optional[str] = Field(default=None, alias='sortKey')

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator('table_name', 'partition_key')
    @classmethod
    def validate_required(cls, v, info):
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @property
    def key_schema(self) -> TableKeySchema:
        return TableKeySchema(partition_key=self.partition_key, sort_key=self.sort_key or None)

    @classmethod
    def from_model_settings(cls, settings: Dict[str, Any]) -> 'ModelSettings':
        """Build from a full model settings dict holding a ``dynamodb`` block.

        Raises:
            ValidationError: If the block is missing or incomplete
        """
        block = settings.get('dynamodb') if isinstance(settings, dict) else None
        if not isinstance(block, dict):
            raise ValidationError("Model settings have no 'dynamodb' block")
        try:
            return cls.model_validate(block)
        except PydanticValidationError as e:
            errors = {'.'.join(str(p) for p in err['loc']): err['msg'] for err in e.errors()}
            raise ValidationError(f"Invalid dynamodb model settings: {e.error_count()} error(s)", errors, e) from e
