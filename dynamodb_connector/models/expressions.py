"""
Results of expression building, ready to splice into boto3 request kwargs.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

PARTITION_KEY_PLACEHOLDER = ":partitionKey"
SORT_KEY_PLACEHOLDER = ":sortKey"
RESERVED_PLACEHOLDERS = frozenset({PARTITION_KEY_PLACEHOLDER, SORT_KEY_PLACEHOLDER})

UPDATE_PREFIX = "set "


class ExpressionResult(BaseModel):
    """An expression string and the values bound to its placeholders."""

    expression: str = Field(description="Generated expression text")
    placeholders: Dict[str, Any] = Field(default_factory=dict, description="Placeholder name -> value")
    attribute_names: Dict[str, str] = Field(
        default_factory=dict, description="#alias -> attribute name, for reserved words only"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        """True when no clause was produced (a bare ``set `` counts as empty)."""
        return self.expression in ("", UPDATE_PREFIX)

    def to_update_params(self) -> Dict[str, Any]:
        """UpdateItem kwargs for this set clause."""
        params: Dict[str, Any] = {'UpdateExpression': self.expression}
        if self.placeholders:
            params['ExpressionAttributeValues'] = dict(self.placeholders)
        if self.attribute_names:
            params['ExpressionAttributeNames'] = dict(self.attribute_names)
        return params


class FilterExpressionResult(ExpressionResult):
    """Read-path result: ``expression`` holds the filter clause (possibly empty)."""

    key_condition_expression: str = Field(description="Key-condition clause")

    @property
    def filter_expression(self) -> str:
        return self.expression

    def to_query_params(self) -> Dict[str, Any]:
        """Query kwargs; FilterExpression and ExpressionAttributeNames are left out when empty."""
        params: Dict[str, Any] = {
            'KeyConditionExpression': self.key_condition_expression,
            'ExpressionAttributeValues': dict(self.placeholders),
        }
        if self.expression:
            params['FilterExpression'] = self.expression
        if self.attribute_names:
            params['ExpressionAttributeNames'] = dict(self.attribute_names)
        return params
