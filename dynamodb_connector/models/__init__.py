from .expressions import (
    PARTITION_KEY_PLACEHOLDER,
    SORT_KEY_PLACEHOLDER,
    ExpressionResult,
    FilterExpressionResult,
)
from .schema import ModelSettings, TableKeySchema

__all__ = [
    # Key metadata
    "ModelSettings",
    "TableKeySchema",

    # Expression results
    "ExpressionResult",
    "FilterExpressionResult",
    "PARTITION_KEY_PLACEHOLDER",
    "SORT_KEY_PLACEHOLDER",
]
