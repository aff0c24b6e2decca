"""
Root of the connector's exception tree.

Translation errors (bad payloads, missing keys) are raised before any
request is sent. Store errors wrap the botocore ClientError they were
mapped from, so the DynamoDB error code stays reachable.
"""

from typing import Any, Dict, Optional


class DynamoDBConnectorError(Exception):
    """Base exception for all connector errors.

    Attributes:
        message: Human-readable error message
        original_error: Wrapped exception, usually a botocore ClientError
        context: Table name, key and similar details, rendered by ``str()``
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = context or {}
        super().__init__(message)

    @property
    def error_code(self) -> Optional[str]:
        """DynamoDB error code of the wrapped ClientError, if there is one.

        Follows ``original_error`` through nested connector errors.
        """
        original = self.original_error
        if isinstance(original, DynamoDBConnectorError):
            return original.error_code
        response = getattr(original, 'response', None)
        if not isinstance(response, dict):
            return None
        return response.get('Error', {}).get('Code')

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} (Context: {details})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, "
            f"original_error={self.original_error!r}, context={self.context!r})"
        )
