import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()

LOCAL_REGION = "local"
LOCAL_SIGNING_REGION = "us-east-1"
LOCAL_ACCESS_KEY_ID = "fakeMyKeyId"
LOCAL_SECRET_ACCESS_KEY = "fakeSecretAccessKey"


class DynamoDBConfig(BaseModel):
    """Configuration for the DynamoDB connection.

    The pseudo-region ``local`` targets DynamoDB Local on ``host:port``.
    """

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", LOCAL_REGION),
        description="AWS region name, or 'local' for DynamoDB Local"
    )

    # DynamoDB Local settings
    host: str = Field(default="localhost", description="DynamoDB Local host")
    port: int = Field(default=8000, description="DynamoDB Local port")

    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="Explicit endpoint URL, overrides host/port"
    )

    table_prefix: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_PREFIX", ""),
        description="Prefix to add to all table names"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts botocore makes for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true",
        description="Log built expressions at DEBUG level"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        if not 0 < v < 65536:
            raise ValueError(f"Port must be between 1 and 65535, got {v}")
        return v

    @property
    def is_local(self) -> bool:
        return self.region_name == LOCAL_REGION

    def resolve_endpoint_url(self) -> Optional[str]:
        """Return the endpoint boto3 should talk to.

        None lets botocore pick the regional AWS endpoint.
        """
        if self.endpoint_url:
            return self.endpoint_url
        if self.is_local:
            return f"http://{self.host}:{self.port}"
        return None

    def resolve_region_name(self) -> str:
        """Region used to sign requests; DynamoDB Local accepts any real region."""
        return LOCAL_SIGNING_REGION if self.is_local else self.region_name

    def resolve_credentials(self) -> Dict[str, Optional[str]]:
        """Credentials for the boto3 session.

        DynamoDB Local needs some credentials but never checks them.
        """
        access_key = self.aws_access_key_id
        secret_key = self.aws_secret_access_key
        if self.is_local:
            access_key = access_key or LOCAL_ACCESS_KEY_ID
            secret_key = secret_key or LOCAL_SECRET_ACCESS_KEY
        return {
            'aws_access_key_id': access_key,
            'aws_secret_access_key': secret_key,
        }

    def get_table_name(self, base_name: str) -> str:
        """Get the full table name with prefix.

        Args:
            base_name: Table name from the model settings

        Returns:
            Prefixed table name
        """
        if self.table_prefix:
            return f"{self.table_prefix}_{base_name}"
        return base_name

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        """Create configuration from environment variables."""
        return cls()

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'DynamoDBConfig':
        """Create configuration from data-source settings.

        Accepts the shape ``{"settings": {"host", "port", "region",
        "accessKeyId", "secretAccessKey"}, "debug": bool}``. A missing
        ``settings`` block means DynamoDB Local. Credentials missing from the
        block fall back to the environment; for a real region that leaves
        them to the boto3 credential chain.

        Args:
            settings: Data-source settings dictionary

        Returns:
            DynamoDBConfig instance
        """
        inner = settings.get('settings') or {}
        values: Dict[str, Any] = {
            'host': inner.get('host') or "localhost",
            'port': inner.get('port') or 8000,
            'region_name': inner.get('region') or settings.get('region') or LOCAL_REGION,
        }
        # Fake local keys are added by resolve_credentials, never here
        if inner.get('accessKeyId'):
            values['aws_access_key_id'] = inner['accessKeyId']
        if inner.get('secretAccessKey'):
            values['aws_secret_access_key'] = inner['secretAccessKey']
        if settings.get('endpoint'):
            values['endpoint_url'] = settings['endpoint']
        if settings.get('tablePrefix'):
            values['table_prefix'] = settings['tablePrefix']
        if 'debug' in settings:
            values['enable_debug_logging'] = bool(settings['debug'])
        return cls(**values)

    @classmethod
    def for_local_development(cls) -> 'DynamoDBConfig':
        """Create configuration for DynamoDB Local on localhost:8000."""
        return cls(
            aws_access_key_id=LOCAL_ACCESS_KEY_ID,
            aws_secret_access_key=LOCAL_SECRET_ACCESS_KEY,
            region_name=LOCAL_REGION,
            endpoint_url=None,
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
