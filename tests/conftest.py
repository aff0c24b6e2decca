"""
Test configuration and fixtures for the DynamoDB connector.

Provides key schemas, model settings and moto-backed tables.
"""

import sys
from pathlib import Path

# Add parent directory to path so we can import dynamodb_connector
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from dynamodb_connector import (
    DynamoDBConfig,
    DynamoDBConnector,
    ModelSettings,
    TableKeySchema,
)


@pytest.fixture
def schema():
    """Key schema with a partition key only."""
    return TableKeySchema(partition_key="partitionKey")


@pytest.fixture
def schema_with_sort():
    """Key schema with partition and sort key."""
    return TableKeySchema(partition_key="partitionKey", sort_key="sortKey")


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("DYNAMODB_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("DYNAMODB_TABLE_PREFIX", raising=False)


@pytest.fixture
def mock_dynamodb_config(aws_credentials):
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        table_prefix="test"
    )


@pytest.fixture
def mock_dynamodb_resource(aws_credentials):
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def pets_settings():
    """Composite-key model settings, as found in a model definition."""
    return ModelSettings.model_validate({
        "tableName": "pets",
        "partitionKey": "owner_id",
        "sortKey": "pet_id",
    })


@pytest.fixture
def owners_settings():
    """Partition-key-only model settings."""
    return ModelSettings(table_name="owners", partition_key="owner_id")


@pytest.fixture
def pets_table(mock_dynamodb_resource):
    """Create the pets table (owner_id HASH, pet_id RANGE)."""
    return mock_dynamodb_resource.create_table(
        TableName='test_pets',
        KeySchema=[
            {'AttributeName': 'owner_id', 'KeyType': 'HASH'},
            {'AttributeName': 'pet_id', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'owner_id', 'AttributeType': 'S'},
            {'AttributeName': 'pet_id', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def owners_table(mock_dynamodb_resource):
    """Create the owners table (owner_id HASH)."""
    return mock_dynamodb_resource.create_table(
        TableName='test_owners',
        KeySchema=[
            {'AttributeName': 'owner_id', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'owner_id', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def connector(mock_dynamodb_config, mock_dynamodb_resource, pets_table, owners_table):
    """Connector sharing the mocked DynamoDB resource."""
    return DynamoDBConnector(mock_dynamodb_config, dynamodb=mock_dynamodb_resource)


@pytest.fixture
def sample_pets():
    """Pets of two owners."""
    return [
        {"owner_id": "owner-1", "pet_id": "pet-1", "pet_kind": "cat", "pet_age": 3, "weight_kg": 4.5},
        {"owner_id": "owner-1", "pet_id": "pet-2", "pet_kind": "dog", "pet_age": 3, "weight_kg": 12.0},
        {"owner_id": "owner-1", "pet_id": "pet-3", "pet_kind": "cat", "pet_age": 7, "weight_kg": 5.25},
        {"owner_id": "owner-2", "pet_id": "pet-1", "pet_kind": "cat", "pet_age": 3, "weight_kg": 3.0},
    ]


@pytest.fixture
def populated_pets(connector, pets_settings, sample_pets):
    """Pets table filled with sample_pets."""
    for pet in sample_pets:
        connector.create(pets_settings, pet)
    return sample_pets
