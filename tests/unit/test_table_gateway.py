"""
Tests for TableGateway (core/table_gateway.py)

The gateway passes built expressions straight to boto3 and maps errors.
"""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

from dynamodb_connector.config import DynamoDBConfig
from dynamodb_connector.core.table_gateway import (
    TableGateway,
    create_dynamodb_resource,
    create_table_gateway,
)
from dynamodb_connector.exceptions import ConflictError, ConnectionError, NotFoundError


def create_client_error(error_code: str, message: str = "Test error") -> ClientError:
    return ClientError(
        error_response={'Error': {'Code': error_code, 'Message': message}},
        operation_name='TestOperation'
    )


@pytest.fixture
def mock_config():
    """Mock configuration for testing."""
    return DynamoDBConfig(
        region_name="us-east-1",
        table_prefix="test",
        endpoint_url=None,
        aws_access_key_id="fake_key",
        aws_secret_access_key="fake_secret"
    )


@pytest.fixture
def mock_table():
    """Mock DynamoDB table resource."""
    table = Mock()
    table.query.return_value = {'Items': [], 'Count': 0}
    table.put_item.return_value = {}
    table.update_item.return_value = {'Attributes': {'owner_id': 'o-1', 'pet_age': 4}}
    return table


@pytest.fixture
def gateway(mock_config, mock_table):
    dynamodb = Mock()
    dynamodb.Table.return_value = mock_table
    return TableGateway(mock_config, "test_pets", dynamodb)


class TestResourceCreation:

    def test_create_resource_for_aws_region(self, mock_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session = mock_session_class.return_value

            create_dynamodb_resource(mock_config)

            mock_session_class.assert_called_once_with(
                region_name="us-east-1",
                aws_access_key_id="fake_key",
                aws_secret_access_key="fake_secret"
            )
            args, kwargs = mock_session.resource.call_args
            assert args == ('dynamodb',)
            assert 'endpoint_url' not in kwargs
            assert kwargs['region_name'] == "us-east-1"

    def test_create_resource_for_local_region(self):
        config = DynamoDBConfig(region_name="local", port=8123, endpoint_url=None)

        with patch('boto3.Session') as mock_session_class:
            create_dynamodb_resource(config)

            _, kwargs = mock_session_class.return_value.resource.call_args
            assert kwargs['endpoint_url'] == "http://localhost:8123"
            assert kwargs['region_name'] == "us-east-1"

    def test_connection_error(self, mock_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session_class.side_effect = Exception("Connection failed")

            with pytest.raises(ConnectionError, match="Failed to connect to DynamoDB"):
                create_dynamodb_resource(mock_config)


class TestTableGateway:

    def test_initialization(self, mock_config):
        gateway = TableGateway(mock_config, "test_table")

        assert gateway.config == mock_config
        assert gateway.table_name == "test_table"
        assert gateway._dynamodb is None
        assert gateway._table is None

    def test_lazy_resource_when_not_injected(self, mock_config):
        with patch('dynamodb_connector.core.table_gateway.create_dynamodb_resource') as mock_create:
            gateway = TableGateway(mock_config, "test_table")

            first = gateway.dynamodb
            second = gateway.dynamodb

            assert first is second
            mock_create.assert_called_once_with(mock_config)

    def test_injected_resource_is_used(self, gateway, mock_table):
        assert gateway.table is mock_table
        gateway.dynamodb.Table.assert_called_once_with("test_pets")

    def test_table_access_error(self, mock_config):
        dynamodb = Mock()
        dynamodb.Table.side_effect = Exception("boom")
        gateway = TableGateway(mock_config, "test_pets", dynamodb)

        with pytest.raises(ConnectionError, match="Failed to access table 'test_pets'"):
            _ = gateway.table

    def test_query_passes_params(self, gateway, mock_table):
        gateway.query(
            KeyConditionExpression="owner_id = :partitionKey",
            ExpressionAttributeValues={":partitionKey": "o-1"}
        )

        mock_table.query.assert_called_once_with(
            KeyConditionExpression="owner_id = :partitionKey",
            ExpressionAttributeValues={":partitionKey": "o-1"}
        )

    def test_query_maps_errors(self, gateway, mock_table):
        mock_table.query.side_effect = create_client_error('ResourceNotFoundException', 'Requested resource not found')

        with pytest.raises(NotFoundError, match="test_pets"):
            gateway.query(KeyConditionExpression="owner_id = :partitionKey")

    def test_put_item_with_condition(self, gateway, mock_table):
        gateway.put_item({'owner_id': 'o-1'}, condition_expression="attribute_not_exists(owner_id)")

        mock_table.put_item.assert_called_once_with(
            Item={'owner_id': 'o-1'},
            ConditionExpression="attribute_not_exists(owner_id)"
        )

    def test_put_item_conflict(self, gateway, mock_table):
        mock_table.put_item.side_effect = create_client_error('ConditionalCheckFailedException')

        with pytest.raises(ConflictError) as exc_info:
            gateway.put_item({'owner_id': 'o-1'}, resource_id='o-1')

        assert exc_info.value.resource_id == 'o-1'

    def test_update_item(self, gateway, mock_table):
        result = gateway.update_item(
            key={'owner_id': 'o-1'},
            update_expression="set pet_age = :pet_age",
            expression_attribute_values={':pet_age': 4},
            return_values='ALL_NEW'
        )

        assert result == {'owner_id': 'o-1', 'pet_age': 4}
        mock_table.update_item.assert_called_once_with(
            Key={'owner_id': 'o-1'},
            UpdateExpression="set pet_age = :pet_age",
            ExpressionAttributeValues={':pet_age': 4},
            ReturnValues='ALL_NEW'
        )

    def test_update_item_passes_attribute_names(self, gateway, mock_table):
        gateway.update_item(
            key={'owner_id': 'o-1'},
            update_expression="set #status = :status",
            expression_attribute_values={':status': 'active'},
            expression_attribute_names={'#status': 'status'},
        )

        _, kwargs = mock_table.update_item.call_args
        assert kwargs['ExpressionAttributeNames'] == {'#status': 'status'}

    def test_update_item_returns_none_by_default(self, gateway):
        assert gateway.update_item(key={'owner_id': 'o-1'}, update_expression="set a = :a") is None

    def test_create_table_gateway_applies_prefix(self, mock_config):
        gateway = create_table_gateway(mock_config, "pets")

        assert gateway.table_name == "test_pets"
