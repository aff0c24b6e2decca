import os
from unittest.mock import patch

import pytest

from dynamodb_connector.config import DynamoDBConfig


class TestDynamoDBConfig:
    """Test cases for DynamoDBConfig."""

    def test_default_config_is_local(self):
        with patch.dict(os.environ, {}, clear=True):
            config = DynamoDBConfig()

            assert config.region_name == "local"
            assert config.is_local
            assert config.max_pool_connections == 50
            assert config.retries == 3
            assert config.timeout_seconds == 30.0
            assert config.enable_debug_logging is False

    def test_config_from_env_vars(self):
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:4566",
            "DYNAMODB_TABLE_PREFIX": "myapp",
            "DYNAMODB_DEBUG_LOGGING": "true"
        }

        with patch.dict(os.environ, env_vars, clear=True):
            config = DynamoDBConfig.from_env()

            assert config.aws_access_key_id == "test_key"
            assert config.aws_secret_access_key == "test_secret"
            assert config.region_name == "eu-west-1"
            assert config.resolve_endpoint_url() == "http://localhost:4566"
            assert config.table_prefix == "myapp"
            assert config.enable_debug_logging is True

    def test_local_region_resolution(self):
        config = DynamoDBConfig(region_name="local", host="dynamo", port=9000, endpoint_url=None,
                                aws_access_key_id=None, aws_secret_access_key=None)

        assert config.resolve_endpoint_url() == "http://dynamo:9000"
        assert config.resolve_region_name() == "us-east-1"
        assert config.resolve_credentials() == {
            'aws_access_key_id': "fakeMyKeyId",
            'aws_secret_access_key': "fakeSecretAccessKey",
        }

    def test_aws_region_resolution(self):
        config = DynamoDBConfig(region_name="eu-north-1", endpoint_url=None,
                                aws_access_key_id=None, aws_secret_access_key=None)

        assert config.resolve_endpoint_url() is None
        assert config.resolve_region_name() == "eu-north-1"
        # Real regions fall back to the default boto3 credential chain
        assert config.resolve_credentials() == {'aws_access_key_id': None, 'aws_secret_access_key': None}

    def test_table_name_generation(self):
        assert DynamoDBConfig(table_prefix="myapp").get_table_name("pets") == "myapp_pets"
        assert DynamoDBConfig(table_prefix="").get_table_name("pets") == "pets"

    def test_from_settings_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = DynamoDBConfig.from_settings({})

            assert config.region_name == "local"
            assert config.resolve_endpoint_url() == "http://localhost:8000"
            assert config.aws_access_key_id is None
            assert config.resolve_credentials() == {
                'aws_access_key_id': "fakeMyKeyId",
                'aws_secret_access_key': "fakeSecretAccessKey",
            }

    def test_from_settings_real_region_uses_credential_chain(self):
        with patch.dict(os.environ, {}, clear=True):
            config = DynamoDBConfig.from_settings({"settings": {"region": "eu-west-1"}})

            assert config.resolve_endpoint_url() is None
            assert config.resolve_credentials() == {'aws_access_key_id': None, 'aws_secret_access_key': None}

    def test_from_settings_keeps_environment_credentials(self):
        env = {"AWS_ACCESS_KEY_ID": "AKIAENV", "AWS_SECRET_ACCESS_KEY": "env-secret"}
        with patch.dict(os.environ, env, clear=True):
            config = DynamoDBConfig.from_settings({"settings": {"region": "eu-west-1"}})

            assert config.resolve_credentials() == {
                'aws_access_key_id': "AKIAENV",
                'aws_secret_access_key': "env-secret",
            }

    def test_from_settings_block(self):
        with patch.dict(os.environ, {}, clear=True):
            config = DynamoDBConfig.from_settings({
                "settings": {
                    "host": "db.internal",
                    "port": 8001,
                    "region": "ap-south-1",
                    "accessKeyId": "AKIA",
                    "secretAccessKey": "secret",
                },
                "debug": True,
            })

            assert config.host == "db.internal"
            assert config.port == 8001
            assert config.region_name == "ap-south-1"
            assert config.aws_access_key_id == "AKIA"
            assert config.enable_debug_logging is True
            assert config.resolve_endpoint_url() is None

    def test_local_development_config(self):
        config = DynamoDBConfig.for_local_development()

        assert config.resolve_endpoint_url() == "http://localhost:8000"
        assert config.enable_debug_logging is True

    def test_region_validation(self):
        with pytest.raises(ValueError, match="AWS region name is required"):
            DynamoDBConfig(region_name="")

    def test_port_validation(self):
        with pytest.raises(ValueError, match="Port must be between"):
            DynamoDBConfig(port=70000)
