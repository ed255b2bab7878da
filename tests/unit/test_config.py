import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from taxonomy_store.config import TaxonomyStoreConfig
from taxonomy_store.exceptions import ConfigurationError

CONFIG_ENV_VARS = [
    "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_REGION", "AWS_ENDPOINT_URL",
    "DYNAMODB_ENDPOINT_URL", "DYNAMODB_TABLE_NAME", "DYNAMODB_GSI1_NAME", "ORGANIZATION_ID",
    "PROGRAM_ID", "LOG_LEVEL", "DYNAMODB_MAX_ATTEMPTS",
]


@pytest.fixture
def clean_env():
    """Environment without any store settings."""
    env = {key: value for key, value in os.environ.items() if key not in CONFIG_ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestTaxonomyStoreConfig:
    """Test cases for TaxonomyStoreConfig."""

    def test_default_config(self, clean_env):
        """Test default configuration values."""
        config = TaxonomyStoreConfig.from_env()

        assert config.region_name == "us-east-1"
        assert config.endpoint_url is None
        assert config.table_name == "rank-taxonomy"
        assert config.index_name == "GSI1"
        assert config.organization_id == "org_default_001"
        assert config.program_id == "shaolin_wing_chun"
        assert config.max_attempts == 3
        assert config.log_level == "info"

    def test_config_from_env_vars(self, clean_env):
        """Test configuration from environment variables."""
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "DYNAMODB_TABLE_NAME": "taxonomy-staging",
            "DYNAMODB_GSI1_NAME": "ByProgram",
            "ORGANIZATION_ID": "org_42",
            "PROGRAM_ID": "karate",
            "LOG_LEVEL": "DEBUG",
            "DYNAMODB_MAX_ATTEMPTS": "5",
        }

        with patch.dict(os.environ, env_vars):
            config = TaxonomyStoreConfig.from_env()

        assert config.aws_access_key_id == "test_key"
        assert config.aws_secret_access_key == "test_secret"
        assert config.region_name == "eu-west-1"
        assert config.endpoint_url == "http://localhost:8000"
        assert config.table_name == "taxonomy-staging"
        assert config.index_name == "ByProgram"
        assert config.organization_id == "org_42"
        assert config.program_id == "karate"
        assert config.log_level == "debug"
        assert config.max_attempts == 5

    def test_aws_endpoint_url_takes_precedence(self, clean_env):
        env_vars = {
            "AWS_ENDPOINT_URL": "http://localstack:4566",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
        }

        with patch.dict(os.environ, env_vars):
            config = TaxonomyStoreConfig.from_env()

        assert config.endpoint_url == "http://localstack:4566"

    def test_warn_is_accepted_as_warning(self):
        config = TaxonomyStoreConfig(log_level="warn")
        assert config.log_level == "warning"

    def test_invalid_log_level(self, clean_env):
        with patch.dict(os.environ, {"LOG_LEVEL": "verbose"}):
            with pytest.raises(ConfigurationError) as exc_info:
                TaxonomyStoreConfig.from_env()

        assert exc_info.value.context['settings'] == ['log_level']

    def test_invalid_endpoint_url(self, clean_env):
        with patch.dict(os.environ, {"AWS_ENDPOINT_URL": "localhost:8000"}):
            with pytest.raises(ConfigurationError) as exc_info:
                TaxonomyStoreConfig.from_env()

        assert 'endpoint_url' in exc_info.value.context['settings']

    def test_empty_table_name_rejected(self, clean_env):
        with patch.dict(os.environ, {"DYNAMODB_TABLE_NAME": ""}):
            with pytest.raises(ConfigurationError):
                TaxonomyStoreConfig.from_env()

    def test_every_invalid_environment_setting_is_reported(self, clean_env):
        env_vars = {
            "DYNAMODB_TABLE_NAME": "",
            "LOG_LEVEL": "bogus",
            "AWS_ENDPOINT_URL": "ftp://nope",
            "DYNAMODB_MAX_ATTEMPTS": "0",
        }

        with patch.dict(os.environ, env_vars):
            with pytest.raises(ConfigurationError) as exc_info:
                TaxonomyStoreConfig.from_env()

        assert exc_info.value.context['settings'] == ['endpoint_url', 'log_level', 'max_attempts', 'table_name']

    def test_non_numeric_max_attempts(self, clean_env):
        with patch.dict(os.environ, {"DYNAMODB_MAX_ATTEMPTS": "many"}):
            with pytest.raises(ConfigurationError):
                TaxonomyStoreConfig.from_env()

    def test_zero_max_attempts_rejected(self):
        with pytest.raises(PydanticValidationError):
            TaxonomyStoreConfig(max_attempts=0)

    def test_config_is_frozen(self):
        config = TaxonomyStoreConfig()
        with pytest.raises(PydanticValidationError):
            config.table_name = "other"

    def test_for_local_development(self):
        """Test local development configuration."""
        config = TaxonomyStoreConfig.for_local_development(table_name="local-taxonomy")

        assert config.endpoint_url == "http://localhost:8000"
        assert config.aws_access_key_id == "local"
        assert config.log_level == "debug"
        assert config.table_name == "local-taxonomy"
