"""
Test configuration and fixtures for the taxonomy store.

Provides a moto-backed taxonomy table (PK/SK plus GSI1) and the APIs
wired to it. Dataset builders live in tests.helpers.
"""

import boto3
import pytest
from moto import mock_aws

from taxonomy_store import (
    TableGateway,
    TaxonomyAggregates,
    TaxonomyReadApi,
    TaxonomyStoreConfig,
    TaxonomyWriteApi,
    validate_dataset,
)
from taxonomy_store.core import BatchWriter
from tests.helpers import TEST_ORG, TEST_PROGRAM, TEST_TABLE, create_taxonomy_table, make_raw_dataset


@pytest.fixture
def store_config():
    """Store configuration for mocked testing."""
    return TaxonomyStoreConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        table_name=TEST_TABLE,
        index_name="GSI1",
        organization_id=TEST_ORG,
        program_id=TEST_PROGRAM,
        log_level="debug"
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def taxonomy_table(mock_dynamodb_resource, store_config):
    """Create the taxonomy table for testing."""
    return create_taxonomy_table(mock_dynamodb_resource, store_config.table_name, store_config.index_name)


@pytest.fixture
def gateway(store_config, taxonomy_table):
    """TableGateway bound to the mocked table."""
    return TableGateway(store_config)


@pytest.fixture
def read_api(gateway):
    return TaxonomyReadApi(gateway)


@pytest.fixture
def write_api(gateway):
    """Write API with backoff disabled."""
    return TaxonomyWriteApi(gateway, batch_writer=BatchWriter(gateway, base_delay_seconds=0, max_jitter_seconds=0))


@pytest.fixture
def aggregates(read_api):
    return TaxonomyAggregates(read_api)


@pytest.fixture
def raw_dataset():
    return make_raw_dataset()


@pytest.fixture
def small_dataset(raw_dataset):
    return validate_dataset(raw_dataset)


@pytest.fixture
def loaded_table(write_api, small_dataset, taxonomy_table):
    """Taxonomy table with the small dataset loaded."""
    write_api.bulk_load(small_dataset)
    return taxonomy_table
