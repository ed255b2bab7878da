"""
Tests for TableGateway (core/table_gateway.py)

The gateway is a thin wrapper: lazy resource creation, marshalling of
written items, BatchWriteItem submission and error mapping.
"""

from decimal import Decimal
from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from taxonomy_store.config import TaxonomyStoreConfig
from taxonomy_store.core.table_gateway import (
    TableGateway,
    create_table_gateway,
    map_dynamodb_error,
    marshal_item,
)
from taxonomy_store.exceptions import (
    ConflictError,
    ConnectionError,
    ItemNotFoundError,
    NotFoundError,
    RetryableError,
    ValidationError,
)


def create_client_error(error_code: str, message: str = "Test error") -> ClientError:
    """Helper to create ClientError for testing."""
    return ClientError(
        error_response={
            'Error': {
                'Code': error_code,
                'Message': message
            }
        },
        operation_name='TestOperation'
    )


@pytest.fixture
def mock_config():
    """Configuration with fake credentials."""
    return TaxonomyStoreConfig(
        region_name="us-east-1",
        table_name="test_table",
        aws_access_key_id="fake_key",
        aws_secret_access_key="fake_secret",
        endpoint_url=None
    )


class TestTableGatewayInitialization:
    """Lazy creation of the boto3 resource and table."""

    def test_initialization(self, mock_config):
        gateway = TableGateway(mock_config)

        assert gateway.config == mock_config
        assert gateway.table_name == "test_table"
        assert gateway.index_name == "GSI1"
        assert gateway._dynamodb is None
        assert gateway._table is None

    def test_dynamodb_resource_created_once(self, mock_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_session_class.return_value = mock_session
            mock_session.resource.return_value = Mock()

            gateway = TableGateway(mock_config)
            first = gateway.dynamodb
            second = gateway.dynamodb

            assert first is second
            mock_session_class.assert_called_once()
            mock_session.resource.assert_called_once()

    def test_transport_settings_from_config(self, mock_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_session_class.return_value = mock_session

            TableGateway(mock_config).dynamodb

            _, kwargs = mock_session.resource.call_args
            assert kwargs['region_name'] == "us-east-1"
            assert 'endpoint_url' not in kwargs
            assert kwargs['config'].retries['max_attempts'] == mock_config.max_attempts

    def test_endpoint_override(self):
        config = TaxonomyStoreConfig.for_local_development()
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_session_class.return_value = mock_session

            TableGateway(config).dynamodb

            _, kwargs = mock_session.resource.call_args
            assert kwargs['endpoint_url'] == "http://localhost:8000"

    def test_session_failure_raises_connection_error(self, mock_config):
        with patch('boto3.Session', side_effect=Exception("no session")):
            gateway = TableGateway(mock_config)

            with pytest.raises(ConnectionError):
                gateway.dynamodb

    def test_factory(self, mock_config):
        gateway = create_table_gateway(mock_config)

        assert isinstance(gateway, TableGateway)
        assert gateway.table_name == "test_table"


class TestMarshalItem:
    """Write-side marshalling policy."""

    def test_none_values_are_dropped_recursively(self):
        item = {
            'PK': 'p',
            'lineage': None,
            'details': {'kept': 1, 'dropped': None},
            'tags': ['a', None],
        }

        assert marshal_item(item) == {'PK': 'p', 'details': {'kept': 1}, 'tags': ['a']}

    def test_floats_become_decimal(self):
        marshalled = marshal_item({'score': 1.5, 'level': 3, 'flag': False})

        assert marshalled['score'] == Decimal('1.5')
        assert marshalled['level'] == 3
        assert marshalled['flag'] is False


class TestBatchWrite:
    """BatchWriteItem submission."""

    def test_rejects_more_than_25_operations(self, mock_config):
        gateway = TableGateway(mock_config)
        gateway._dynamodb = Mock()
        requests = [{'DeleteRequest': {'Key': {'PK': str(i), 'SK': 'x'}}} for i in range(26)]

        with pytest.raises(ValidationError):
            gateway.batch_write(requests)

        gateway._dynamodb.batch_write_item.assert_not_called()

    def test_empty_batch_makes_no_call(self, mock_config):
        gateway = TableGateway(mock_config)
        gateway._dynamodb = Mock()

        assert gateway.batch_write([]) == []
        gateway._dynamodb.batch_write_item.assert_not_called()

    def test_returns_unprocessed_requests(self, mock_config):
        gateway = TableGateway(mock_config)
        gateway._dynamodb = Mock()
        leftover = {'PutRequest': {'Item': {'PK': 'b', 'SK': 'x'}}}
        gateway._dynamodb.batch_write_item.return_value = {
            'UnprocessedItems': {'test_table': [leftover]}
        }

        unprocessed = gateway.batch_write([
            {'PutRequest': {'Item': {'PK': 'a', 'SK': 'x', 'lineage': None}}},
            leftover,
        ])

        assert unprocessed == [leftover]
        sent = gateway._dynamodb.batch_write_item.call_args.kwargs['RequestItems']['test_table']
        assert sent[0] == {'PutRequest': {'Item': {'PK': 'a', 'SK': 'x'}}}

    def test_no_unprocessed_items(self, mock_config):
        gateway = TableGateway(mock_config)
        gateway._dynamodb = Mock()
        gateway._dynamodb.batch_write_item.return_value = {'UnprocessedItems': {}}

        assert gateway.batch_write([{'DeleteRequest': {'Key': {'PK': 'a', 'SK': 'x'}}}]) == []

    def test_client_error_is_mapped(self, mock_config):
        gateway = TableGateway(mock_config)
        gateway._dynamodb = Mock()
        gateway._dynamodb.batch_write_item.side_effect = create_client_error('ProvisionedThroughputExceededException')

        with pytest.raises(RetryableError):
            gateway.batch_write([{'DeleteRequest': {'Key': {'PK': 'a', 'SK': 'x'}}}])


class TestReadOperations:
    """GetItem/Query/Scan pass-through against the mocked table."""

    def test_get_item_returns_none_when_missing(self, gateway):
        assert gateway.get_item({'PK': 'missing', 'SK': 'missing'}) is None

    def test_get_item_round_trip(self, gateway, taxonomy_table):
        taxonomy_table.put_item(Item={'PK': 'a', 'SK': 'b', 'GSI1PK': 'a', 'GSI1SK': 'b', 'value': 7})

        item = gateway.get_item({'PK': 'a', 'SK': 'b'})

        assert item['value'] == 7

    def test_query_missing_table_raises_not_found(self, mock_dynamodb_resource):
        config = TaxonomyStoreConfig(
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
            endpoint_url=None,
            table_name="does_not_exist"
        )
        gateway = TableGateway(config)

        with pytest.raises(NotFoundError):
            gateway.query(KeyConditionExpression='PK = :pk', ExpressionAttributeValues={':pk': 'x'})

    def test_scan_without_projection_warns(self, gateway, caplog):
        with caplog.at_level("WARNING"):
            gateway.scan()

        assert "without ProjectionExpression" in caplog.text
        assert "without Limit" in caplog.text

    def test_network_failure_is_connection_error(self, mock_config):
        gateway = TableGateway(mock_config)
        gateway._table = Mock()
        gateway._table.query.side_effect = EndpointConnectionError(endpoint_url="http://localhost:8000")

        with pytest.raises(ConnectionError):
            gateway.query(KeyConditionExpression='PK = :pk')


class TestErrorMapping:
    """ClientError codes map to domain exceptions."""

    def test_conditional_check_failed(self):
        error = create_client_error('ConditionalCheckFailedException', 'The conditional request failed')

        result = map_dynamodb_error(error, 'PutItem', 'test_table', 'test-id')

        assert isinstance(result, ConflictError)
        assert 'test-id' in str(result)
        assert result.original_error == error

    def test_resource_not_found_with_resource_id(self):
        result = map_dynamodb_error(create_client_error('ResourceNotFoundException'), 'GetItem', 't', 'rid')

        assert isinstance(result, ItemNotFoundError)

    def test_resource_not_found_without_resource_id(self):
        result = map_dynamodb_error(create_client_error('ResourceNotFoundException'), 'Query', 't')

        assert isinstance(result, NotFoundError)
        assert result.context['resource_name'] == 't'

    @pytest.mark.parametrize("code", ['ValidationException', 'ItemCollectionSizeLimitExceededException'])
    def test_validation_errors(self, code):
        assert isinstance(map_dynamodb_error(create_client_error(code), 'Query', 't'), ValidationError)

    @pytest.mark.parametrize("code", [
        'ProvisionedThroughputExceededException', 'RequestLimitExceeded', 'ThrottlingException',
        'InternalServerError', 'ServiceUnavailable',
    ])
    def test_retryable_errors(self, code):
        assert isinstance(map_dynamodb_error(create_client_error(code), 'BatchWriteItem', 't'), RetryableError)

    @pytest.mark.parametrize("code", ['AccessDeniedException', 'UnrecognizedClientException'])
    def test_auth_errors(self, code):
        assert isinstance(map_dynamodb_error(create_client_error(code), 'Scan', 't'), ConnectionError)

    def test_unknown_code_defaults_to_connection_error(self):
        result = map_dynamodb_error(create_client_error('SomethingNew'), 'Scan', 't')

        assert isinstance(result, ConnectionError)
        assert 'Scan on t' in str(result)
