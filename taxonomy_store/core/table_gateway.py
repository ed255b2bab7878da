"""
Taxonomy Table Gateway

Thin wrapper around the boto3 DynamoDB resource for the single taxonomy
table. It is the only place that talks to the store:

1. Creates the boto3 session, resource and table handle once (lazily) and
   reuses them for every call made by the process
2. Applies the configured transport policy (attempt ceiling, timeouts,
   local endpoint override)
3. Applies the marshalling policy to everything written
4. Maps botocore ClientErrors to domain exceptions

There is no business logic here: callers (batch writer, scanner, read API)
compose these raw operations. The gateway is constructed explicitly and
passed to each of them; tests substitute a moto-backed or mocked instance.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import TaxonomyStoreConfig
from ..exceptions import (
    ConnectionError,
    ConflictError,
    ItemNotFoundError,
    NotFoundError,
    RetryableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Hard ceiling of BatchWriteItem
MAX_BATCH_OPERATIONS = 25


# Error codes grouped by the domain exception they become
CONFLICT_CODES = frozenset({
    'ConditionalCheckFailedException', 'TransactionConflictException', 'ResourceInUseException',
})
INVALID_REQUEST_CODES = frozenset({
    'ValidationException', 'ItemCollectionSizeLimitExceededException',
})
THROTTLING_CODES = frozenset({
    'ProvisionedThroughputExceededException', 'RequestLimitExceeded',
    'ThrottlingException', 'TooManyRequestsException',
})
UNAVAILABLE_CODES = frozenset({
    'InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException', 'RequestTimeoutException',
})
AUTH_CODES = frozenset({
    'UnrecognizedClientException', 'AccessDeniedException', 'ExpiredTokenException',
    'InvalidSignatureException', 'IncompleteSignatureException',
})


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Translate a botocore ClientError into a taxonomy store exception.

    Args:
        error: ClientError raised by boto3
        operation: DynamoDB operation name, e.g. "Query" or "BatchWriteItem"
        table_name: Table the operation ran against
        resource_id: Key or identifier of the item involved, when known

    Returns:
        The exception to raise; unknown codes become ConnectionError
    """
    details = error.response.get('Error', {})
    code = details.get('Code', 'Unknown')
    where = f"{operation} on {table_name}" + (f" [{resource_id}]" if resource_id else "")
    message = f"{where}: {details.get('Message', code)}"

    if code in CONFLICT_CODES:
        return ConflictError(f"{code} - {message}", resource_id, original_error=error)
    if code == 'ResourceNotFoundException':
        if resource_id:
            return ItemNotFoundError(table_name, {'resource_id': resource_id}, original_error=error)
        return NotFoundError(
            f"Missing table or index - {message}",
            resource_type='table',
            resource_name=table_name,
            original_error=error
        )
    if code in INVALID_REQUEST_CODES:
        return ValidationError(f"Request rejected ({code}) - {message}", original_error=error)
    if code in THROTTLING_CODES or code in UNAVAILABLE_CODES:
        return RetryableError(f"Store busy ({code}) - {message}", original_error=error)
    if code in AUTH_CODES:
        return ConnectionError(f"Credentials rejected ({code}) - {message}", original_error=error)

    logger.warning(f"Unmapped DynamoDB error code={code} operation={operation}")
    return ConnectionError(f"Store call failed ({code}) - {message}", original_error=error)


def marshal_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """Apply the write-side marshalling policy to one item.

    Attributes whose value is None are dropped (recursively, including
    inside maps and lists) instead of being written as NULL, and floats
    become Decimal because boto3 rejects float.
    """
    def convert(obj):
        if isinstance(obj, dict):
            return {k: convert(v) for k, v in obj.items() if v is not None}
        elif isinstance(obj, list):
            return [convert(list_item) for list_item in obj if list_item is not None]
        elif isinstance(obj, float):
            return Decimal(str(obj))
        return obj

    return convert(item)


class TableGateway:
    """
    Gateway for the taxonomy table and its secondary index.

    Holds one boto3 resource and table handle for the lifetime of the
    object. Exposes raw operations only; pagination, batching and retry
    policy belong to the callers.
    """

    def __init__(self, config: TaxonomyStoreConfig):
        """Initialize table gateway.

        Args:
            config: Validated store configuration
        """
        self.config = config
        self.table_name = config.table_name
        self.index_name = config.index_name
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            config = self.config
            resource_kwargs = {
                'region_name': config.region_name,
                # Transport-level attempt ceiling and timeouts
                'config': Config(
                    retries={'max_attempts': config.max_attempts, 'mode': 'standard'},
                    max_pool_connections=config.max_pool_connections,
                    connect_timeout=config.timeout_seconds,
                    read_timeout=config.timeout_seconds,
                ),
            }
            if config.endpoint_url:
                resource_kwargs['endpoint_url'] = config.endpoint_url

            try:
                session = boto3.Session(
                    aws_access_key_id=config.aws_access_key_id,
                    aws_secret_access_key=config.aws_secret_access_key,
                    region_name=config.region_name
                )
                self._dynamodb = session.resource('dynamodb', **resource_kwargs)
            except Exception as e:
                logger.error(f"DynamoDB resource creation failed region={config.region_name}: {e}")
                raise ConnectionError(f"Cannot reach DynamoDB in {config.region_name}: {e}", e) from e
            logger.debug(
                f"DynamoDB resource ready region={config.region_name} "
                f"endpoint={config.endpoint_url or 'default'} table={self.table_name}"
            )
        return self._dynamodb

    @property
    def table(self):
        """boto3 Table resource for the configured table.

        Building the handle makes no request; a missing table surfaces as
        NotFoundError on the first call.
        """
        if self._table is None:
            self._table = self.dynamodb.Table(self.table_name)
        return self._table

    def get_item(self, key: Dict[str, Any], projection_expression: Optional[str] = None,
                 expression_attribute_names: Optional[Dict[str, str]] = None) -> Optional[Dict[str, Any]]:
        """
        Fetch one item by exact primary key.

        Args:
            key: {'PK': ..., 'SK': ...}
            projection_expression: Optional attributes to return
            expression_attribute_names: Names used by the projection

        Returns:
            The item, or None when no item has that key
        """
        get_kwargs = {'Key': key}
        if projection_expression:
            get_kwargs['ProjectionExpression'] = projection_expression
            get_kwargs['ExpressionAttributeNames'] = expression_attribute_names
        try:
            response = self.table.get_item(**get_kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name) from e
        except BotoCoreError as e:
            raise ConnectionError(f"GetItem on {self.table_name} failed: {e}", e) from e
        return response.get('Item')

    def query(self, **kwargs) -> Dict[str, Any]:
        """
        Execute one DynamoDB Query page.

        Raw pass-through to boto3 with error mapping. Callers follow
        LastEvaluatedKey themselves.

        Example:
            response = gateway.query(
                KeyConditionExpression=Key('PK').eq('PROG#p') & Key('SK').begins_with('RANK#'),
            )
        """
        try:
            return self.table.query(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Query", self.table_name) from e
        except BotoCoreError as e:
            raise ConnectionError(f"Query on {self.table_name} failed: {e}", e) from e

    def scan(self, **kwargs) -> Dict[str, Any]:
        """
        Execute one DynamoDB Scan page.

        ⚠️  Only bulk teardown scans the table. Always pass a
        ProjectionExpression and a Limit.
        """
        try:
            for argument in ('ProjectionExpression', 'Limit'):
                if argument not in kwargs:
                    logger.warning(f"Scan on {self.table_name} without {argument}")

            return self.table.scan(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Scan", self.table_name) from e
        except BotoCoreError as e:
            raise ConnectionError(f"Scan on {self.table_name} failed: {e}", e) from e

    def batch_write(self, requests: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Submit one BatchWriteItem call against the taxonomy table.

        Args:
            requests: Up to 25 {'PutRequest': {'Item': ...}} or
                {'DeleteRequest': {'Key': ...}} operations

        Returns:
            The operations the store reported as unprocessed (possibly empty)

        Raises:
            ValidationError: More than 25 operations, or a rejected request
        """
        if len(requests) > MAX_BATCH_OPERATIONS:
            raise ValidationError(
                f"BatchWriteItem accepts at most {MAX_BATCH_OPERATIONS} operations, got {len(requests)}"
            )
        if not requests:
            return []

        marshalled = [
            {'PutRequest': {'Item': marshal_item(request['PutRequest']['Item'])}}
            if 'PutRequest' in request else request
            for request in requests
        ]

        try:
            response = self.dynamodb.batch_write_item(
                RequestItems={self.table_name: marshalled}
            )
        except ClientError as e:
            raise map_dynamodb_error(e, "BatchWriteItem", self.table_name) from e
        except BotoCoreError as e:
            raise ConnectionError(f"BatchWriteItem on {self.table_name} failed: {e}", e) from e

        unprocessed = response.get('UnprocessedItems') or {}
        return unprocessed.get(self.table_name, [])


def create_table_gateway(config: TaxonomyStoreConfig) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: Store configuration

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(config)
