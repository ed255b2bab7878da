"""
Core infrastructure components for the taxonomy table.

- keys: Single-table key encoding
- TableGateway: Thin wrapper over boto3 DynamoDB operations
- BatchWriter: Chunked BatchWriteItem with bounded retries
- TableScanner: Key-only paginated scan used by teardown
"""

from . import keys
from .batch_writer import BatchApplied, BatchOutcome, BatchRemaining, BatchWriter, WriteSummary
from .scanner import TableScanner
from .table_gateway import TableGateway, create_table_gateway, map_dynamodb_error, marshal_item

__all__ = [
    "keys",
    "BatchApplied",
    "BatchOutcome",
    "BatchRemaining",
    "BatchWriter",
    "WriteSummary",
    "TableScanner",
    "TableGateway",
    "create_table_gateway",
    "map_dynamodb_error",
    "marshal_item",
]
