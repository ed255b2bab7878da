"""
Taxonomy Write API

Bulk operations replacing the taxonomy wholesale:
- bulk_load: expand a validated dataset into items and put them all
- bulk_teardown: scan every key in the table and delete it

There are no single-item mutations. Both operations are idempotent:
keys are derived from the entity identifiers only, so a second load
overwrites the same items, and a second teardown finds nothing to delete.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ...core import BatchWriter, TableGateway, TableScanner, marshal_item
from ...exceptions import ValidationError
from ...models import SyncReport, TaxonomyDataset

logger = logging.getLogger(__name__)

LOAD_STAGE = "bulk-load"
TEARDOWN_STAGE = "bulk-teardown"


def validate_dataset(raw: Dict[str, Any]) -> TaxonomyDataset:
    """
    Build a TaxonomyDataset from plain data.

    Args:
        raw: Dataset as nested dicts and lists

    Returns:
        Validated, immutable dataset

    Raises:
        ValidationError: With the pydantic error list when any rule fails
    """
    try:
        return TaxonomyDataset.model_validate(raw)
    except PydanticValidationError as e:
        logger.error(f"Dataset validation failed errors={e.error_count()}")
        raise ValidationError(
            f"Invalid taxonomy dataset: {e.error_count()} error(s)",
            errors=e.errors(include_url=False),
            original_error=e
        ) from e


class TaxonomyWriteApi:
    """
    Write-only API for loading and removing the taxonomy.

    The batch writer and scanner are built on the same gateway unless
    supplied, so tests can inject instances with a short backoff or a
    small page size.
    """

    def __init__(
        self,
        gateway: TableGateway,
        batch_writer: Optional[BatchWriter] = None,
        scanner: Optional[TableScanner] = None
    ):
        self.gateway = gateway
        self.batch_writer = batch_writer or BatchWriter(gateway)
        self.scanner = scanner or TableScanner(gateway)

    def build_items(self, dataset: TaxonomyDataset, org_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Expand a dataset into the complete items written by a load.

        Each item carries its entity attributes, entity_type and the
        PK/SK/GSI1PK/GSI1SK key attributes. The output depends on the
        dataset and organization only.
        """
        org_id = org_id or self.gateway.config.organization_id
        return [marshal_item(entity.to_table_item()) for entity in dataset.to_entities(org_id)]

    def bulk_load(self, dataset: TaxonomyDataset, org_id: Optional[str] = None) -> SyncReport:
        """
        Write every entity of the dataset.

        Returns:
            SyncReport with the item and batch counts

        Raises:
            RetryExhaustedError: A batch could not be fully applied
        """
        items = self.build_items(dataset, org_id)
        logger.info(
            f"Loading taxonomy stage={LOAD_STAGE} program={dataset.program_id} "
            f"version={dataset.version} count={len(items)}"
        )
        summary = self.batch_writer.put_all(items, LOAD_STAGE)
        logger.info(f"Load complete stage={LOAD_STAGE} processed={summary.processed} batches={summary.batches}")
        return SyncReport(stage=LOAD_STAGE, items=summary.processed, batches=summary.batches)

    def bulk_teardown(self) -> SyncReport:
        """
        Delete every item in the table, whatever its kind.

        Each scanned page is deleted before the next page is requested.

        Returns:
            SyncReport with the deleted item and batch counts (zero on an empty table)
        """
        processed = 0
        batches = 0
        for page in self.scanner.pages():
            summary = self.batch_writer.delete_all(page, TEARDOWN_STAGE)
            processed += summary.processed
            batches += summary.batches

        if processed == 0:
            logger.info(f"Nothing to delete stage={TEARDOWN_STAGE} table={self.gateway.table_name}")
        else:
            logger.info(f"Teardown complete stage={TEARDOWN_STAGE} processed={processed} batches={batches}")
        return SyncReport(stage=TEARDOWN_STAGE, items=processed, batches=batches)
