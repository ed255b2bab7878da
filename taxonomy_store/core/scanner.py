"""
Table Scanner

Enumerates the primary keys of every item in the table, one page at a
time. Only the bulk teardown uses it: each page is deleted before the
next one is requested.
"""

import logging
from typing import Any, Dict, Iterator, List

from ..utils import build_projection_expression
from . import keys
from .table_gateway import TableGateway

logger = logging.getLogger(__name__)


class TableScanner:
    """Paginated key-only scan of the taxonomy table."""

    def __init__(self, gateway: TableGateway, page_size: int = 100):
        self.gateway = gateway
        self.page_size = page_size

    def pages(self) -> Iterator[List[Dict[str, Any]]]:
        """
        Yield lists of {'PK': ..., 'SK': ...} until the table is exhausted.

        The continuation key of each page is handed back verbatim as
        ExclusiveStartKey; the scan ends when a page carries none.
        """
        projection, names = build_projection_expression([keys.PK, keys.SK])
        scan_kwargs = {
            'ProjectionExpression': projection,
            'ExpressionAttributeNames': names,
            'Limit': self.page_size,
        }

        page_number = 0
        while True:
            response = self.gateway.scan(**scan_kwargs)
            page_number += 1
            items = response.get('Items', [])
            logger.debug(f"Scanned page={page_number} count={len(items)}")
            if items:
                yield items

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return
            scan_kwargs['ExclusiveStartKey'] = last_key
