"""
Taxonomy read, write and aggregate APIs.

Queries (Read Operations):
- Exact-key and prefix lookups matching the table's key design
- GSI1 query for every entity of a program
- Full pagination; results are models

Commands (Write Operations):
- Bulk load of a validated dataset
- Bulk teardown of the whole table

Usage:
    gateway = create_table_gateway(config)
    read_api = TaxonomyReadApi(gateway)
    write_api = TaxonomyWriteApi(gateway)
    aggregates = TaxonomyAggregates(read_api)
"""

from .aggregates import TaxonomyAggregates
from .commands import TaxonomyWriteApi, validate_dataset
from .queries import TaxonomyReadApi, entity_from_item

__all__ = [
    "TaxonomyAggregates",
    "TaxonomyReadApi",
    "TaxonomyWriteApi",
    "entity_from_item",
    "validate_dataset",
]
