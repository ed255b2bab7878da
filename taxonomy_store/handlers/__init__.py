"""
Handler Layer for the Taxonomy Store

Application-layer handlers split into reads (queries.py) and writes
(commands.py), with derived aggregates built on top of the reads.

Architecture:
handlers/ (this layer) -> core/ (infrastructure) -> DynamoDB
handlers/ (this layer) <- models/ (domain models)
"""

from .taxonomy import (
    TaxonomyAggregates,
    TaxonomyReadApi,
    TaxonomyWriteApi,
    entity_from_item,
    validate_dataset,
)

__all__ = [
    'TaxonomyAggregates',
    'TaxonomyReadApi',
    'TaxonomyWriteApi',
    'entity_from_item',
    'validate_dataset',
]
