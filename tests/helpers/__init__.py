"""
Test helpers for the taxonomy store.

Dataset builders and table creation shared by the fixtures and tests.
"""

from .taxonomy_data import (
    TEST_ORG,
    TEST_PROGRAM,
    TEST_TABLE,
    create_taxonomy_table,
    make_raw_dataset,
    make_requirement,
    per_category,
)

__all__ = [
    'TEST_ORG',
    'TEST_PROGRAM',
    'TEST_TABLE',
    'create_taxonomy_table',
    'make_raw_dataset',
    'make_requirement',
    'per_category',
]
