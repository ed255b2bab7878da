"""
Tests for TaxonomyWriteApi: item expansion, bulk load and bulk teardown.
"""

from unittest.mock import Mock, patch

import pytest

from tests.helpers import TEST_ORG, TEST_PROGRAM

from taxonomy_store.core import BatchWriter, keys
from taxonomy_store.data import load_default_dataset
from taxonomy_store.exceptions import RetryExhaustedError
from taxonomy_store.handlers import TaxonomyWriteApi
from taxonomy_store.handlers.taxonomy.commands import LOAD_STAGE, TEARDOWN_STAGE


def table_contents(table):
    items = []
    response = table.scan()
    items.extend(response['Items'])
    while 'LastEvaluatedKey' in response:
        response = table.scan(ExclusiveStartKey=response['LastEvaluatedKey'])
        items.extend(response['Items'])
    return sorted(items, key=lambda item: (item['PK'], item['SK']))


class TestBuildItems:
    """Dataset expansion into table items."""

    def test_every_item_is_keyed_and_typed(self, write_api, small_dataset):
        items = write_api.build_items(small_dataset)

        assert len(items) == 19
        for item in items:
            assert {keys.PK, keys.SK, keys.GSI1_PK, keys.GSI1_SK} <= set(item)
            assert item['entity_type'] in {'Root', 'Rank', 'Requirement', 'Curriculum'}
            assert None not in item.values()

    def test_expansion_is_deterministic(self, write_api, small_dataset):
        assert write_api.build_items(small_dataset) == write_api.build_items(small_dataset)

    def test_primary_keys_are_unique(self, write_api, small_dataset):
        items = write_api.build_items(small_dataset)

        assert len({(item['PK'], item['SK']) for item in items}) == len(items)

    def test_org_defaults_to_configured_organization(self, write_api, small_dataset):
        root = write_api.build_items(small_dataset)[0]

        assert root['PK'] == f"ORG#{TEST_ORG}"
        assert root['SK'] == f"PROG#{TEST_PROGRAM}"
        assert root['GSI1SK'] == "#META"

    def test_explicit_org(self, write_api, small_dataset):
        root = write_api.build_items(small_dataset, org_id="another_org")[0]

        assert root['org_id'] == "another_org"
        assert root['PK'] == "ORG#another_org"

    def test_curriculum_index_key_uses_minimum_level(self, write_api, small_dataset):
        items = write_api.build_items(small_dataset)
        advanced = next(item for item in items if item.get('curriculum_id') == 'advanced_form')

        assert advanced['SK'] == 'CURR#Forms#advanced_form'
        assert advanced['GSI1SK'] == 'CURR#03#advanced_form'

    def test_reference_dataset_item_count(self, write_api):
        items = write_api.build_items(load_default_dataset(), org_id="org_shaolin")

        assert len(items) == 1 + 10 + 40 + 16


class TestBulkLoad:
    """Loading a dataset into the mocked table."""

    def test_report(self, write_api, small_dataset, taxonomy_table):
        report = write_api.bulk_load(small_dataset)

        assert report.stage == LOAD_STAGE
        assert report.items == 19
        assert report.batches == 1
        assert len(table_contents(taxonomy_table)) == 19

    def test_reference_dataset_uses_three_batches(self, write_api, taxonomy_table):
        report = write_api.bulk_load(load_default_dataset())

        assert report.items == 67
        assert report.batches == 3
        assert len(table_contents(taxonomy_table)) == 67

    def test_reload_is_idempotent(self, write_api, small_dataset, taxonomy_table):
        write_api.bulk_load(small_dataset)
        first = table_contents(taxonomy_table)

        write_api.bulk_load(small_dataset)

        assert table_contents(taxonomy_table) == first

    def test_stored_items_omit_absent_optionals(self, loaded_table):
        items = table_contents(loaded_table)
        root = next(item for item in items if item['entity_type'] == 'Root')
        first_requirement = next(
            item for item in items
            if item['entity_type'] == 'Requirement' and item['level'] == 1
        )

        assert 'lineage' not in root
        assert 'weapons_skill' not in first_requirement

    def test_retry_exhaustion_propagates(self, small_dataset):
        gateway = Mock()
        gateway.table_name = "test_rank_taxonomy"
        gateway.config.organization_id = TEST_ORG
        gateway.batch_write.side_effect = lambda requests: requests[:1]
        writer = BatchWriter(gateway, base_delay_seconds=0, max_jitter_seconds=0)

        with patch('taxonomy_store.core.batch_writer.time.sleep'):
            with pytest.raises(RetryExhaustedError) as exc_info:
                TaxonomyWriteApi(gateway, batch_writer=writer).bulk_load(small_dataset)

        assert exc_info.value.stage == LOAD_STAGE
        assert exc_info.value.unprocessed_count == 1
        assert gateway.batch_write.call_count == 6


class TestBulkTeardown:
    """Removing every item from the mocked table."""

    def test_teardown_empties_table(self, write_api, loaded_table):
        report = write_api.bulk_teardown()

        assert report.stage == TEARDOWN_STAGE
        assert report.items == 19
        assert report.batches == 1
        assert table_contents(loaded_table) == []

    def test_teardown_removes_items_of_every_program(self, write_api, loaded_table):
        loaded_table.put_item(Item={'PK': 'PROG#x', 'SK': 'RANK#01', 'GSI1PK': 'PROG#x', 'GSI1SK': 'RANK#01'})

        report = write_api.bulk_teardown()

        assert report.items == 20
        assert table_contents(loaded_table) == []

    def test_second_teardown_is_a_no_op(self, write_api, loaded_table):
        write_api.bulk_teardown()

        report = write_api.bulk_teardown()

        assert report.items == 0
        assert report.batches == 0

    def test_teardown_of_empty_table(self, write_api, taxonomy_table, caplog):
        with caplog.at_level("INFO"):
            report = write_api.bulk_teardown()

        assert report.items == 0
        assert "Nothing to delete" in caplog.text

    def test_each_page_is_deleted_before_next_scan(self):
        gateway = Mock()
        gateway.table_name = "test_rank_taxonomy"
        events = []
        pages = [
            {'Items': [{'PK': 'a', 'SK': '1'}], 'LastEvaluatedKey': {'PK': 'a', 'SK': '1'}},
            {'Items': [{'PK': 'b', 'SK': '2'}]},
        ]

        def scan(**kwargs):
            events.append('scan')
            return pages.pop(0)

        def batch_write(requests):
            events.append('delete')
            return []

        gateway.scan.side_effect = scan
        gateway.batch_write.side_effect = batch_write

        report = TaxonomyWriteApi(gateway).bulk_teardown()

        assert events == ['scan', 'delete', 'scan', 'delete']
        assert report.items == 2
        assert report.batches == 2
