#!/usr/bin/env python3
"""
Basic usage example for the taxonomy store.

This example walks through the life of a taxonomy table:
1. Setting up configuration and the table gateway
2. Validating and bulk loading the bundled Wing Chun dataset
3. Reading ranks, requirements and curriculum
4. Computing the fastest path to the terminal rank
5. Tearing the table down again
"""

from taxonomy_store import (
    DemographicCategory,
    TaxonomyAggregates,
    TaxonomyReadApi,
    TaxonomyStoreConfig,
    TaxonomyWriteApi,
    create_table_gateway,
)
from taxonomy_store.data import load_default_dataset


def main():
    """Load, query and remove the bundled taxonomy."""

    # 1. Configure the store
    print("1. Setting up configuration...")
    config = TaxonomyStoreConfig.from_env()  # Uses environment variables

    # For DynamoDB Local, you might use:
    # config = TaxonomyStoreConfig.for_local_development()

    gateway = create_table_gateway(config)
    read_api = TaxonomyReadApi(gateway)
    write_api = TaxonomyWriteApi(gateway)
    aggregates = TaxonomyAggregates(read_api)

    # 2. Validate and load
    print("2. Loading dataset...")
    dataset = load_default_dataset()
    report = write_api.bulk_load(dataset, config.organization_id)
    print(f"Loaded {report.items} items in {report.batches} batches")

    # 3. Read back
    print("3. Reading taxonomy...")
    root = read_api.get_root(config.organization_id, dataset.program_id)
    print(f"Program: {root.name} ({root.total_levels} levels, version {root.version})")

    for rank in read_api.list_ranks(dataset.program_id):
        print(f"  {rank.code}: {rank.name} ({rank.months_minimum}-{rank.months_maximum} months)")

    requirement = read_api.get_requirement(dataset.program_id, 3, DemographicCategory.ADULT)
    print(f"Level 3 Adult: {requirement.attendance} classes, techniques {requirement.techniques}")

    forms = read_api.list_curriculum(dataset.program_id, category="Forms", max_level=5)
    print(f"Forms available by level 5: {[item.name for item in forms]}")

    # 4. Aggregate
    print("4. Time to terminal rank...")
    for category in DemographicCategory:
        view = aggregates.time_to_terminal_rank(category, dataset.program_id)
        print(f"  {category.value}: {view.display}")

    # 5. Teardown
    print("5. Removing every item...")
    report = write_api.bulk_teardown()
    print(f"Deleted {report.items} items in {report.batches} batches")


if __name__ == "__main__":
    main()
