# Base mixin
from .base import DynamoDBMixin, convert_dynamodb_numbers

# Stored entities and dataset
from .domain_models import (
    # Enums and per-category record
    CategoryValues,
    DemographicCategory,
    Difficulty,

    # Entities
    AnyTaxonomyEntity,
    CurriculumItem,
    Rank,
    Requirement,
    TaxonomyEntity,
    TaxonomyRoot,

    # Dataset
    RequirementDefinition,
    TaxonomyDataset,
)

# Result models
from .views import (
    SyncReport,
    TimeToRankView,
)

__all__ = [
    "DynamoDBMixin",
    "convert_dynamodb_numbers",

    "CategoryValues",
    "DemographicCategory",
    "Difficulty",

    "AnyTaxonomyEntity",
    "CurriculumItem",
    "Rank",
    "Requirement",
    "TaxonomyEntity",
    "TaxonomyRoot",

    "RequirementDefinition",
    "TaxonomyDataset",

    "SyncReport",
    "TimeToRankView",
]
