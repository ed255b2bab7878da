from .config import TaxonomyStoreConfig
from .exceptions import (
    ConfigurationError,
    ConflictError,
    ConnectionError,
    ItemNotFoundError,
    RetryExhaustedError,
    TaxonomyStoreError,
    ValidationError,
)
from .models import (
    # Enums
    DemographicCategory,
    Difficulty,
    # Stored entities
    CurriculumItem,
    Rank,
    Requirement,
    TaxonomyRoot,
    # Dataset
    TaxonomyDataset,
    # Result models
    SyncReport,
    TimeToRankView,
)
from .core import (
    # Infrastructure
    BatchWriter,
    TableGateway,
    TableScanner,
    create_table_gateway,
)
from .handlers import (
    # Read, write and aggregate APIs
    TaxonomyAggregates,
    TaxonomyReadApi,
    TaxonomyWriteApi,
    validate_dataset,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "TaxonomyStoreConfig",

    # Exceptions
    "ConfigurationError",
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "RetryExhaustedError",
    "TaxonomyStoreError",
    "ValidationError",

    # Models
    "DemographicCategory",
    "Difficulty",
    "CurriculumItem",
    "Rank",
    "Requirement",
    "TaxonomyRoot",
    "TaxonomyDataset",
    "SyncReport",
    "TimeToRankView",

    # Infrastructure
    "BatchWriter",
    "TableGateway",
    "TableScanner",
    "create_table_gateway",

    # APIs
    "TaxonomyAggregates",
    "TaxonomyReadApi",
    "TaxonomyWriteApi",
    "validate_dataset",
]
