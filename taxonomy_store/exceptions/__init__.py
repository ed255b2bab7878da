# Base exception class
from .base import TaxonomyStoreError

# Domain-specific exceptions
from .domain_exceptions import (
    ConfigurationError,
    ConflictError,
    ConnectionError,
    ItemNotFoundError,
    NotFoundError,
    RetryableError,
    RetryExhaustedError,
    ValidationError,
)

__all__ = [
    # Base exception
    "TaxonomyStoreError",

    # Domain exceptions (alphabetically ordered)
    "ConfigurationError",
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "NotFoundError",
    "RetryableError",
    "RetryExhaustedError",
    "ValidationError",
]
