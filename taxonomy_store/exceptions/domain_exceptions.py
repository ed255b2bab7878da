"""
Domain-Specific Exceptions for the Taxonomy Store

All exceptions extend TaxonomyStoreError so the command entry points can
catch a single type, log its context and set the exit code.

Organized by category:
1. Input Errors (validation, configuration)
2. Resource Not Found Errors
3. Conflict Errors
4. Infrastructure and Retry Errors
"""

from typing import Any, Dict, List, Optional

from .base import TaxonomyStoreError


# =============================================================================
# Input Errors
# =============================================================================

class ValidationError(TaxonomyStoreError):
    """Raised when an entity, dataset or argument fails structural checks.

    Used for:
    - Pydantic model validation failures on taxonomy entities
    - Cross-entity dataset rules (contiguous levels, requirement coverage)
    - Key encoding inputs outside the encodable range
    - Malformed store requests (oversized batches)
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Field-level validation errors, pydantic style
            original_error: The original exception that caused this error
        """
        self.errors = errors or []
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class ConfigurationError(TaxonomyStoreError):
    """Raised when required settings are missing or invalid.

    Always raised before any store I/O is attempted.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, original_error: Optional[Exception] = None):
        self.errors = errors or []
        context = {}
        if self.errors:
            context['settings'] = sorted({str((err.get('loc') or ('?',))[0]) for err in self.errors})
        super().__init__(message, original_error, context)


# =============================================================================
# Resource Not Found Errors
# =============================================================================

class ItemNotFoundError(TaxonomyStoreError):
    """Raised when a specific item is not found in the table."""

    def __init__(self, table_name: str, key: dict, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            table_name: Name of the DynamoDB table
            key: The key (or lookup description) that was not found
            original_error: The original exception that caused this error
        """
        self.table_name = table_name
        self.key = key
        message = f"Item not found in table '{table_name}' with key: {key}"
        context = {
            'table_name': table_name,
            'key': key
        }
        super().__init__(message, original_error, context)


class NotFoundError(TaxonomyStoreError):
    """Raised when a table or index does not exist."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_name: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_type = resource_type
        self.resource_name = resource_name
        context = {}
        if resource_type:
            context['resource_type'] = resource_type
        if resource_name:
            context['resource_name'] = resource_name
        super().__init__(message, original_error, context)


# =============================================================================
# Conflict Errors
# =============================================================================

class ConflictError(TaxonomyStoreError):
    """Raised when the store rejects a request because of a competing write.

    Used for:
    - ConditionalCheckFailedException
    - TransactionConflictException
    - ResourceInUseException (table being created or deleted)
    """

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


# =============================================================================
# Infrastructure and Retry Errors
# =============================================================================

class ConnectionError(TaxonomyStoreError):
    """Raised when the store cannot be reached or rejects the credentials.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures
    - Invalid endpoint configurations
    - Unrecognized service error codes
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(TaxonomyStoreError):
    """Raised when the store reports throttling or a temporary outage.

    The transport layer has already spent its own attempts by the time this
    surfaces; callers re-run the command.
    """

    def __init__(self, message: str, retry_after_seconds: Optional[int] = None, original_error: Optional[Exception] = None):
        self.retry_after_seconds = retry_after_seconds
        context = {}
        if retry_after_seconds:
            context['retry_after_seconds'] = retry_after_seconds
        super().__init__(message, original_error, context)


class RetryExhaustedError(TaxonomyStoreError):
    """Raised when a batch still has unapplied operations after the last retry.

    Fatal for the whole run: the bulk load or teardown aborts instead of
    completing partially.
    """

    def __init__(self, stage: str, unprocessed_count: int, attempts: int):
        """Initialize retry exhaustion error.

        Args:
            stage: Run stage that was executing (e.g. 'bulk-load')
            unprocessed_count: Operations still not applied by the store
            attempts: Total batch calls made for the failing chunk
        """
        self.stage = stage
        self.unprocessed_count = unprocessed_count
        self.attempts = attempts
        message = f"{unprocessed_count} items still unprocessed after {attempts} attempts"
        context = {
            'stage': stage,
            'unprocessed_count': unprocessed_count,
            'attempts': attempts,
        }
        super().__init__(message, context=context)
