"""
Batch Writer

Durably applies a list of PutRequest/DeleteRequest operations through
BatchWriteItem:

1. Operations are partitioned into chunks of at most 25
2. Each chunk is submitted with ``attempt()``, which reports either
   ``BatchApplied`` or ``BatchRemaining`` (the subset the store did not apply)
3. Remaining operations are resubmitted after exponential backoff with
   jitter, up to ``max_retries`` times beyond the first call
4. Operations still unapplied after the last retry raise
   ``RetryExhaustedError`` and abort the run

Chunks are driven one after the other; a chunk is fully applied before the
next one is submitted. Keys are deterministic, so re-applying an operation
that already succeeded is harmless.
"""

import logging
import random
import time
from typing import Any, Dict, Iterable, List, NamedTuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import RetryExhaustedError, ValidationError
from .table_gateway import MAX_BATCH_OPERATIONS, TableGateway

logger = logging.getLogger(__name__)


class BatchApplied(BaseModel):
    """Every operation of the submitted chunk was applied."""

    attempts: int = Field(..., ge=1, description="Calls made for the chunk so far")

    model_config = ConfigDict(frozen=True)


class BatchRemaining(BaseModel):
    """The store left part of the chunk unapplied."""

    remaining: List[Dict[str, Any]] = Field(..., min_length=1)
    attempts: int = Field(..., ge=1, description="Calls made for the chunk so far")

    model_config = ConfigDict(frozen=True)


BatchOutcome = Union[BatchApplied, BatchRemaining]


class WriteSummary(NamedTuple):
    processed: int
    batches: int


class BatchWriter:
    """
    Chunked BatchWriteItem driver with bounded retries.

    The retry policy here sits above the transport-level retries configured
    on the gateway: botocore retries failed HTTP calls, this class retries
    operations the store accepted the call for but did not apply.
    """

    def __init__(
        self,
        gateway: TableGateway,
        chunk_size: int = MAX_BATCH_OPERATIONS,
        max_retries: int = 5,
        base_delay_seconds: float = 0.2,
        max_jitter_seconds: float = 0.1
    ):
        if chunk_size < 1 or chunk_size > MAX_BATCH_OPERATIONS:
            raise ValidationError(f"chunk_size must be between 1 and {MAX_BATCH_OPERATIONS}, got {chunk_size}")
        if max_retries < 0:
            raise ValidationError(f"max_retries must be >= 0, got {max_retries}")
        self.gateway = gateway
        self.chunk_size = chunk_size
        self.max_retries = max_retries
        self.base_delay_seconds = base_delay_seconds
        self.max_jitter_seconds = max_jitter_seconds

    def attempt(self, requests: List[Dict[str, Any]], n: int) -> BatchOutcome:
        """Submit one BatchWriteItem call for ``requests``.

        Args:
            requests: Operations of one chunk (at most 25)
            n: Zero-based attempt number for this chunk

        Returns:
            BatchApplied, or BatchRemaining carrying the unapplied operations
        """
        unprocessed = self.gateway.batch_write(requests)
        if not unprocessed:
            return BatchApplied(attempts=n + 1)
        return BatchRemaining(remaining=unprocessed, attempts=n + 1)

    def backoff_seconds(self, n: int) -> float:
        """Delay before retry n+1: base * 2^n plus uniform jitter."""
        return self.base_delay_seconds * (2 ** n) + random.uniform(0, self.max_jitter_seconds)

    def _drive(self, requests: List[Dict[str, Any]], n: int, stage: str) -> int:
        """Retry a chunk until applied; returns the number of calls made."""
        outcome = self.attempt(requests, n)
        if isinstance(outcome, BatchApplied):
            return outcome.attempts

        if n >= self.max_retries:
            logger.error(
                f"Batch retries exhausted stage={stage} count={len(outcome.remaining)} "
                f"attempts={outcome.attempts}"
            )
            raise RetryExhaustedError(stage, len(outcome.remaining), outcome.attempts)

        delay = self.backoff_seconds(n)
        logger.warning(
            f"Retrying unprocessed items stage={stage} count={len(outcome.remaining)} "
            f"attempt={n + 1}/{self.max_retries} delay={delay:.2f}s"
        )
        time.sleep(delay)
        return self._drive(outcome.remaining, n + 1, stage)

    def chunks(self, requests: List[Dict[str, Any]]) -> List[List[Dict[str, Any]]]:
        return [
            requests[start:start + self.chunk_size]
            for start in range(0, len(requests), self.chunk_size)
        ]

    def write(self, requests: Iterable[Dict[str, Any]], stage: str) -> WriteSummary:
        """
        Apply every operation, chunk by chunk.

        Args:
            requests: PutRequest/DeleteRequest operations
            stage: Run stage name used in progress and error reporting

        Returns:
            WriteSummary(processed, batches)

        Raises:
            RetryExhaustedError: A chunk could not be fully applied
        """
        chunks = self.chunks(list(requests))
        processed = 0
        for index, chunk in enumerate(chunks, start=1):
            self._drive(chunk, 0, stage)
            processed += len(chunk)
            logger.info(f"Batch applied stage={stage} batch={index} of={len(chunks)} processed={processed}")
        return WriteSummary(processed=processed, batches=len(chunks))

    def put_all(self, items: Iterable[Dict[str, Any]], stage: str) -> WriteSummary:
        """Create (or overwrite) every item."""
        return self.write(({'PutRequest': {'Item': item}} for item in items), stage)

    def delete_all(self, keys: Iterable[Dict[str, Any]], stage: str) -> WriteSummary:
        """Delete every item identified by its primary key."""
        return self.write(({'DeleteRequest': {'Key': key}} for key in keys), stage)
