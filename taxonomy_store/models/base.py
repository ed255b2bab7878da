"""
Base Model Components and Mixins

DynamoDBMixin is shared by every stored entity. It owns the conversion
between pydantic models and DynamoDB items:

- Writing: ``model_dump(mode='json', exclude_none=True)`` so enums become
  their values and optional fields that are unset are left out of the item
  entirely. GSI1 is sparse, so an attribute must be absent (not null) for
  an item to stay out of any index keyed on it.
- Reading: boto3 returns every number as ``Decimal``; those are turned back
  into ``int``/``float`` before validation so models compare equal to what
  was written.
"""

import logging
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def convert_dynamodb_numbers(obj: Any) -> Any:
    """Recursively convert boto3 Decimals into Python numbers."""
    if isinstance(obj, dict):
        return {k: convert_dynamodb_numbers(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [convert_dynamodb_numbers(list_item) for list_item in obj]
    elif isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    return obj


class DynamoDBMixin(BaseModel):
    """
    Mixin providing DynamoDB serialization and deserialization.

    Entities are immutable reference data, so the mixin also freezes the
    model and ignores table-level attributes (PK, SK, GSI keys) on input.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
    )

    def to_dynamodb_item(self) -> Dict[str, Any]:
        """
        Convert model to the attribute part of a DynamoDB item.

        Returns:
            Dictionary without None values, enums flattened to strings
        """
        return self.model_dump(mode='json', exclude_none=True)

    @classmethod
    def from_dynamodb_item(cls, item: Dict[str, Any]):
        """
        Create model instance from a DynamoDB item.

        Args:
            item: DynamoDB item as returned by the boto3 resource layer

        Returns:
            Model instance

        Raises:
            ValidationError: If item data is invalid for the model
        """
        try:
            return cls.model_validate(convert_dynamodb_numbers(item))
        except PydanticValidationError as e:
            logger.error(f"Failed to convert DynamoDB item to {cls.__name__}: {e}")
            raise ValidationError(
                f"Failed to convert DynamoDB item to {cls.__name__}",
                errors=e.errors(include_url=False),
                original_error=e
            ) from e
