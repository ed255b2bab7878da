"""
Taxonomy Read API

Read operations for the access patterns encoded in the table keys:
- Root lookup by organization (GetItem)
- Ranks of a program (Query, SK begins_with RANK#)
- Requirements of a rank, one or all categories (GetItem / Query on REQ#)
- Curriculum of a program, optionally by category and level ceiling
- Every entity of a program through GSI1

Unlike the paged APIs elsewhere, the taxonomy is small reference data, so
every list operation follows LastEvaluatedKey to the end and returns the
complete result. Items come back as models, never as raw dicts.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ...core import TableGateway, keys
from ...exceptions import ValidationError
from ...models import (
    AnyTaxonomyEntity,
    CurriculumItem,
    DemographicCategory,
    Rank,
    Requirement,
    TaxonomyEntity,
    TaxonomyRoot,
    convert_dynamodb_numbers,
)
from ...utils import build_key_condition, build_upper_bound_filter, paginate

logger = logging.getLogger(__name__)

_ENTITY_ADAPTER = TypeAdapter(AnyTaxonomyEntity)


def entity_from_item(item: Dict[str, Any]) -> TaxonomyEntity:
    """Decode an item of any kind using its entity_type discriminator."""
    try:
        return _ENTITY_ADAPTER.validate_python(convert_dynamodb_numbers(item))
    except PydanticValidationError as e:
        logger.error(f"Failed to decode taxonomy item PK={item.get(keys.PK)} SK={item.get(keys.SK)}: {e}")
        raise ValidationError(
            "Failed to decode taxonomy item",
            errors=e.errors(include_url=False),
            original_error=e
        ) from e


def _category_value(category: Union[DemographicCategory, str]) -> str:
    if isinstance(category, DemographicCategory):
        return category.value
    return DemographicCategory.parse(category).value


class TaxonomyReadApi:
    """
    Read-only API over the taxonomy table.

    Holds no state besides the gateway; every call is independent.
    """

    def __init__(self, gateway: TableGateway):
        self.gateway = gateway

    def _get(self, entity_keys: keys.EntityKeys, model_class):
        item = self.gateway.get_item(entity_keys.primary_key())
        if item is None:
            logger.debug(f"No item PK={entity_keys.pk} SK={entity_keys.sk}")
            return None
        return model_class.from_dynamodb_item(item)

    def get_root(self, org_id: str, program_id: str) -> Optional[TaxonomyRoot]:
        """
        Get the taxonomy root of an organization's program.

        DynamoDB Operation: GetItem on ORG#<org> / PROG#<prog>
        """
        return self._get(keys.root_keys(org_id, program_id), TaxonomyRoot)

    def list_ranks(self, program_id: str) -> List[Rank]:
        """
        List every rank of a program, ordered by level.

        DynamoDB Operation: Query PK = PROG#<prog>, SK begins_with RANK#
        """
        items = paginate(
            self.gateway.query,
            KeyConditionExpression=build_key_condition(
                keys.PK, keys.program_partition(program_id),
                keys.SK, 'begins_with', keys.rank_prefix()
            )
        )
        ranks = [Rank.from_dynamodb_item(item) for item in items]
        return sorted(ranks, key=lambda rank: rank.level)

    def get_rank(self, program_id: str, level: int) -> Optional[Rank]:
        """Get a single rank by level."""
        return self._get(keys.rank_keys(program_id, level), Rank)

    def get_requirement(
        self,
        program_id: str,
        level: int,
        category: Union[DemographicCategory, str]
    ) -> Optional[Requirement]:
        """
        Get the requirement of one rank for one demographic category.

        DynamoDB Operation: GetItem on PROG#<prog>#RANK#<lv> / REQ#<category>
        """
        return self._get(keys.requirement_keys(program_id, level, _category_value(category)), Requirement)

    def list_requirements(self, program_id: str, level: int) -> List[Requirement]:
        """
        List the requirements of one rank for every category.

        DynamoDB Operation: Query PK = PROG#<prog>#RANK#<lv>, SK begins_with REQ#
        """
        items = paginate(
            self.gateway.query,
            KeyConditionExpression=build_key_condition(
                keys.PK, keys.requirement_partition(program_id, level),
                keys.SK, 'begins_with', keys.requirement_prefix()
            )
        )
        return [Requirement.from_dynamodb_item(item) for item in items]

    def get_requirements(
        self,
        program_id: str,
        level: int,
        category: Optional[Union[DemographicCategory, str]] = None
    ) -> Union[Optional[Requirement], List[Requirement]]:
        """One category's requirement when a category is given, else all of the rank's."""
        if category:
            return self.get_requirement(program_id, level, category)
        return self.list_requirements(program_id, level)

    def list_curriculum(
        self,
        program_id: str,
        category: Optional[str] = None,
        max_level: Optional[int] = None
    ) -> List[CurriculumItem]:
        """
        List curriculum items of a program.

        DynamoDB Operation: Query PK = PROG#<prog>, SK begins_with CURR#[<category>#]
        with an optional FilterExpression minimum_level <= max_level.

        Args:
            program_id: Program identifier
            category: Curriculum category (e.g. 'Forms'); all categories when None
            max_level: Keep only items available at or below this level
        """
        query_kwargs = {
            'KeyConditionExpression': build_key_condition(
                keys.PK, keys.program_partition(program_id),
                keys.SK, 'begins_with', keys.curriculum_prefix(category)
            )
        }
        level_filter = build_upper_bound_filter('minimum_level', max_level)
        if level_filter is not None:
            query_kwargs['FilterExpression'] = level_filter

        items = paginate(self.gateway.query, **query_kwargs)
        return [CurriculumItem.from_dynamodb_item(item) for item in items]

    def list_curriculum_from_level(self, program_id: str, minimum_level: int) -> List[CurriculumItem]:
        """
        List curriculum items that first become available at one level.

        DynamoDB Operation: Query on GSI1, GSI1PK = PROG#<prog>,
        GSI1SK begins_with CURR#<lv>#
        """
        items = paginate(
            self.gateway.query,
            IndexName=self.gateway.index_name,
            KeyConditionExpression=build_key_condition(
                keys.GSI1_PK, keys.program_partition(program_id),
                keys.GSI1_SK, 'begins_with', keys.curriculum_level_prefix(minimum_level)
            )
        )
        return [CurriculumItem.from_dynamodb_item(item) for item in items]

    def list_all_for_root(self, program_id: str) -> List[TaxonomyEntity]:
        """
        List every entity of a program regardless of partition.

        DynamoDB Operation: Query on GSI1, GSI1PK = PROG#<prog>
        Results are ordered by GSI1SK: root (#META) first, then curriculum,
        ranks and requirements.
        """
        items = paginate(
            self.gateway.query,
            IndexName=self.gateway.index_name,
            KeyConditionExpression=build_key_condition(keys.GSI1_PK, keys.program_partition(program_id))
        )
        logger.debug(f"GSI1 query program={program_id} count={len(items)}")
        return [entity_from_item(item) for item in items]
