"""
Domain Models for the Rank Taxonomy

This module holds the business entities stored in the single taxonomy
table together with the dataset model used by bulk loads.

Organized by domain:
1. Enumerations (demographic category, difficulty)
2. Stored entities (TaxonomyRoot, Rank, Requirement, CurriculumItem)
3. Dataset (per-level requirement definitions, cross-entity validation)

Every stored entity knows its own keys through ``entity_keys()`` and
produces its complete table item through ``to_table_item()``.
"""

from abc import abstractmethod
from enum import Enum
from typing import Annotated, Dict, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    field_validator,
    model_validator,
)

from ..core import keys
from ..exceptions import ValidationError
from .base import DynamoDBMixin


# =============================================================================
# Enumerations
# =============================================================================

class DemographicCategory(str, Enum):
    """Closed set of demographic categories a requirement is defined for."""
    JUNIOR = "Junior"
    TEEN = "Teen"
    ADULT = "Adult"
    SENIOR = "Senior"

    @classmethod
    def parse(cls, value: str) -> 'DemographicCategory':
        """Case-insensitive lookup by value, for command-line input."""
        for category in cls:
            if category.value.lower() == value.strip().lower():
                return category
        raise ValidationError(
            f"Unknown demographic category '{value}'. "
            f"Expected one of: {[c.value for c in cls]}"
        )


class Difficulty(str, Enum):
    """Difficulty tier of a curriculum item."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


T = TypeVar('T')


class CategoryValues(BaseModel, Generic[T]):
    """
    One value per demographic category, nothing more and nothing less.

    Accepts either the category values ("Junior") or the field names
    ("junior") as input keys; any other key is rejected.
    """

    junior: T = Field(..., alias="Junior")
    teen: T = Field(..., alias="Teen")
    adult: T = Field(..., alias="Adult")
    senior: T = Field(..., alias="Senior")

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        populate_by_name=True
    )

    def __getitem__(self, category: DemographicCategory) -> T:
        return getattr(self, category.name.lower())


def _reject_key_separator(value: str) -> str:
    if keys.KEY_SEPARATOR in value:
        raise ValueError(f"'{keys.KEY_SEPARATOR}' is reserved for key encoding: {value!r}")
    return value


# =============================================================================
# Stored Entities
# =============================================================================

class TaxonomyEntity(DynamoDBMixin, BaseModel):
    """Common base of every item stored in the taxonomy table."""

    program_id: str = Field(..., min_length=1, description="Program the entity belongs to")

    @field_validator('program_id')
    @classmethod
    def validate_program_id(cls, v):
        return _reject_key_separator(v)

    @abstractmethod
    def entity_keys(self) -> keys.EntityKeys:
        """PK/SK and GSI1 keys of this entity."""

    def to_table_item(self):
        """Entity attributes plus PK/SK/GSI1 key attributes."""
        item = self.to_dynamodb_item()
        item.update(self.entity_keys().as_attributes())
        return item


class TaxonomyRoot(TaxonomyEntity):
    """
    Root of one organization's program taxonomy.

    Carries the dataset version so a reload can be told apart from the
    previous one.
    """

    entity_type: Literal["Root"] = "Root"

    org_id: str = Field(..., min_length=1, description="Owning organization")
    name: str = Field(..., min_length=1, description="Display name of the program")
    style: str = Field(..., min_length=1, description="Style label")
    lineage: Optional[str] = Field(None, description="Lineage label")
    total_levels: int = Field(..., ge=keys.MIN_LEVEL, le=keys.MAX_LEVEL, description="Number of ranks")
    version: str = Field(..., min_length=1, description="Dataset version label")

    @field_validator('org_id')
    @classmethod
    def validate_org_id(cls, v):
        return _reject_key_separator(v)

    def entity_keys(self) -> keys.EntityKeys:
        return keys.root_keys(self.org_id, self.program_id)


class Rank(TaxonomyEntity):
    """An ordered proficiency level (1..N) of a program."""

    entity_type: Literal["Rank"] = "Rank"

    level: int = Field(..., ge=keys.MIN_LEVEL, le=keys.MAX_LEVEL, description="Rank level, 1-based")
    code: str = Field(..., pattern=r'^LV\d{1,2}$', description="Short code, e.g. LV3")
    name: str = Field(..., min_length=1, description="Display name")
    color: str = Field(..., pattern=r'^#[0-9A-Fa-f]{6}$', description="Hex display color")
    description: str = Field(..., min_length=1, description="Rank description")
    months_minimum: int = Field(..., ge=1, description="Minimum months spent in this rank")
    months_maximum: int = Field(..., ge=1, description="Maximum months spent in this rank")

    @model_validator(mode='after')
    def validate_duration_range(self):
        if self.months_maximum < self.months_minimum:
            raise ValueError(
                f"months_maximum ({self.months_maximum}) must be >= months_minimum ({self.months_minimum})"
            )
        return self

    def entity_keys(self) -> keys.EntityKeys:
        return keys.rank_keys(self.program_id, self.level)


class Requirement(TaxonomyEntity):
    """Criteria for advancing out of one rank, for one demographic category."""

    entity_type: Literal["Requirement"] = "Requirement"

    level: int = Field(..., ge=keys.MIN_LEVEL, le=keys.MAX_LEVEL)
    category: DemographicCategory
    techniques: List[str] = Field(..., min_length=1, description="Techniques to demonstrate")
    attendance: NonNegativeInt = Field(..., description="Classes attended")
    time_in_rank_months: NonNegativeInt = Field(..., description="Months spent in the rank")
    teaching_hours: NonNegativeInt = Field(..., description="Assisted teaching hours")
    sparring_required: bool
    sparring_minutes: NonNegativeInt
    weapons_required: bool
    weapons_skill: Optional[str] = Field(None, description="Weapon skill label, absent when none")
    tournament_wins: NonNegativeInt
    curriculum_dev: bool
    essay_required: bool
    essay_prompt: Optional[str] = None

    def entity_keys(self) -> keys.EntityKeys:
        return keys.requirement_keys(self.program_id, self.level, self.category.value)


class CurriculumItem(TaxonomyEntity):
    """A skill or technique, qualifying from a minimum rank level."""

    entity_type: Literal["Curriculum"] = "Curriculum"

    curriculum_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, description="Curriculum category, e.g. 'Forms'")
    technique: str = Field(..., min_length=1, description="Technique kind")
    difficulty: Difficulty
    minimum_level: int = Field(..., ge=keys.MIN_LEVEL, le=keys.MAX_LEVEL)
    applicable_categories: List[DemographicCategory] = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    duration_minutes: Optional[int] = Field(None, ge=1)

    @field_validator('curriculum_id', 'category')
    @classmethod
    def validate_key_parts(cls, v):
        return _reject_key_separator(v)

    def entity_keys(self) -> keys.EntityKeys:
        return keys.curriculum_keys(self.program_id, self.category, self.curriculum_id, self.minimum_level)


AnyTaxonomyEntity = Annotated[
    Union[TaxonomyRoot, Rank, Requirement, CurriculumItem],
    Field(discriminator='entity_type'),
]


# =============================================================================
# Dataset
# =============================================================================

class RequirementDefinition(BaseModel):
    """Requirements of one rank with a value per demographic category."""

    techniques: List[str] = Field(..., min_length=1)
    attendance: CategoryValues[NonNegativeInt]
    time_in_rank: CategoryValues[NonNegativeInt]
    teaching_hours: CategoryValues[NonNegativeInt]
    sparring: bool
    sparring_minutes: CategoryValues[NonNegativeInt]
    weapons: bool
    weapons_skill: Optional[str] = None
    tournament_wins: NonNegativeInt = 0
    curriculum_dev: bool = False
    essay: bool = False
    essay_prompt: Optional[CategoryValues[str]] = None

    model_config = ConfigDict(frozen=True)

    def for_category(self, program_id: str, level: int, category: DemographicCategory) -> Requirement:
        return Requirement(
            program_id=program_id,
            level=level,
            category=category,
            techniques=self.techniques,
            attendance=self.attendance[category],
            time_in_rank_months=self.time_in_rank[category],
            teaching_hours=self.teaching_hours[category],
            sparring_required=self.sparring,
            sparring_minutes=self.sparring_minutes[category],
            weapons_required=self.weapons,
            weapons_skill=self.weapons_skill or None,
            tournament_wins=self.tournament_wins,
            curriculum_dev=self.curriculum_dev,
            essay_required=self.essay,
            essay_prompt=self.essay_prompt[category] if self.essay_prompt else None,
        )


class TaxonomyDataset(BaseModel):
    """
    A complete, versioned taxonomy for one program.

    Construction enforces the rules that span entities: rank levels form
    the contiguous sequence 1..N, every level has a requirement definition,
    curriculum ids are unique and every curriculum minimum level exists.
    Ranks and curriculum items may omit program_id; it is filled from the
    dataset.
    """

    program_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    style: str = Field(..., min_length=1)
    lineage: Optional[str] = None
    version: str = Field(..., min_length=1)
    ranks: List[Rank] = Field(..., min_length=1)
    requirements: Dict[int, RequirementDefinition]
    curriculum: List[CurriculumItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='before')
    @classmethod
    def fill_program_id(cls, data):
        if not isinstance(data, dict) or 'program_id' not in data:
            return data
        program_id = data['program_id']
        filled = dict(data)
        for collection in ('ranks', 'curriculum'):
            entries = data.get(collection)
            if isinstance(entries, list):
                filled[collection] = [
                    {'program_id': program_id, **entry} if isinstance(entry, dict) else entry
                    for entry in entries
                ]
        return filled

    @model_validator(mode='after')
    def validate_structure(self):
        levels = [rank.level for rank in self.ranks]
        expected = list(range(1, len(self.ranks) + 1))
        if sorted(levels) != expected:
            raise ValueError(f"Rank levels must be the contiguous sequence 1..{len(self.ranks)}, got {levels}")

        foreign = [rank.level for rank in self.ranks if rank.program_id != self.program_id]
        foreign += [item.curriculum_id for item in self.curriculum if item.program_id != self.program_id]
        if foreign:
            raise ValueError(f"Entities belong to another program: {foreign}")

        if sorted(self.requirements) != expected:
            raise ValueError(
                f"Requirements must cover every level 1..{len(self.ranks)}, got {sorted(self.requirements)}"
            )

        seen = set()
        duplicates = []
        for item in self.curriculum:
            if item.curriculum_id in seen:
                duplicates.append(item.curriculum_id)
            seen.add(item.curriculum_id)
            if item.minimum_level > len(self.ranks):
                raise ValueError(
                    f"Curriculum item '{item.curriculum_id}' requires level {item.minimum_level} "
                    f"but only {len(self.ranks)} ranks exist"
                )
        if duplicates:
            raise ValueError(f"Duplicate curriculum ids: {duplicates}")
        return self

    @property
    def total_levels(self) -> int:
        return len(self.ranks)

    def build_root(self, org_id: str) -> TaxonomyRoot:
        return TaxonomyRoot(
            program_id=self.program_id,
            org_id=org_id,
            name=self.name,
            style=self.style,
            lineage=self.lineage,
            total_levels=self.total_levels,
            version=self.version,
        )

    def build_requirements(self) -> List[Requirement]:
        return [
            self.requirements[level].for_category(self.program_id, level, category)
            for level in sorted(self.requirements)
            for category in DemographicCategory
        ]

    def to_entities(self, org_id: str) -> List[TaxonomyEntity]:
        """Expand the dataset into the flat entity list written by a bulk load."""
        return [
            self.build_root(org_id),
            *sorted(self.ranks, key=lambda rank: rank.level),
            *self.build_requirements(),
            *self.curriculum,
        ]
