"""
Single-Table Key Design

Every taxonomy entity lives in one table keyed on PK/SK, with a second
projection (GSI1) keyed on GSI1PK/GSI1SK:

    Entity        PK                        SK                       GSI1PK          GSI1SK
    Root          ORG#<org>                 PROG#<prog>              PROG#<prog>     #META
    Rank          PROG#<prog>               RANK#<lv>                PROG#<prog>     RANK#<lv>
    Requirement   PROG#<prog>#RANK#<lv>     REQ#<category>           PROG#<prog>     REQ#<category>#<lv>
    Curriculum    PROG#<prog>               CURR#<category>#<id>     PROG#<prog>     CURR#<minlv>#<id>

Access patterns served:
    1. Root by organization      PK = ORG#<org>, SK = PROG#<prog>
    2. Ranks of a program        PK = PROG#<prog>, SK begins_with RANK#
    3. Requirement for rank+cat  PK = PROG#<prog>#RANK#<lv>, SK = REQ#<category>
       Requirements for rank     PK = PROG#<prog>#RANK#<lv>, SK begins_with REQ#
    4. Curriculum of a program   PK = PROG#<prog>, SK begins_with CURR#[<category>#]
    5. Everything of a program   GSI1PK = PROG#<prog>

Sort keys always start with an entity-kind tag so that prefix queries on a
shared partition select a single kind. Levels are zero-padded because the
store compares keys as strings.

All functions here are pure: the same identifiers always produce the same
keys, which is what makes bulk loads safe to re-run.
"""

from typing import Dict, NamedTuple, Optional

from ..exceptions import ValidationError

# Attribute names of the table and index keys
PK = "PK"
SK = "SK"
GSI1_PK = "GSI1PK"
GSI1_SK = "GSI1SK"

KEY_SEPARATOR = "#"
LEVEL_WIDTH = 2
MIN_LEVEL = 1
MAX_LEVEL = 10 ** LEVEL_WIDTH - 1

ORG_TAG = "ORG"
PROGRAM_TAG = "PROG"
RANK_TAG = "RANK"
REQUIREMENT_TAG = "REQ"
CURRICULUM_TAG = "CURR"
ROOT_INDEX_SORT_KEY = "#META"


class EntityKeys(NamedTuple):
    """Primary and secondary-index key pair of one item."""

    pk: str
    sk: str
    gsi1_pk: str
    gsi1_sk: str

    def primary_key(self) -> Dict[str, str]:
        """Key dict accepted by GetItem/DeleteRequest."""
        return {PK: self.pk, SK: self.sk}

    def as_attributes(self) -> Dict[str, str]:
        """All four key attributes, ready to merge into an item."""
        return {
            PK: self.pk,
            SK: self.sk,
            GSI1_PK: self.gsi1_pk,
            GSI1_SK: self.gsi1_sk,
        }


def _join(*parts: str) -> str:
    return KEY_SEPARATOR.join(parts)


def pad_level(level: int) -> str:
    """Zero-pad a rank level to the fixed key width.

    Raises:
        ValidationError: If the level is outside 1..99 and cannot be encoded
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValidationError(f"Rank level must be an integer, got {level!r}")
    if level < MIN_LEVEL or level > MAX_LEVEL:
        raise ValidationError(
            f"Rank level {level} outside encodable range {MIN_LEVEL}..{MAX_LEVEL}"
        )
    return str(level).zfill(LEVEL_WIDTH)


# ───────────────────── Partition keys ─────────────────────

def organization_partition(org_id: str) -> str:
    return _join(ORG_TAG, org_id)


def program_partition(program_id: str) -> str:
    return _join(PROGRAM_TAG, program_id)


def requirement_partition(program_id: str, level: int) -> str:
    return _join(PROGRAM_TAG, program_id, RANK_TAG, pad_level(level))


# ───────────────────── Sort key prefixes ─────────────────────

def rank_prefix() -> str:
    return RANK_TAG + KEY_SEPARATOR


def requirement_prefix() -> str:
    return REQUIREMENT_TAG + KEY_SEPARATOR


def curriculum_prefix(category: Optional[str] = None) -> str:
    """Prefix selecting all curriculum items, or one category's items."""
    if category:
        return _join(CURRICULUM_TAG, category) + KEY_SEPARATOR
    return CURRICULUM_TAG + KEY_SEPARATOR


def curriculum_level_prefix(minimum_level: int) -> str:
    """GSI1 sort key prefix of curriculum items first available at a level."""
    return _join(CURRICULUM_TAG, pad_level(minimum_level)) + KEY_SEPARATOR


# ───────────────────── Key factories ─────────────────────

def root_keys(org_id: str, program_id: str) -> EntityKeys:
    return EntityKeys(
        pk=organization_partition(org_id),
        sk=_join(PROGRAM_TAG, program_id),
        gsi1_pk=program_partition(program_id),
        gsi1_sk=ROOT_INDEX_SORT_KEY,
    )


def rank_keys(program_id: str, level: int) -> EntityKeys:
    padded = pad_level(level)
    return EntityKeys(
        pk=program_partition(program_id),
        sk=_join(RANK_TAG, padded),
        gsi1_pk=program_partition(program_id),
        gsi1_sk=_join(RANK_TAG, padded),
    )


def requirement_keys(program_id: str, level: int, category: str) -> EntityKeys:
    return EntityKeys(
        pk=requirement_partition(program_id, level),
        sk=_join(REQUIREMENT_TAG, category),
        gsi1_pk=program_partition(program_id),
        gsi1_sk=_join(REQUIREMENT_TAG, category, pad_level(level)),
    )


def curriculum_keys(program_id: str, category: str, curriculum_id: str, minimum_level: int) -> EntityKeys:
    return EntityKeys(
        pk=program_partition(program_id),
        sk=_join(CURRICULUM_TAG, category, curriculum_id),
        gsi1_pk=program_partition(program_id),
        gsi1_sk=_join(CURRICULUM_TAG, pad_level(minimum_level), curriculum_id),
    )
