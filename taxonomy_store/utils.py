"""
Query Building Utilities

Helpers shared by the scanner and the read API for assembling the
expression arguments of DynamoDB Query/Scan/GetItem calls. They return
boto3 condition objects or plain (expression, names) pairs and never
touch the table themselves.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Attr, Key

logger = logging.getLogger(__name__)


def build_projection_expression(fields: Optional[List[str]]) -> Tuple[Optional[str], Optional[Dict[str, str]]]:
    """Build ProjectionExpression with ExpressionAttributeNames.

    Every attribute goes through a placeholder so reserved words (and the
    upper-case key attribute names) are always safe to project.

    Args:
        fields: Attribute names to project, None for all attributes

    Returns:
        Tuple of (ProjectionExpression, ExpressionAttributeNames) or (None, None)

    Example:
        >>> build_projection_expression(['PK', 'SK'])
        ('#f0, #f1', {'#f0': 'PK', '#f1': 'SK'})
    """
    if not fields:
        return None, None

    expression_names = {}
    projection_parts = []

    for i, field in enumerate(fields):
        attr_name = f"#f{i}"
        expression_names[attr_name] = field
        projection_parts.append(attr_name)

    return ', '.join(projection_parts), expression_names


def build_key_condition(
    partition_key: str,
    partition_value: Any,
    sort_key: Optional[str] = None,
    sort_condition: str = "eq",
    sort_value: Optional[Any] = None
):
    """Build KeyConditionExpression for the taxonomy access patterns.

    Only exact and prefix matches on the sort key are needed: every
    "children of X" lookup is a begins_with on an entity-kind tag.

    Examples:
        >>> build_key_condition('GSI1PK', 'PROG#shaolin_wing_chun')
        >>> build_key_condition('PK', 'PROG#shaolin_wing_chun', 'SK', 'begins_with', 'RANK#')

    Raises:
        ValueError: For an unsupported sort_condition
    """
    condition = Key(partition_key).eq(partition_value)

    if sort_key and sort_value is not None:
        sort_key_obj = Key(sort_key)
        if sort_condition == "eq":
            condition = condition & sort_key_obj.eq(sort_value)
        elif sort_condition == "begins_with":
            condition = condition & sort_key_obj.begins_with(sort_value)
        else:
            raise ValueError(
                f"Unsupported sort_condition: {sort_condition}. "
                f"Supported values: eq, begins_with"
            )

    return condition


def build_upper_bound_filter(attribute: str, maximum: Optional[int]):
    """FilterExpression keeping items whose attribute is <= maximum.

    Returns None when no bound is given so callers can skip the argument.
    """
    if maximum is None:
        return None
    return Attr(attribute).lte(maximum)


def paginate(fetch_page, **kwargs) -> List[Dict[str, Any]]:
    """Follow LastEvaluatedKey until the result set is exhausted.

    Args:
        fetch_page: Gateway method returning one raw page (query or scan)
        **kwargs: Arguments of the first request

    Returns:
        Items of every page, in store order
    """
    items = []
    pages = 0
    while True:
        response = fetch_page(**kwargs)
        pages += 1
        items.extend(response.get('Items', []))
        last_key = response.get('LastEvaluatedKey')
        if not last_key:
            break
        kwargs['ExclusiveStartKey'] = last_key
    if pages > 1:
        logger.debug(f"Collected {len(items)} items across pages={pages}")
    return items
