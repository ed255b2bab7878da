"""
Taxonomy Aggregates

Derived values computed from the read API on every call; nothing is
cached or stored.
"""

import logging
from typing import Optional, Union

from ...exceptions import ItemNotFoundError
from ...models import DemographicCategory, TimeToRankView
from .queries import TaxonomyReadApi

logger = logging.getLogger(__name__)


class TaxonomyAggregates:
    """Aggregations across ranks and their requirements."""

    def __init__(self, read_api: TaxonomyReadApi):
        self.read_api = read_api

    def time_to_terminal_rank(
        self,
        category: Union[DemographicCategory, str],
        program_id: str,
        terminal_level: Optional[int] = None
    ) -> TimeToRankView:
        """
        Fastest total time to reach a terminal rank for one category.

        Walks the ranks in level order up to and including the terminal
        level. Each rank contributes the category's ``time_in_rank_months``
        when its requirement exists, otherwise the rank's ``months_minimum``.

        Args:
            category: Demographic category
            program_id: Program identifier
            terminal_level: Last level counted; defaults to the highest rank

        Returns:
            TimeToRankView with the total split into years and months

        Raises:
            ItemNotFoundError: The program has no ranks, or no rank at terminal_level
        """
        if not isinstance(category, DemographicCategory):
            category = DemographicCategory.parse(category)

        ranks = self.read_api.list_ranks(program_id)
        if not ranks:
            raise ItemNotFoundError(self.read_api.gateway.table_name, {'program_id': program_id, 'entity': 'Rank'})

        if terminal_level is None:
            terminal_level = ranks[-1].level
        elif terminal_level not in {rank.level for rank in ranks}:
            raise ItemNotFoundError(
                self.read_api.gateway.table_name,
                {'program_id': program_id, 'level': terminal_level}
            )

        total_months = 0
        for rank in ranks:
            if rank.level > terminal_level:
                break
            requirement = self.read_api.get_requirement(program_id, rank.level, category)
            if requirement is not None:
                total_months += requirement.time_in_rank_months
            else:
                logger.debug(f"No requirement level={rank.level} category={category.value}, using rank minimum")
                total_months += rank.months_minimum

        return TimeToRankView.from_total(category, program_id, terminal_level, total_months)
