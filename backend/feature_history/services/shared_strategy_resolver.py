"""Shared Strategy Resolver — resolves a live value's strategy links into flattened snapshots.

Invariants:
    - One batched repository call per resolve(), never one per link
    - No links -> no repository call, empty result
    - A dangling link raises ReferenceResolutionError; nothing partial is returned
    - Result order follows the first-seen order of the input links

Design Decisions:
    - Thin shell around core/resolve_shared_strategies.py: this class owns the IO,
      the core owns completeness checking and flattening
"""

import logging
from typing import Iterable

from feature_history.core.errors import ReferenceResolutionError
from feature_history.core.repository_protocols import StrategyLinkRepository
from feature_history.core.resolve_shared_strategies import (
    SharedStrategySnapshot,
    collect_link_ids,
    flatten_link_rows,
)

logger = logging.getLogger(__name__)


class SharedStrategyResolver:
    """Flattens shared strategy links through a StrategyLinkRepository."""

    def __init__(self, repository: StrategyLinkRepository):
        self.repository = repository

    async def resolve(self, links: Iterable) -> tuple[SharedStrategySnapshot, ...]:
        link_ids = collect_link_ids(links)
        if not link_ids:
            return ()

        rows = await self.repository.fetch_link_definitions(link_ids)
        try:
            return flatten_link_rows(link_ids, rows)
        except ReferenceResolutionError as e:
            logger.warning(
                f"Unresolvable shared strategy links: {e.missing_link_ids}",
                extra={"error_code": e.code, "link_count": len(link_ids)},
            )
            raise
