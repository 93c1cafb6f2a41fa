"""Strategy Link Repository — batched lookup of shared strategy links and their definitions.

Invariants:
    - fetch_link_definitions issues exactly ONE statement per call, whatever the id count
    - Empty input returns [] without touching the database
    - Only the four flattened fields (plus the link id) are selected; no ORM entities
      escape, so nothing returned can lazy-load or track later edits

Design Decisions:
    - Inner join on the shared strategy: a link whose strategy row is gone yields no row,
      which the core reports as a dangling reference
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feature_history.core.domain_types import StrategyLinkId
from feature_history.core.resolve_shared_strategies import StrategyLinkRow
from feature_history.models.shared_rollout_strategy import SharedRolloutStrategy
from feature_history.models.strategy_for_feature_value import StrategyForFeatureValue

logger = logging.getLogger(__name__)


class SqlStrategyLinkRepository:
    """StrategyLinkRepository backed by fh_strat_for_feature JOIN fh_app_strategy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch_link_definitions(
        self, link_ids: list[StrategyLinkId],
    ) -> list[StrategyLinkRow]:
        if not link_ids:
            return []

        result = await self.db.execute(
            select(
                StrategyForFeatureValue.id,
                SharedRolloutStrategy.id,
                SharedRolloutStrategy.version,
                StrategyForFeatureValue.enabled,
                StrategyForFeatureValue.value,
            )
            .join(
                SharedRolloutStrategy,
                StrategyForFeatureValue.rollout_strategy_id == SharedRolloutStrategy.id,
            )
            .where(StrategyForFeatureValue.id.in_(link_ids))
        )
        rows = [
            StrategyLinkRow(
                link_id=link_id,
                strategy_id=strategy_id,
                strategy_version=strategy_version,
                enabled=enabled,
                value=value,
            )
            for link_id, strategy_id, strategy_version, enabled, value in result.all()
        ]
        logger.debug(
            f"Fetched {len(rows)}/{len(link_ids)} shared strategy links",
            extra={"link_count": len(link_ids)},
        )
        return rows
