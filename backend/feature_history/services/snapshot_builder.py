"""Snapshot Builder — builds one immutable FeatureValueVersion from a live feature value.

Invariants:
    - build_from never writes to the live value or to the store
    - The live value is validated BEFORE the shared strategy lookup: an invalid value
      costs no round trip
    - Errors (InvalidLiveValueError, ReferenceResolutionError) propagate unchanged

Design Decisions:
    - Impureim sandwich: validate (pure) -> resolve links (IO) -> assemble (pure)
    - Caller supplies isolation: the live value and the link lookup must come from the
      same transaction so a version never mixes two points in time
"""

import logging

from feature_history.core.repository_protocols import LiveFeatureValue
from feature_history.core.version_snapshot import (
    FeatureValueVersion,
    build_feature_value_version,
    validate_live_value,
)
from feature_history.services.shared_strategy_resolver import SharedStrategyResolver

logger = logging.getLogger(__name__)


class SnapshotBuilder:
    """Builds FeatureValueVersion snapshots from live values."""

    def __init__(self, resolver: SharedStrategyResolver):
        self.resolver = resolver

    async def build_from(self, live_value: LiveFeatureValue) -> FeatureValueVersion:
        validate_live_value(live_value)

        shared = await self.resolver.resolve(live_value.shared_rollout_strategies or ())
        version = build_feature_value_version(live_value, shared)

        logger.debug(
            f"Built snapshot {version.id}",
            extra={
                "feature_value_id": version.id.feature_value_id,
                "version": version.id.version,
                "link_count": len(shared),
            },
        )
        return version
