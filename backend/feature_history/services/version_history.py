"""Version History Service — records, retrieves and exports FeatureValueVersion snapshots.

Invariants:
    - record_version flushes inside the caller's session and NEVER commits:
      "value update + version" commit or roll back together
    - Unloaded attributes of an ORM live value are loaded before the build: the pure
      core never triggers a lazy load
    - A failed build adds nothing to the session
    - An identity already stored is never replaced (VersionConflictError), whether the
      pre-check or the primary key catches it
    - get_version raises ResourceNotFoundError instead of returning None

Design Decisions:
    - Repositories injectable for tests; SQL implementations built from the session by default
    - Export goes through FeatureValueVersionSchema so audit documents and stored rows
      share one field vocabulary
"""

import logging

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from feature_history.core.domain_types import FeatureValueId
from feature_history.core.errors import (
    ErrorContext,
    FeatureHistoryError,
    ResourceNotFoundError,
    VersionConflictError,
)
from feature_history.core.repository_protocols import (
    FeatureValueVersionRepository,
    LiveFeatureValue,
    StrategyLinkRepository,
)
from feature_history.core.version_identity import VersionIdentity
from feature_history.core.version_snapshot import FeatureValueVersion
from feature_history.infrastructure.strategy_link_repository import SqlStrategyLinkRepository
from feature_history.infrastructure.version_repository import SqlFeatureValueVersionRepository
from feature_history.schemas.version import FeatureValueVersionSchema
from feature_history.services.shared_strategy_resolver import SharedStrategyResolver
from feature_history.services.snapshot_builder import SnapshotBuilder

logger = logging.getLogger(__name__)

# Attributes of LiveFeatureValue read by the snapshot core
_LIVE_ATTRIBUTES: frozenset[str] = frozenset({
    "id", "version", "when_created", "when_updated", "who_updated_id",
    "default_value", "locked", "retired", "rollout_strategies",
    "shared_rollout_strategies", "feature_id",
})


class FeatureValueVersionService:
    """Build-and-store plus lookup of feature value versions."""

    def __init__(
        self,
        db: AsyncSession,
        links: StrategyLinkRepository | None = None,
        versions: FeatureValueVersionRepository | None = None,
    ):
        self.db = db
        self.versions = versions or SqlFeatureValueVersionRepository(db)
        self.builder = SnapshotBuilder(
            SharedStrategyResolver(links or SqlStrategyLinkRepository(db)),
        )

    async def record_version(self, live_value: LiveFeatureValue) -> FeatureValueVersion:
        """Snapshot the live value and stage the version row in the session."""
        await self._load_live_state(live_value)
        try:
            version = await self.builder.build_from(live_value)
        except FeatureHistoryError as e:
            logger.warning(
                f"Version build failed: {e.message}",
                extra={
                    "feature_value_id": live_value.id,
                    "version": live_value.version,
                    "error_code": e.code,
                },
            )
            raise

        if await self.versions.exists(version.id):
            raise VersionConflictError(
                version.id,
                ErrorContext(
                    feature_value_id=str(version.id.feature_value_id),
                    version=version.id.version,
                ),
            )

        await self.versions.add(version)
        logger.info(
            f"Recorded version {version.id}",
            extra={
                "feature_value_id": version.id.feature_value_id,
                "version": version.id.version,
            },
        )
        return version

    async def get_version(self, identity: VersionIdentity) -> FeatureValueVersion:
        version = await self.versions.get(identity)
        if version is None:
            raise ResourceNotFoundError("FeatureValueVersion", str(identity))
        return version

    async def list_versions(
        self, feature_value_id: FeatureValueId,
    ) -> list[FeatureValueVersion]:
        """History of one feature value, newest first."""
        return await self.versions.list_for_feature_value(feature_value_id)

    async def export_history(self, feature_value_id: FeatureValueId) -> list[dict]:
        """JSON-safe audit documents of a feature value's history, newest first."""
        return [
            FeatureValueVersionSchema.from_version(v).model_dump(by_alias=True, mode="json")
            for v in await self.list_versions(feature_value_id)
        ]

    async def _load_live_state(self, live_value: LiveFeatureValue) -> None:
        """Load whatever the snapshot reads but the ORM instance has not loaded yet.

        Freshly created values never loaded their link collection, and expired ones
        lost their attributes; both would lazy-load inside the sync core.
        """
        state = inspect(live_value, raiseerr=False)
        if state is None or not state.persistent:
            return
        unloaded = sorted(_LIVE_ATTRIBUTES & state.unloaded)
        if unloaded:
            await self.db.refresh(live_value, unloaded)
