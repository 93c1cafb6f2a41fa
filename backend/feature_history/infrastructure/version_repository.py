"""Version Repository — persists and reads FeatureValueVersion snapshots.

Invariants:
    - add() inserts a new row and flushes; it never updates an existing row and never commits
    - A duplicate identity rejected by the primary key surfaces as VersionConflictError;
      the session is rolled back before either error is raised
    - get()/list_for_feature_value() return frozen core objects, never ORM rows
    - list_for_feature_value is ordered newest first (version descending)

Design Decisions:
    - JSON columns go through schemas/version.py so the stored shape has one definition
    - exists() is a cheap pre-check; the composite PK is what settles concurrent inserts
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feature_history.core.domain_types import FeatureValueId
from feature_history.core.errors import DatabaseError, ErrorContext, VersionConflictError
from feature_history.core.version_identity import VersionIdentity
from feature_history.core.version_snapshot import FeatureValueVersion
from feature_history.models.feature_value_version import (
    FeatureValueVersion as FeatureValueVersionModel,
)
from feature_history.schemas.version import (
    dump_rollout_strategies,
    dump_shared_strategies,
    load_rollout_strategies,
    load_shared_strategies,
)


def version_to_row(version: FeatureValueVersion) -> FeatureValueVersionModel:
    return FeatureValueVersionModel(
        fv_id=version.id.feature_value_id,
        version=version.id.version,
        when_created=version.when_created,
        who_created_id=version.who_created,
        default_value=version.default_value,
        locked=version.locked,
        retired=version.retired,
        rollout_strategies=dump_rollout_strategies(version.rollout_strategies),
        shared_strat=dump_shared_strategies(version.shared_rollout_strategies),
        feature_id=version.feature_id,
    )


def row_to_version(row: FeatureValueVersionModel) -> FeatureValueVersion:
    return FeatureValueVersion(
        id=VersionIdentity(row.fv_id, row.version),
        when_created=row.when_created,
        who_created=row.who_created_id,
        default_value=row.default_value,
        locked=row.locked,
        retired=bool(row.retired),
        rollout_strategies=load_rollout_strategies(row.rollout_strategies),
        shared_rollout_strategies=load_shared_strategies(row.shared_strat),
        feature_id=row.feature_id,
    )


class SqlFeatureValueVersionRepository:
    """FeatureValueVersionRepository backed by the fh_fv_version table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, identity: VersionIdentity) -> bool:
        result = await self.db.execute(
            select(FeatureValueVersionModel.version)
            .where(FeatureValueVersionModel.fv_id == identity.feature_value_id)
            .where(FeatureValueVersionModel.version == identity.version)
        )
        return result.scalar_one_or_none() is not None

    async def add(self, version: FeatureValueVersion) -> None:
        self.db.add(version_to_row(version))
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            ctx = ErrorContext(
                feature_value_id=str(version.id.feature_value_id),
                version=version.id.version,
                debug_info={"db_error": str(e.orig)},
            )
            if await self.exists(version.id):
                raise VersionConflictError(version.id, ctx) from e
            raise DatabaseError("Integrity constraint violated", "insert", ctx) from e

    async def get(self, identity: VersionIdentity) -> FeatureValueVersion | None:
        row = await self.db.get(
            FeatureValueVersionModel, (identity.feature_value_id, identity.version),
        )
        return row_to_version(row) if row is not None else None

    async def list_for_feature_value(
        self, feature_value_id: FeatureValueId,
    ) -> list[FeatureValueVersion]:
        result = await self.db.execute(
            select(FeatureValueVersionModel)
            .where(FeatureValueVersionModel.fv_id == feature_value_id)
            .order_by(FeatureValueVersionModel.version.desc())
        )
        return [row_to_version(row) for row in result.scalars().all()]
