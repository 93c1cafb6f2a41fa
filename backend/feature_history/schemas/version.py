"""Version Schemas — Pydantic models for the serialized shape of a FeatureValueVersion.

Invariants:
    - SharedRolloutStrategyVersionSchema matches the shared_strat JSON column exactly:
      {"strategyId", "version", "enabled", "value"}
    - Every schema converts losslessly to and from its frozen core counterpart
    - Dumps use mode="json": UUIDs and datetimes become strings

Design Decisions:
    - camelCase aliases with populate_by_name: the stored JSON keeps the wire names,
      Python code uses snake_case
    - Inline strategies pass through RolloutStrategy.to_dict/from_dict: their wire shape
      is owned by core/rollout_strategy.py
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from feature_history.core.resolve_shared_strategies import SharedStrategySnapshot
from feature_history.core.rollout_strategy import RolloutStrategy
from feature_history.core.version_identity import VersionIdentity
from feature_history.core.version_snapshot import FeatureValueVersion


class SharedRolloutStrategyVersionSchema(BaseModel):
    """One flattened shared strategy inside a version."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    strategy_id: UUID = Field(alias="strategyId")
    version: int
    enabled: bool
    value: Any = None

    @classmethod
    def from_snapshot(cls, snapshot: SharedStrategySnapshot) -> "SharedRolloutStrategyVersionSchema":
        return cls(
            strategy_id=snapshot.strategy_id,
            version=snapshot.strategy_version,
            enabled=snapshot.enabled,
            value=snapshot.value,
        )

    def to_snapshot(self) -> SharedStrategySnapshot:
        return SharedStrategySnapshot(
            strategy_id=self.strategy_id,
            strategy_version=self.version,
            enabled=self.enabled,
            value=self.value,
        )


class FeatureValueVersionSchema(BaseModel):
    """Exported document of a version (audit, rollback preview)."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    feature_value_id: UUID = Field(alias="featureValueId")
    version: int
    when_created: datetime = Field(alias="whenCreated")
    who_created: UUID = Field(alias="whoCreated")
    default_value: str | None = Field(default=None, alias="defaultValue")
    locked: bool
    retired: bool = False
    rollout_strategies: list[dict] = Field(default_factory=list, alias="rolloutStrategies")
    shared_rollout_strategies: list[SharedRolloutStrategyVersionSchema] = Field(
        default_factory=list, alias="sharedRolloutStrategies",
    )
    feature_id: UUID = Field(alias="featureId")

    @classmethod
    def from_version(cls, version: FeatureValueVersion) -> "FeatureValueVersionSchema":
        return cls(
            feature_value_id=version.id.feature_value_id,
            version=version.id.version,
            when_created=version.when_created,
            who_created=version.who_created,
            default_value=version.default_value,
            locked=version.locked,
            retired=version.retired,
            rollout_strategies=[s.to_dict() for s in version.rollout_strategies],
            shared_rollout_strategies=[
                SharedRolloutStrategyVersionSchema.from_snapshot(s)
                for s in version.shared_rollout_strategies
            ],
            feature_id=version.feature_id,
        )

    def to_version(self) -> FeatureValueVersion:
        return FeatureValueVersion(
            id=VersionIdentity(self.feature_value_id, self.version),
            when_created=self.when_created,
            who_created=self.who_created,
            default_value=self.default_value,
            locked=self.locked,
            retired=self.retired,
            rollout_strategies=tuple(
                RolloutStrategy.from_dict(s) for s in self.rollout_strategies
            ),
            shared_rollout_strategies=tuple(
                s.to_snapshot() for s in self.shared_rollout_strategies
            ),
            feature_id=self.feature_id,
        )


def dump_shared_strategies(snapshots: tuple[SharedStrategySnapshot, ...]) -> list[dict]:
    """Serialize flattened shared strategies for the shared_strat column."""
    return [
        SharedRolloutStrategyVersionSchema.from_snapshot(s).model_dump(
            by_alias=True, mode="json",
        )
        for s in snapshots
    ]


def load_shared_strategies(raw: list[dict] | None) -> tuple[SharedStrategySnapshot, ...]:
    """Deserialize the shared_strat column. NULL reads as no strategies."""
    return tuple(
        SharedRolloutStrategyVersionSchema.model_validate(item).to_snapshot()
        for item in raw or []
    )


def dump_rollout_strategies(strategies: tuple[RolloutStrategy, ...]) -> list[dict]:
    return [s.to_dict() for s in strategies]


def load_rollout_strategies(raw: list[dict] | None) -> tuple[RolloutStrategy, ...]:
    return tuple(RolloutStrategy.from_dict(s) for s in raw or [])
