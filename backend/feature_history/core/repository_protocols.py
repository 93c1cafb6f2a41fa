"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, the ORM FeatureValue satisfies
      LiveFeatureValue without inheriting from anything
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves
"""

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from feature_history.core.domain_types import (
    FeatureId, FeatureValueId, PersonId, StrategyLinkId,
)

if TYPE_CHECKING:
    from feature_history.core.resolve_shared_strategies import StrategyLinkRow
    from feature_history.core.version_identity import VersionIdentity
    from feature_history.core.version_snapshot import FeatureValueVersion


class StrategyLinkLike(Protocol):
    """A live value's link to a shared strategy; only its id is read."""
    id: StrategyLinkId


class LiveFeatureValue(Protocol):
    """Read-only view of a live feature value at the moment of snapshotting."""
    id: FeatureValueId | None
    version: int | None
    when_created: datetime | None
    when_updated: datetime | None
    who_updated_id: PersonId | None
    default_value: str | None
    locked: bool | None
    retired: bool | None
    rollout_strategies: list | None
    shared_rollout_strategies: list[StrategyLinkLike] | None
    feature_id: FeatureId | None


class StrategyLinkRepository(Protocol):
    """Batched link lookup, implemented by shell. One round trip per call."""
    async def fetch_link_definitions(
        self, link_ids: list[StrategyLinkId],
    ) -> list["StrategyLinkRow"]: ...


class FeatureValueVersionRepository(Protocol):
    """Contract for Version persistence, implemented by shell."""
    async def exists(self, identity: "VersionIdentity") -> bool: ...
    async def add(self, version: "FeatureValueVersion") -> None: ...
    async def get(self, identity: "VersionIdentity") -> "FeatureValueVersion | None": ...
    async def list_for_feature_value(
        self, feature_value_id: FeatureValueId,
    ) -> list["FeatureValueVersion"]: ...
