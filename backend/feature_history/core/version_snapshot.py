"""Version Snapshot — builds the immutable FeatureValueVersion from a live feature value.

Invariants:
    - build_feature_value_version is PURE: reads the live value, never writes to it
    - Version 1 is stamped with the live value's when_created; every later version
      with its when_updated
    - retired is True only when the live flag is exactly True (None and False -> False)
    - Inline strategies are deep-copied; shared strategies arrive already flattened
    - A live value missing a required field raises InvalidLiveValueError; nothing else
      is silently defaulted (absent strategy/link collections read as empty)

Design Decisions:
    - Shared strategy resolution is NOT done here: it needs IO, so the shell resolves
      and passes the snapshots in (functional core, imperative shell)
    - Frozen dataclasses with tuple fields: a built Version cannot be mutated in place
    - Versions are unhashable; VersionIdentity is the key to index them by
"""

from dataclasses import dataclass
from datetime import datetime

from feature_history.core.domain_types import FeatureId, PersonId
from feature_history.core.errors import ErrorContext, InvalidLiveValueError
from feature_history.core.repository_protocols import LiveFeatureValue
from feature_history.core.resolve_shared_strategies import SharedStrategySnapshot
from feature_history.core.rollout_strategy import RolloutStrategy, copy_rollout_strategies
from feature_history.core.version_identity import VersionIdentity


FIRST_VERSION: int = 1


@dataclass(frozen=True)
class FeatureValueVersion:
    """Immutable historical record of a feature value at one point in time."""
    id: VersionIdentity
    when_created: datetime
    who_created: PersonId
    default_value: str | None
    locked: bool
    retired: bool
    rollout_strategies: tuple[RolloutStrategy, ...]
    shared_rollout_strategies: tuple[SharedStrategySnapshot, ...]
    feature_id: FeatureId

    __hash__ = None


def select_when_created(live: LiveFeatureValue) -> datetime | None:
    """Creation timestamp for version 1, last-update timestamp otherwise."""
    if live.version == FIRST_VERSION:
        return live.when_created
    return live.when_updated


def coerce_retired(retired: bool | None) -> bool:
    return retired is True


def validate_live_value(live: LiveFeatureValue) -> None:
    """Raise InvalidLiveValueError for the first required field that is missing."""
    ctx = ErrorContext(
        feature_value_id=str(live.id) if live.id is not None else None,
        version=live.version if isinstance(live.version, int) else None,
    )

    if live.id is None:
        raise InvalidLiveValueError("Live value has no id", "id", ctx)
    version = live.version
    if version is None or isinstance(version, bool) or not isinstance(version, int):
        raise InvalidLiveValueError(
            f"Live value has no usable version number: {version!r}", "version", ctx,
        )
    if version < FIRST_VERSION:
        raise InvalidLiveValueError(
            f"Live value version must be >= {FIRST_VERSION}, got {version}",
            "version", ctx,
        )
    if live.who_updated_id is None:
        raise InvalidLiveValueError(
            "Live value has no updating actor", "who_updated_id", ctx,
        )
    if live.feature_id is None:
        raise InvalidLiveValueError(
            "Live value has no owning feature", "feature_id", ctx,
        )
    if live.locked is None:
        raise InvalidLiveValueError("Live value has no lock state", "locked", ctx)
    if select_when_created(live) is None:
        field = "when_created" if version == FIRST_VERSION else "when_updated"
        raise InvalidLiveValueError(
            f"Live value has no {field} timestamp for version {version}", field, ctx,
        )


def build_feature_value_version(
    live: LiveFeatureValue,
    shared_strategies: tuple[SharedStrategySnapshot, ...],
) -> FeatureValueVersion:
    """Assemble the Version from a live value and its resolved shared strategies."""
    validate_live_value(live)

    return FeatureValueVersion(
        id=VersionIdentity(live.id, live.version),
        when_created=select_when_created(live),
        who_created=live.who_updated_id,
        default_value=live.default_value,
        locked=bool(live.locked),
        retired=coerce_retired(live.retired),
        rollout_strategies=copy_rollout_strategies(live.rollout_strategies),
        shared_rollout_strategies=tuple(shared_strategies),
        feature_id=live.feature_id,
    )
