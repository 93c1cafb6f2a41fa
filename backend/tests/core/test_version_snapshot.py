"""Version Snapshot — tests for the pure FeatureValueVersion assembly.

Invariants:
    - Version 1 takes when_created, every later version takes when_updated
    - retired: None -> False, False -> False, True -> True
    - Inline strategies are deep copies: mutating the live list afterwards changes nothing
    - Versions are unhashable and indexed by their VersionIdentity
    - Missing required fields raise InvalidLiveValueError naming the field

Design Decisions:
    - Pure tests (no IO, no DB): shared strategies are passed in already flattened
"""

import dataclasses
from uuid import uuid4

import pytest

from feature_history.core.errors import InvalidLiveValueError
from feature_history.core.resolve_shared_strategies import SharedStrategySnapshot
from feature_history.core.rollout_strategy import RolloutStrategy
from feature_history.core.version_identity import VersionIdentity
from feature_history.core.version_snapshot import (
    build_feature_value_version,
    coerce_retired,
    select_when_created,
    validate_live_value,
)
from tests.live_values import CREATED, UPDATED, LiveValue


# ─── Timestamp rule ──────────────────────────────────────────────

def test_version_one_uses_creation_timestamp():
    live = LiveValue(version=1)
    assert select_when_created(live) == CREATED
    assert build_feature_value_version(live, ()).when_created == CREATED


@pytest.mark.parametrize("version", [2, 3, 50])
def test_later_versions_use_update_timestamp(version):
    live = LiveValue(version=version)
    assert build_feature_value_version(live, ()).when_created == UPDATED


def test_version_one_ignores_missing_update_timestamp():
    live = LiveValue(version=1, when_updated=None)
    assert build_feature_value_version(live, ()).when_created == CREATED


# ─── Retired coercion ────────────────────────────────────────────

@pytest.mark.parametrize("retired, expected", [(None, False), (False, False), (True, True)])
def test_retired_coercion(retired, expected):
    assert coerce_retired(retired) is expected
    version = build_feature_value_version(LiveValue(retired=retired), ())
    assert version.retired is expected


def test_truthy_non_bool_retired_is_not_true():
    assert coerce_retired(1) is False


# ─── Field copying ───────────────────────────────────────────────

def test_copies_scalar_fields_and_identity():
    live = LiveValue(version=4, default_value="blue", locked=True)
    version = build_feature_value_version(live, ())

    assert version.id == VersionIdentity(live.id, 4)
    assert version.who_created == live.who_updated_id
    assert version.default_value == "blue"
    assert version.locked is True
    assert version.feature_id == live.feature_id


def test_empty_default_value_distinct_from_none():
    assert build_feature_value_version(LiveValue(default_value=""), ()).default_value == ""
    assert build_feature_value_version(LiveValue(default_value=None), ()).default_value is None


def test_inline_strategies_are_frozen_in_order():
    live = LiveValue(rollout_strategies=[
        {"id": "a", "name": "first", "percentage": 20000, "value": "x"},
        {"id": "b", "name": "second", "value": "y"},
    ])
    version = build_feature_value_version(live, ())

    assert [s.id for s in version.rollout_strategies] == ["a", "b"]
    assert isinstance(version.rollout_strategies, tuple)
    assert all(isinstance(s, RolloutStrategy) for s in version.rollout_strategies)


def test_missing_collections_read_as_empty():
    live = LiveValue(rollout_strategies=None, shared_rollout_strategies=None)
    version = build_feature_value_version(live, ())
    assert version.rollout_strategies == ()
    assert version.shared_rollout_strategies == ()


def test_shared_strategies_embedded_as_given():
    shared = (SharedStrategySnapshot(uuid4(), 2, True, "5"),)
    version = build_feature_value_version(LiveValue(), list(shared))
    assert version.shared_rollout_strategies == shared


# ─── Decoupling ──────────────────────────────────────────────────

def test_mutating_live_strategies_after_build_changes_nothing():
    attrs = [{"id": "at1", "conditional": "EQUALS", "fieldName": "country", "values": ["nz"], "type": "STRING"}]
    strategies = [{"id": "a", "name": "nz only", "value": {"colour": "red"}, "attributes": attrs}]
    live = LiveValue(rollout_strategies=strategies)

    version = build_feature_value_version(live, ())
    before = version.rollout_strategies[0].to_dict()

    strategies[0]["name"] = "changed"
    strategies[0]["value"]["colour"] = "green"
    attrs[0]["values"].append("au")
    strategies.append({"id": "b"})
    live.default_value = "false"

    assert version.rollout_strategies[0].to_dict() == before
    assert len(version.rollout_strategies) == 1
    assert version.default_value == "true"


def test_version_is_frozen():
    version = build_feature_value_version(LiveValue(), ())
    with pytest.raises(dataclasses.FrozenInstanceError):
        version.locked = True


def test_versions_are_indexed_by_identity():
    live = LiveValue(rollout_strategies=[{"id": "a", "value": {"colour": "red"}}])
    version = build_feature_value_version(live, (SharedStrategySnapshot(uuid4(), 1, True, {"k": 1}),))

    with pytest.raises(TypeError):
        hash(version)
    with pytest.raises(TypeError):
        hash(version.shared_rollout_strategies[0])
    assert {version.id: version}[VersionIdentity(live.id, live.version)] is version


# ─── Validation ──────────────────────────────────────────────────

@pytest.mark.parametrize("overrides, field", [
    ({"id": None}, "id"),
    ({"version": None}, "version"),
    ({"version": 0}, "version"),
    ({"version": "3"}, "version"),
    ({"who_updated_id": None}, "who_updated_id"),
    ({"feature_id": None}, "feature_id"),
    ({"locked": None}, "locked"),
    ({"version": 1, "when_created": None}, "when_created"),
    ({"version": 2, "when_updated": None}, "when_updated"),
])
def test_invalid_live_value_names_field(overrides, field):
    live = LiveValue(**overrides)
    with pytest.raises(InvalidLiveValueError) as exc:
        validate_live_value(live)
    assert exc.value.field == field
    assert exc.value.code == "INVALID_LIVE_VALUE"


def test_build_raises_for_invalid_live_value():
    with pytest.raises(InvalidLiveValueError):
        build_feature_value_version(LiveValue(who_updated_id=None), ())


def test_error_context_carries_value_and_version():
    live = LiveValue(version=5, when_updated=None)
    with pytest.raises(InvalidLiveValueError) as exc:
        validate_live_value(live)
    assert exc.value.context.feature_value_id == str(live.id)
    assert exc.value.context.version == 5
