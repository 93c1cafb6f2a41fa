"""Shared Strategy Flattening — tests for link id collection and row flattening.

Tests cover:
    - collect_link_ids dedupes and keeps first-seen order
    - flatten_link_rows returns one snapshot per link, in requested order
    - Dangling links raise ReferenceResolutionError listing every missing id
    - Snapshots do not alias row payloads
"""

from uuid import uuid4

import pytest

from feature_history.core.errors import ReferenceResolutionError
from feature_history.core.resolve_shared_strategies import (
    SharedStrategySnapshot,
    StrategyLinkRow,
    collect_link_ids,
    flatten_link_rows,
)
from tests.live_values import Link


def _row(link_id, version=1, enabled=True, value="on"):
    return StrategyLinkRow(link_id, uuid4(), version, enabled, value)


def test_collect_link_ids_dedupes_in_first_seen_order():
    a, b = Link(), Link()
    assert collect_link_ids([b, a, b, Link(id=a.id)]) == [b.id, a.id]


def test_collect_link_ids_accepts_bare_ids_and_none():
    ids = [uuid4(), uuid4()]
    assert collect_link_ids(ids) == ids
    assert collect_link_ids(None) == []


def test_flatten_returns_one_snapshot_per_link():
    ids = [uuid4() for _ in range(3)]
    rows = [_row(i, version=n + 1) for n, i in enumerate(ids)]

    snapshots = flatten_link_rows(ids, rows)

    assert len(snapshots) == 3
    for snapshot, row in zip(snapshots, rows):
        assert snapshot == SharedStrategySnapshot(
            row.strategy_id, row.strategy_version, row.enabled, row.value,
        )


def test_flatten_follows_requested_order_not_row_order():
    ids = [uuid4() for _ in range(3)]
    rows = {i: _row(i) for i in ids}

    snapshots = flatten_link_rows(ids, [rows[i] for i in reversed(ids)])

    assert [s.strategy_id for s in snapshots] == [rows[i].strategy_id for i in ids]


def test_flatten_ignores_unrequested_rows():
    wanted = uuid4()
    snapshots = flatten_link_rows([wanted], [_row(wanted), _row(uuid4())])
    assert len(snapshots) == 1


def test_dangling_link_raises_with_all_missing_ids():
    present, gone1, gone2 = uuid4(), uuid4(), uuid4()

    with pytest.raises(ReferenceResolutionError) as exc:
        flatten_link_rows([present, gone1, gone2], [_row(present)])

    assert exc.value.missing_link_ids == [gone1, gone2]
    assert exc.value.code == "REFERENCE_RESOLUTION_FAILED"


def test_no_links_flatten_to_empty():
    assert flatten_link_rows([], []) == ()


def test_snapshot_value_does_not_alias_row_payload():
    link_id = uuid4()
    payload = {"limit": 5}
    row = _row(link_id, value=payload)

    snapshot = flatten_link_rows([link_id], [row])[0]
    payload["limit"] = 10

    assert snapshot.value == {"limit": 5}


def test_enabled_coerced_to_bool():
    link_id = uuid4()
    snapshot = flatten_link_rows([link_id], [_row(link_id, enabled=1)])[0]
    assert snapshot.enabled is True
