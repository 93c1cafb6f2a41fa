"""Shared Strategy Flattening — turns fetched link rows into decoupled snapshots.

Invariants:
    - collect_link_ids is PURE: distinct ids, first-seen order
    - flatten_link_rows returns exactly one snapshot per requested link id, or raises
      ReferenceResolutionError listing every dangling id (never a partial result)
    - Output order follows the requested id order, not the order rows arrive in
    - Snapshots copy scalar fields by value: no row object is retained
    - Rows and snapshots are unhashable: value is arbitrary JSON

Design Decisions:
    - Separated from the resolver service: the IO (one batched fetch) lives in the shell,
      the completeness check and flattening live here and are tested without a DB
    - Rows for ids that were not requested are ignored: the store may over-return
"""

import copy
from dataclasses import dataclass
from typing import Any, Iterable

from feature_history.core.domain_types import StrategyId, StrategyLinkId
from feature_history.core.errors import ReferenceResolutionError


@dataclass(frozen=True)
class StrategyLinkRow:
    """One row of the batched link lookup: link + the strategy it points at."""
    link_id: StrategyLinkId
    strategy_id: StrategyId
    strategy_version: int
    enabled: bool
    value: Any = None

    __hash__ = None


@dataclass(frozen=True)
class SharedStrategySnapshot:
    """Flattened copy of a shared strategy link, embedded in a Version."""
    strategy_id: StrategyId
    strategy_version: int
    enabled: bool
    value: Any = None

    __hash__ = None


def collect_link_ids(links: Iterable) -> list[StrategyLinkId]:
    """Distinct link ids in first-seen order. Accepts link objects or bare ids."""
    seen: dict[StrategyLinkId, None] = {}
    for link in links or ():
        link_id = getattr(link, "id", link)
        seen.setdefault(link_id, None)
    return list(seen)


def flatten_link_rows(
    link_ids: list[StrategyLinkId], rows: Iterable[StrategyLinkRow],
) -> tuple[SharedStrategySnapshot, ...]:
    """Build snapshots for link_ids from fetched rows. Pure, no IO."""
    by_link = {row.link_id: row for row in rows}

    missing = [link_id for link_id in link_ids if link_id not in by_link]
    if missing:
        raise ReferenceResolutionError(missing)

    return tuple(_snapshot(by_link[link_id]) for link_id in link_ids)


def _snapshot(row: StrategyLinkRow) -> SharedStrategySnapshot:
    return SharedStrategySnapshot(
        strategy_id=row.strategy_id,
        strategy_version=row.strategy_version,
        enabled=bool(row.enabled),
        value=copy.deepcopy(row.value),
    )
