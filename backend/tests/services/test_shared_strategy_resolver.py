"""Shared Strategy Resolver — tests against a recording fake repository.

Invariants:
    - N distinct links -> exactly one repository call and N snapshots
    - Zero links -> no repository call
    - A dangling link fails the whole resolve with no partial output
"""

from uuid import uuid4

import pytest

from feature_history.core.errors import ReferenceResolutionError
from feature_history.core.resolve_shared_strategies import (
    SharedStrategySnapshot,
    StrategyLinkRow,
)
from feature_history.services.shared_strategy_resolver import SharedStrategyResolver
from tests.live_values import FakeLinkRepository, Link


def _rows(links):
    return [
        StrategyLinkRow(link.id, uuid4(), n + 1, n % 2 == 0, str(n))
        for n, link in enumerate(links)
    ]


async def test_resolves_every_link_in_one_call():
    links = [Link() for _ in range(4)]
    rows = _rows(links)
    repo = FakeLinkRepository(rows)

    result = await SharedStrategyResolver(repo).resolve(links)

    assert len(repo.calls) == 1
    assert repo.calls[0] == [link.id for link in links]
    assert result == tuple(
        SharedStrategySnapshot(r.strategy_id, r.strategy_version, r.enabled, r.value)
        for r in rows
    )


async def test_duplicate_links_fetched_once():
    link = Link()
    repo = FakeLinkRepository(_rows([link]))

    result = await SharedStrategyResolver(repo).resolve([link, link])

    assert repo.calls == [[link.id]]
    assert len(result) == 1


async def test_no_links_skips_repository():
    repo = FakeLinkRepository()
    assert await SharedStrategyResolver(repo).resolve([]) == ()
    assert repo.calls == []


async def test_dangling_link_fails_whole_resolve():
    links = [Link(), Link(), Link()]
    repo = FakeLinkRepository(_rows(links[:2]))

    with pytest.raises(ReferenceResolutionError) as exc:
        await SharedStrategyResolver(repo).resolve(links)

    assert exc.value.missing_link_ids == [links[2].id]


async def test_order_is_reproducible():
    links = [Link() for _ in range(5)]
    repo = FakeLinkRepository(_rows(links))
    resolver = SharedStrategyResolver(repo)

    first = await resolver.resolve(links)
    second = await resolver.resolve(links)

    assert first == second
