"""Root conftest — shared test configuration and async database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - seed_graph inserts a feature, an actor and two shared strategies; tests add values

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency, sufficient for the
      relational shape exercised here (PostgreSQL-specific features are not used)
"""

import os

# Ensure tests never reach a real database through Settings defaults
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from feature_history.db.base import Base
import feature_history.models  # noqa: F401
from feature_history.models.application_feature import ApplicationFeature
from feature_history.models.feature_value import FeatureValue
from feature_history.models.person import Person
from feature_history.models.shared_rollout_strategy import SharedRolloutStrategy
from feature_history.models.strategy_for_feature_value import StrategyForFeatureValue
from tests.live_values import CREATED, UPDATED


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_graph(test_db):
    """Insert feature, actor and two shared strategies."""
    alice = Person(name="alice", email="alice@example.com")
    feature = ApplicationFeature(
        application_id=uuid4(), feature_key="checkout_v2",
        name="Checkout v2", value_type="BOOLEAN",
    )
    s1 = SharedRolloutStrategy(name="beta users", version=2, strategy={"percentage": 10000})
    s2 = SharedRolloutStrategy(name="staff", version=7, strategy={})
    test_db.add_all([alice, feature, s1, s2])
    await test_db.commit()
    return {"alice": alice, "feature": feature, "s1": s1, "s2": s2}


@pytest.fixture
def make_live_value(test_db, seed_graph):
    """Factory: persist a FeatureValue linked to the given shared strategies."""

    async def _make(version=3, links=(), **fields) -> FeatureValue:
        value = FeatureValue(
            feature_id=seed_graph["feature"].id,
            version=version,
            default_value=fields.pop("default_value", "on"),
            locked=fields.pop("locked", False),
            retired=fields.pop("retired", None),
            rollout_strategies=fields.pop("rollout_strategies", []),
            who_updated_id=seed_graph["alice"].id,
            when_created=CREATED,
            when_updated=UPDATED,
            **fields,
        )
        for strategy, enabled, link_value in links:
            value.shared_rollout_strategies.append(StrategyForFeatureValue(
                rollout_strategy_id=strategy.id, enabled=enabled, value=link_value,
            ))
        test_db.add(value)
        await test_db.commit()
        return value

    return _make
