"""ORM Models — SQLAlchemy declarative models for the live value graph and its history.

Invariants:
    - All models inherit from Base (db/base.py)
    - FeatureValue is the live, mutable aggregate; FeatureValueVersion rows are
      append-only snapshots of it

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from feature_history.models.person import Person  # noqa: F401
from feature_history.models.application_feature import ApplicationFeature  # noqa: F401
from feature_history.models.shared_rollout_strategy import SharedRolloutStrategy  # noqa: F401
from feature_history.models.strategy_for_feature_value import StrategyForFeatureValue  # noqa: F401
from feature_history.models.feature_value import FeatureValue  # noqa: F401
from feature_history.models.feature_value_version import FeatureValueVersion  # noqa: F401
