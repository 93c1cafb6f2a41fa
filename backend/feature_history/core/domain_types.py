"""Domain Types — rich identity types that replace bare UUIDs across the codebase.

Invariants:
    - FeatureValueId, FeatureId, PersonId, StrategyId, StrategyLinkId wrap UUIDs
    - Never use a bare UUID in domain logic where one of these applies

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Shared strategy links get their own id type: the resolver works on link ids,
      never on strategy ids (a strategy can be linked to many values)
"""

from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

FeatureValueId = NewType("FeatureValueId", UUID)
FeatureId = NewType("FeatureId", UUID)
PersonId = NewType("PersonId", UUID)
StrategyId = NewType("StrategyId", UUID)
StrategyLinkId = NewType("StrategyLinkId", UUID)
