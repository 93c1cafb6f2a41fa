"""StrategyForFeatureValue ORM — link row between a live value and a shared strategy.

Invariants:
    - Always belongs to a FeatureValue (feature_value_id FK)
    - enabled and value are link-level overrides, captured into versions by value

Design Decisions:
    - value stored as Text: feature payloads are serialized strings regardless of type
"""

import uuid

from sqlalchemy import Boolean, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from feature_history.db.base import Base


class StrategyForFeatureValue(Base):
    """Link from a feature value to a shared rollout strategy."""
    __tablename__ = "fh_strat_for_feature"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    feature_value_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("fh_featvalue.id", ondelete="CASCADE"),
        nullable=False,
    )
    rollout_strategy_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("fh_app_strategy.id", ondelete="CASCADE"),
        nullable=False,
    )
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    feature_value: Mapped["FeatureValue"] = relationship(
        "FeatureValue", back_populates="shared_rollout_strategies",
    )
    rollout_strategy: Mapped["SharedRolloutStrategy"] = relationship(
        "SharedRolloutStrategy",
    )
