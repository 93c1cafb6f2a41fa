"""FeatureValue ORM — the live, mutable value of a feature in one environment.

Invariants:
    - version starts at 1 and is incremented by the value-update workflow on every change
    - retired is tri-state in storage (NULL, false, true); versions read NULL as false
    - rollout_strategies stores inline strategies in their JSON wire shape
    - Satisfies core LiveFeatureValue structurally (same attribute names)

Design Decisions:
    - shared_rollout_strategies loaded with selectin: a snapshot needs the link ids
      and async sessions cannot lazy-load
    - who_updated_id nullable at the storage level; building a version without it fails
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Integer, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from feature_history.db.base import Base


class FeatureValue(Base):
    """Live feature value, source of every FeatureValueVersion."""
    __tablename__ = "fh_featvalue"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    feature_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("fh_app_feature.id"), nullable=False,
    )
    environment_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    default_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    retired: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    rollout_strategies: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    who_updated_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("fh_person.id"), nullable=True,
    )
    when_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    when_updated: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    # Relationships
    shared_rollout_strategies: Mapped[list["StrategyForFeatureValue"]] = relationship(
        "StrategyForFeatureValue", back_populates="feature_value",
        cascade="all, delete-orphan", lazy="selectin",
    )
