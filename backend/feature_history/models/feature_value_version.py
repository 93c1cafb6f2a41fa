"""FeatureValueVersion ORM — append-only history of a feature value.

Invariants:
    - Composite primary key (fv_id, version): one row per VersionIdentity, for all time
    - Rows are inserted once and never updated or deleted by this package
    - shared_strat holds flattened {"strategyId", "version", "enabled", "value"} objects;
      NULL reads back as an empty list
    - fv_id carries no foreign key: history outlives the live value

Design Decisions:
    - JSON columns for both strategy lists: the snapshot is read as a whole, never queried
      by strategy contents
    - Column name shared_strat kept short to match the existing schema
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Integer, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from feature_history.db.base import Base


class FeatureValueVersion(Base):
    """Immutable snapshot row of a FeatureValue."""
    __tablename__ = "fh_fv_version"

    fv_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    version: Mapped[int] = mapped_column(Integer, primary_key=True)
    when_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    who_created_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("fh_person.id"), nullable=False,
    )
    default_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    retired: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rollout_strategies: Mapped[list | None] = mapped_column(JSON, nullable=True)
    shared_strat: Mapped[list | None] = mapped_column(JSON, nullable=True)
    feature_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("fh_app_feature.id"), nullable=False,
    )
