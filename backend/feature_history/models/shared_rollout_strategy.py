"""SharedRolloutStrategy ORM — a reusable rollout strategy linked by many feature values.

Invariants:
    - version starts at 1 and is bumped by the strategy editing workflow (not here)
    - Versions only record (id, version) of a shared strategy, never its body

Design Decisions:
    - strategy body stored as JSON in the inline strategy wire shape
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from feature_history.db.base import Base


class SharedRolloutStrategy(Base):
    """Shared rollout strategy definition, independently versioned."""
    __tablename__ = "fh_app_strategy"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    strategy: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    when_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    when_updated: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
