"""ApplicationFeature ORM — the feature a value belongs to.

Invariants:
    - key is unique within an application
    - Features are not versioned: live values and versions reference them by id

Design Decisions:
    - application_id kept as a bare UUID column: application management lives elsewhere
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from feature_history.db.base import Base


class ApplicationFeature(Base):
    """Feature definition, owner of feature values across environments."""
    __tablename__ = "fh_app_feature"
    __table_args__ = (
        UniqueConstraint("application_id", "feature_key", name="uq_app_feature_key"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    application_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False,
    )
    feature_key: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    value_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="BOOLEAN",
    )
    when_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
