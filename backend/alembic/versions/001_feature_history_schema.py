"""Initial schema — persons, features, live values, shared strategies, links, versions.

Revision ID: 001_feature_history
Revises: None
Create Date: 2026-10-18

fh_fv_version is append-only: composite primary key (fv_id, version), no FK on fv_id
so history survives deletion of the live value.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_feature_history"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "fh_person",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("when_created", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "fh_app_feature",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("application_id", UUID(as_uuid=True), nullable=False),
        sa.Column("feature_key", sa.String(100), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("value_type", sa.String(20), nullable=False, server_default="BOOLEAN"),
        sa.Column("when_created", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("application_id", "feature_key", name="uq_app_feature_key"),
    )

    op.create_table(
        "fh_app_strategy",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("strategy", sa.JSON, nullable=False),
        sa.Column("when_created", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("when_updated", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "fh_featvalue",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("feature_id", UUID(as_uuid=True), sa.ForeignKey("fh_app_feature.id"), nullable=False),
        sa.Column("environment_id", UUID(as_uuid=True), nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("default_value", sa.Text, nullable=True),
        sa.Column("locked", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("retired", sa.Boolean, nullable=True),
        sa.Column("rollout_strategies", sa.JSON, nullable=False),
        sa.Column("who_updated_id", UUID(as_uuid=True), sa.ForeignKey("fh_person.id"), nullable=True),
        sa.Column("when_created", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("when_updated", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "fh_strat_for_feature",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "feature_value_id", UUID(as_uuid=True),
            sa.ForeignKey("fh_featvalue.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "rollout_strategy_id", UUID(as_uuid=True),
            sa.ForeignKey("fh_app_strategy.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("value", sa.Text, nullable=True),
    )
    op.create_index("ix_strat_for_feature_fv", "fh_strat_for_feature", ["feature_value_id"])

    op.create_table(
        "fh_fv_version",
        sa.Column("fv_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("version", sa.Integer, primary_key=True),
        sa.Column("when_created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("who_created_id", UUID(as_uuid=True), sa.ForeignKey("fh_person.id"), nullable=False),
        sa.Column("default_value", sa.Text, nullable=True),
        sa.Column("locked", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("retired", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("rollout_strategies", sa.JSON, nullable=True),
        sa.Column("shared_strat", sa.JSON, nullable=True),
        sa.Column("feature_id", UUID(as_uuid=True), sa.ForeignKey("fh_app_feature.id"), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("fh_fv_version")
    op.drop_index("ix_strat_for_feature_fv", table_name="fh_strat_for_feature")
    op.drop_table("fh_strat_for_feature")
    op.drop_table("fh_featvalue")
    op.drop_table("fh_app_strategy")
    op.drop_table("fh_app_feature")
    op.drop_table("fh_person")
