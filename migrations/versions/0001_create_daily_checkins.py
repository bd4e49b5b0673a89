"""create daily_checkins table

Revision ID: 0001
Revises:
Create Date: 2026-10-19

One row per (user_id, date). Saving again for the same key updates in place;
uq_checkin_user_date makes concurrent saves collapse to a single row.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "daily_checkins",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("mood_score", sa.Integer(), nullable=False),
        sa.Column("energy_score", sa.Integer(), nullable=False),
        sa.Column("stress_score", sa.Integer(), nullable=False),
        sa.Column("pillar_self_awareness", sa.Integer(), nullable=False),
        sa.Column("pillar_mindset", sa.Integer(), nullable=False),
        sa.Column("pillar_action", sa.Integer(), nullable=False),
        sa.Column("pillar_impact", sa.Integer(), nullable=False),
        sa.Column("key_win", sa.String(200), nullable=False, server_default=""),
        sa.Column("biggest_challenge", sa.String(200), nullable=False, server_default=""),
        sa.Column("pen_moment", sa.String(200), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "date", name="uq_checkin_user_date"),
    )
    op.create_index("ix_daily_checkins_id", "daily_checkins", ["id"])
    op.create_index("ix_daily_checkins_user_id", "daily_checkins", ["user_id"])
    op.create_index("ix_daily_checkins_date", "daily_checkins", ["date"])


def downgrade() -> None:
    op.drop_index("ix_daily_checkins_date", table_name="daily_checkins")
    op.drop_index("ix_daily_checkins_user_id", table_name="daily_checkins")
    op.drop_index("ix_daily_checkins_id", table_name="daily_checkins")
    op.drop_table("daily_checkins")
