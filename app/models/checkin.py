from datetime import datetime, date
from sqlalchemy import Integer, String, DateTime, Date, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

TEXT_MAX_LENGTH = 200
USER_ID_MAX_LENGTH = 64


class DailyCheckIn(Base):
    """One self-reflection check-in per user per calendar date."""

    __tablename__ = "daily_checkins"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_checkin_user_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), nullable=False, index=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # 1–10
    mood_score: Mapped[int] = mapped_column(Integer, nullable=False)
    energy_score: Mapped[int] = mapped_column(Integer, nullable=False)
    stress_score: Mapped[int] = mapped_column(Integer, nullable=False)

    # 1–5
    pillar_self_awareness: Mapped[int] = mapped_column(Integer, nullable=False)
    pillar_mindset: Mapped[int] = mapped_column(Integer, nullable=False)
    pillar_action: Mapped[int] = mapped_column(Integer, nullable=False)
    pillar_impact: Mapped[int] = mapped_column(Integer, nullable=False)

    key_win: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False, default="")
    biggest_challenge: Mapped[str] = mapped_column(
        String(TEXT_MAX_LENGTH), nullable=False, default=""
    )
    pen_moment: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
