"""
Journal service: calendar windows + store reads fed into the aggregation engine.

week_bounds(reference, offset)        -> (sunday, saturday)
month_for_offset(reference, offset)   -> (year, month)
week_summary(db, user_id, start, end) -> WeekSummary
month_history(db, user_id, year, month) -> MonthHistory
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.services import checkin_store
from app.services.aggregation import WeekBucket, WeekSummary, group_by_week, summarize, week_start


def today() -> date:
    return datetime.now(tz=timezone.utc).date()


# ---------------------------------------------------------------------------
# Calendar windows
# ---------------------------------------------------------------------------

def week_bounds(reference: Optional[date] = None, offset: int = 0) -> tuple[date, date]:
    """Sunday–Saturday week containing `reference`, shifted by `offset` weeks."""
    start = week_start(reference or today()) + timedelta(weeks=offset)
    return start, start + timedelta(days=6)


def month_for_offset(reference: Optional[date] = None, offset: int = 0) -> tuple[int, int]:
    ref = reference or today()
    index = ref.year * 12 + (ref.month - 1) + offset
    return index // 12, index % 12 + 1


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@dataclass
class MonthHistory:
    year: int
    month: int
    total_entries: int
    weeks: list[WeekBucket]


def week_summary(db: Session, user_id: str, start: date, end: date) -> WeekSummary:
    return summarize(checkin_store.query_range(db, user_id, start, end))


def month_history(db: Session, user_id: str, year: int, month: int) -> MonthHistory:
    records = checkin_store.query_month(db, user_id, year, month)
    return MonthHistory(
        year=year,
        month=month,
        total_entries=len(records),
        weeks=group_by_week(records),
    )
