"""
Check-ins router.

GET    /checkins/today      — today's check-in (or null)
PUT    /checkins/today      — save today's check-in
GET    /checkins/week       — weekly averages + strongest / weakest pillar
GET    /checkins/history    — one month of check-ins grouped by week
GET    /checkins/{day}      — check-in for a date (or null)
PUT    /checkins/{day}      — edit the check-in for a date
DELETE /checkins/{day}      — delete the check-in for a date
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from app.core.errors import IncompleteDateRangeError
from app.core.security import get_current_user_id
from app.db.base import get_db
from app.models.checkin import DailyCheckIn
from app.schemas.checkin import (
    AveragesOut,
    CheckInInput,
    CheckInOut,
    DeleteResponse,
    MonthHistoryOut,
    PillarOut,
    WeekBucketOut,
    WeekSummaryOut,
)
from app.schemas.common import ErrorResponse
from app.services import checkin_store
from app.services.aggregation import (
    PILLARS,
    Averages,
    PillarScore,
    WeekSummary,
    entry_strongest_pillar,
    pillar_average,
    pillar_feedback,
)
from app.services.journal import month_history, month_for_offset, today, week_bounds, week_summary

router = APIRouter(
    prefix="/checkins",
    tags=["checkins"],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token."}},
)

# About a century either way; keeps offset arithmetic inside the date range.
MAX_WEEK_OFFSET = 5200
MAX_MONTH_OFFSET = 1200


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _checkin_to_response(c: DailyCheckIn) -> CheckInOut:
    return CheckInOut(
        id=c.id,
        date=str(c.date),
        mood_score=c.mood_score,
        energy_score=c.energy_score,
        stress_score=c.stress_score,
        pillar_self_awareness=c.pillar_self_awareness,
        pillar_mindset=c.pillar_mindset,
        pillar_action=c.pillar_action,
        pillar_impact=c.pillar_impact,
        key_win=c.key_win or "",
        biggest_challenge=c.biggest_challenge or "",
        pen_moment=c.pen_moment or "",
        pillar_average=float(pillar_average(c)),
        pillar_feedback={p.key: pillar_feedback(getattr(c, p.attr)) for p in PILLARS},
        strongest_pillar=_pillar_to_response(entry_strongest_pillar(c)),
        updated_at=c.updated_at.isoformat() if c.updated_at else None,
    )


def _averages_to_response(a: Averages) -> AveragesOut:
    return AveragesOut(
        mood=float(a.mood),
        energy=float(a.energy),
        stress=float(a.stress),
        self_awareness=float(a.self_awareness),
        mindset=float(a.mindset),
        action=float(a.action),
        impact=float(a.impact),
    )


def _pillar_to_response(p: Optional[PillarScore]) -> Optional[PillarOut]:
    if p is None:
        return None
    return PillarOut(key=p.key, name=p.name, value=float(p.value))


def _summary_to_response(s: WeekSummary, start: date, end: date) -> WeekSummaryOut:
    return WeekSummaryOut(
        start_date=str(start),
        end_date=str(end),
        entries=[_checkin_to_response(c) for c in s.entries],
        averages=_averages_to_response(s.averages) if s.averages else None,
        strongest_pillar=_pillar_to_response(s.strongest_pillar),
        weakest_pillar=_pillar_to_response(s.weakest_pillar),
    )


def _optional(c: Optional[DailyCheckIn]) -> Optional[CheckInOut]:
    return _checkin_to_response(c) if c is not None else None


# ---------------------------------------------------------------------------
# Today
# ---------------------------------------------------------------------------

@router.get(
    "/today",
    response_model=Optional[CheckInOut],
    summary="Today's check-in",
    responses={200: {"description": "The check-in for today (UTC), or null if none yet."}},
)
def get_today(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return _optional(checkin_store.get(db, user_id, today()))


@router.put(
    "/today",
    response_model=CheckInOut,
    summary="Save today's check-in",
    responses={422: {"model": ErrorResponse, "description": "Missing or non-integer score."}},
)
def save_today(
    payload: CheckInInput,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create or overwrite today's check-in. Saving twice on the same day
    updates the existing entry in place.
    """
    return _checkin_to_response(checkin_store.upsert(db, user_id, today(), payload))


# ---------------------------------------------------------------------------
# Weekly rollup
# ---------------------------------------------------------------------------

@router.get(
    "/week",
    response_model=WeekSummaryOut,
    summary="Weekly averages and strongest / weakest pillar",
    responses={422: {"model": ErrorResponse, "description": "Invalid or half-open date range."}},
)
def get_week(
    start_date: Optional[date] = Query(
        default=None, description="First day (inclusive).", examples=["2026-10-18"]
    ),
    end_date: Optional[date] = Query(
        default=None, description="Last day (inclusive).", examples=["2026-10-24"]
    ),
    week_offset: int = Query(
        default=0,
        ge=-MAX_WEEK_OFFSET,
        le=MAX_WEEK_OFFSET,
        description="Weeks relative to the current Sunday–Saturday week. "
                    "Ignored when start_date / end_date are given.",
    ),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Summarize the check-ins in a date range.

    Averages are rounded half-up to one decimal per metric. On ties, the
    strongest and weakest pillar both resolve to the first in the order
    Self-awareness, Mindset, Action, Impact.
    `averages`, `strongestPillar` and `weakestPillar` are null for an empty week.
    """
    if (start_date is None) != (end_date is None):
        provided, missing = ("start_date", "end_date") if start_date else ("end_date", "start_date")
        raise IncompleteDateRangeError(provided=provided, missing=missing)
    if start_date is None:
        start_date, end_date = week_bounds(offset=week_offset)

    summary = week_summary(db, user_id, start_date, end_date)
    return _summary_to_response(summary, start_date, end_date)


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

@router.get(
    "/history",
    response_model=MonthHistoryOut,
    summary="One month of check-ins grouped by week",
)
def get_history(
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    month_offset: int = Query(
        default=0,
        ge=-MAX_MONTH_OFFSET,
        le=MAX_MONTH_OFFSET,
        description="Months relative to the current month. Ignored when year / month are given.",
    ),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Weeks start on Sunday; weeks and the entries inside them are oldest first."""
    if (year is None) != (month is None):
        provided, missing = ("year", "month") if year is not None else ("month", "year")
        raise IncompleteDateRangeError(provided=provided, missing=missing)
    if year is None:
        year, month = month_for_offset(offset=month_offset)

    history = month_history(db, user_id, year, month)
    return MonthHistoryOut(
        year=history.year,
        month=history.month,
        total_entries=history.total_entries,
        weeks=[
            WeekBucketOut(
                week_start=str(w.week_start),
                week_end=str(w.week_end),
                entries=[_checkin_to_response(c) for c in w.entries],
            )
            for w in history.weeks
        ],
    )


# ---------------------------------------------------------------------------
# Single date
# ---------------------------------------------------------------------------

DayParam = Annotated[date, Path(description="ISO date (YYYY-MM-DD).", examples=["2026-10-19"])]


@router.get(
    "/{day}",
    response_model=Optional[CheckInOut],
    summary="Check-in for a date",
    responses={200: {"description": "The check-in, or null if none exists for that date."}},
)
def get_by_date(
    day: DayParam,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return _optional(checkin_store.get(db, user_id, day))


@router.put(
    "/{day}",
    response_model=CheckInOut,
    summary="Edit the check-in for a date",
    responses={422: {"model": ErrorResponse, "description": "Missing or non-integer score."}},
)
def save_for_date(
    payload: CheckInInput,
    day: DayParam,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Overwrite (or create) the check-in stored under `day`."""
    return _checkin_to_response(checkin_store.upsert(db, user_id, day, payload))


@router.delete(
    "/{day}",
    response_model=DeleteResponse,
    summary="Delete the check-in for a date",
)
def delete_by_date(
    day: DayParam,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Remove the row entirely. `success` is false if there was nothing to delete."""
    return DeleteResponse(success=checkin_store.delete(db, user_id, day), date=str(day))
