"""
Check-in store: one row per (user_id, date) in `daily_checkins`.

Public API
----------
get(db, user_id, day)                      -> DailyCheckIn | None
upsert(db, user_id, day, fields)           -> DailyCheckIn
delete(db, user_id, day)                   -> bool
query_range(db, user_id, start, end)       -> list[DailyCheckIn]   (inclusive)
query_month(db, user_id, year, month)      -> list[DailyCheckIn]

Uniqueness is enforced by `uq_checkin_user_date`. When two saves for the
same key race, the loser's INSERT fails and is retried as an UPDATE.
Any other SQLAlchemy error is rolled back and raised as StoreUnavailableError.
"""
from __future__ import annotations

import calendar
import logging
from datetime import date

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import InvalidDateRangeError, StoreUnavailableError
from app.models.checkin import DailyCheckIn
from app.schemas.checkin import CheckInInput

logger = logging.getLogger(__name__)


def _apply(row: DailyCheckIn, fields: CheckInInput) -> None:
    for name, value in fields.model_dump(by_alias=False).items():
        setattr(row, name, value)


def _find(db: Session, user_id: str, day: date) -> DailyCheckIn | None:
    return (
        db.query(DailyCheckIn)
        .filter(DailyCheckIn.user_id == user_id, DailyCheckIn.date == day)
        .first()
    )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get(db: Session, user_id: str, day: date) -> DailyCheckIn | None:
    try:
        return _find(db, user_id, day)
    except SQLAlchemyError as exc:
        logger.error("Check-in lookup failed for user=%s day=%s: %s", user_id, day, exc)
        raise StoreUnavailableError("get") from exc


def query_range(db: Session, user_id: str, start: date, end: date) -> list[DailyCheckIn]:
    if start > end:
        raise InvalidDateRangeError(start=start, end=end)
    try:
        return (
            db.query(DailyCheckIn)
            .filter(
                DailyCheckIn.user_id == user_id,
                DailyCheckIn.date >= start,
                DailyCheckIn.date <= end,
            )
            .order_by(DailyCheckIn.date)
            .all()
        )
    except SQLAlchemyError as exc:
        logger.error("Range query failed for user=%s %s..%s: %s", user_id, start, end, exc)
        raise StoreUnavailableError("query_range") from exc


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def query_month(db: Session, user_id: str, year: int, month: int) -> list[DailyCheckIn]:
    start, end = month_bounds(year, month)
    return query_range(db, user_id, start, end)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def upsert(db: Session, user_id: str, day: date, fields: CheckInInput) -> DailyCheckIn:
    """Create the check-in for (user_id, day), or overwrite it in place."""
    try:
        row = _find(db, user_id, day)
        created = row is None
        if created:
            row = DailyCheckIn(user_id=user_id, date=day)
            _apply(row, fields)
            db.add(row)
        else:
            _apply(row, fields)

        try:
            db.commit()
        except IntegrityError:
            # A concurrent save created the row first; overwrite it instead.
            db.rollback()
            row = _find(db, user_id, day)
            if row is None:
                raise
            _apply(row, fields)
            db.commit()
            created = False

        db.refresh(row)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Check-in upsert failed for user=%s day=%s: %s", user_id, day, exc)
        raise StoreUnavailableError("upsert") from exc

    logger.info("Check-in %s for user=%s day=%s", "created" if created else "updated", user_id, day)
    return row


def delete(db: Session, user_id: str, day: date) -> bool:
    """Remove the check-in row. Returns False if there was nothing to delete."""
    try:
        deleted = (
            db.query(DailyCheckIn)
            .filter(DailyCheckIn.user_id == user_id, DailyCheckIn.date == day)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Check-in delete failed for user=%s day=%s: %s", user_id, day, exc)
        raise StoreUnavailableError("delete") from exc

    if deleted:
        logger.info("Check-in deleted for user=%s day=%s", user_id, day)
    return bool(deleted)
