"""
Aggregation engine — weekly rollup and history grouping for check-ins.

summarize(records)
------------------
  entries           records sorted by ISO date (input left untouched)
  averages          per metric: sum / count, ROUND_HALF_UP to 1 decimal,
                    computed from the exact integer sum of each metric
  strongest_pillar  left-to-right fold over PILLARS, replaced only by a
                    strictly greater average
  weakest_pillar    same fold, replaced only by a strictly lesser average

Ties on either extreme go to the first-declared pillar.
With no records, averages / strongest_pillar / weakest_pillar are None:
"no data" is distinct from zero, which is never a valid score.

group_by_week(records)
----------------------
  Buckets keyed by the Sunday on or before each record's date
  (day-of-week 0 = Sunday). Buckets and records inside them are
  chronological. Calendar dates only, no timezone arithmetic.

No I/O, no shared state. Records are anything exposing `date` plus the
seven score attributes of DailyCheckIn (ORM rows, dataclasses, ...).
Scores are not range-checked here; odd values are averaged as given.
"""
from __future__ import annotations

import operator
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, NamedTuple, Optional, Sequence

_ONE_DECIMAL = Decimal("0.1")


# ---------------------------------------------------------------------------
# Metric declarations
# ---------------------------------------------------------------------------

class Pillar(NamedTuple):
    key: str     # wire key, e.g. "selfAwareness"
    name: str    # human-readable
    attr: str    # record attribute


# Declaration order is the tie-break order.
PILLARS: tuple[Pillar, ...] = (
    Pillar("selfAwareness", "Self-awareness", "pillar_self_awareness"),
    Pillar("mindset", "Mindset", "pillar_mindset"),
    Pillar("action", "Action", "pillar_action"),
    Pillar("impact", "Impact", "pillar_impact"),
)

# (Averages field, record attribute)
METRICS: tuple[tuple[str, str], ...] = (
    ("mood", "mood_score"),
    ("energy", "energy_score"),
    ("stress", "stress_score"),
    ("self_awareness", "pillar_self_awareness"),
    ("mindset", "pillar_mindset"),
    ("action", "pillar_action"),
    ("impact", "pillar_impact"),
)

_PILLAR_FIELD = {
    "selfAwareness": "self_awareness",
    "mindset": "mindset",
    "action": "action",
    "impact": "impact",
}


# ---------------------------------------------------------------------------
# Result types (plain dataclasses — no ORM, no Pydantic)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Averages:
    mood: Decimal
    energy: Decimal
    stress: Decimal
    self_awareness: Decimal
    mindset: Decimal
    action: Decimal
    impact: Decimal

    def pillar(self, key: str) -> Decimal:
        return getattr(self, _PILLAR_FIELD[key])


@dataclass(frozen=True)
class PillarScore:
    key: str
    name: str
    value: Decimal


@dataclass(frozen=True)
class WeekSummary:
    entries: list[Any] = field(default_factory=list)
    averages: Optional[Averages] = None
    strongest_pillar: Optional[PillarScore] = None
    weakest_pillar: Optional[PillarScore] = None

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class WeekBucket:
    week_start: date
    entries: list[Any]

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def round_half_up(total: int | Decimal, count: int) -> Decimal:
    """total / count rounded half-up to one decimal place."""
    return (Decimal(total) / Decimal(count)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def _as_date(value: date | str) -> date:
    return value if isinstance(value, date) else date.fromisoformat(value)


def _date_key(record: Any) -> str:
    return _as_date(record.date).isoformat()


def _fold(scores: Sequence[PillarScore], beats: Callable[[Decimal, Decimal], bool]) -> PillarScore:
    winner = scores[0]
    for candidate in scores[1:]:
        if beats(candidate.value, winner.value):
            winner = candidate
    return winner


# ---------------------------------------------------------------------------
# Public — weekly rollup
# ---------------------------------------------------------------------------

def compute_averages(records: Sequence[Any]) -> Optional[Averages]:
    if not records:
        return None
    count = len(records)
    return Averages(**{
        name: round_half_up(sum(getattr(r, attr) for r in records), count)
        for name, attr in METRICS
    })


def pillar_scores(averages: Averages) -> list[PillarScore]:
    return [PillarScore(key=p.key, name=p.name, value=averages.pillar(p.key)) for p in PILLARS]


def strongest_pillar(averages: Averages) -> PillarScore:
    return _fold(pillar_scores(averages), operator.gt)


def weakest_pillar(averages: Averages) -> PillarScore:
    return _fold(pillar_scores(averages), operator.lt)


def summarize(records: Sequence[Any]) -> WeekSummary:
    """Roll a set of check-ins up into a WeekSummary."""
    if not records:
        return WeekSummary(entries=[])

    averages = compute_averages(records)
    return WeekSummary(
        entries=sorted(records, key=_date_key),
        averages=averages,
        strongest_pillar=strongest_pillar(averages),
        weakest_pillar=weakest_pillar(averages),
    )


# ---------------------------------------------------------------------------
# Public — history grouping
# ---------------------------------------------------------------------------

def week_start(day: date | str) -> date:
    """The Sunday on or before `day`."""
    d = _as_date(day)
    # date.weekday(): Monday=0 .. Sunday=6  →  days since Sunday
    return d - timedelta(days=(d.weekday() + 1) % 7)


def group_by_week(records: Sequence[Any]) -> list[WeekBucket]:
    buckets: dict[date, list[Any]] = {}
    for record in records:
        buckets.setdefault(week_start(record.date), []).append(record)

    return [
        WeekBucket(week_start=start, entries=sorted(buckets[start], key=_date_key))
        for start in sorted(buckets)
    ]


# ---------------------------------------------------------------------------
# Public — per-entry derived values
# ---------------------------------------------------------------------------

def pillar_average(record: Any) -> Decimal:
    """Mean of one record's four pillar scores, half-up to one decimal."""
    return round_half_up(sum(getattr(record, p.attr) for p in PILLARS), len(PILLARS))


def entry_strongest_pillar(record: Any) -> PillarScore:
    """Highest of one record's raw pillar scores; ties go to the first declared."""
    scores = [PillarScore(key=p.key, name=p.name, value=Decimal(getattr(record, p.attr))) for p in PILLARS]
    return _fold(scores, operator.gt)


def pillar_feedback(score: int) -> str:
    if score >= 4:
        return "Nice. This pillar is working for you today."
    if score <= 2:
        return "All good. This is just data, not judgement."
    return ""
