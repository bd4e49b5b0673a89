"""
Check-in request / response schemas.

Save:     PUT /checkins/today, PUT /checkins/{day}  → CheckInInput → CheckInOut
Read:     GET /checkins/today, GET /checkins/{day}  → CheckInOut | null
Rollup:   GET /checkins/week                        → WeekSummaryOut
History:  GET /checkins/history                     → MonthHistoryOut
"""
from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import Field, StrictInt, field_validator

from app.models.checkin import TEXT_MAX_LENGTH
from app.schemas.common import CamelModel

# Score ranges (inclusive)
WELLBEING_MIN, WELLBEING_MAX = 1, 10
PILLAR_MIN, PILLAR_MAX = 1, 5


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class CheckInInput(CamelModel):
    """A validated check-in.

    - Every score is required and must be an integer.
    - Out-of-range scores are clamped (1–10 wellbeing, 1–5 pillars).
    - Reflections default to "" and are truncated to 200 characters.
    """

    mood_score: StrictInt = Field(description="Mood, 1–10.", examples=[7])
    energy_score: StrictInt = Field(description="Energy, 1–10.", examples=[6])
    stress_score: StrictInt = Field(description="Stress, 1–10.", examples=[3])

    pillar_self_awareness: StrictInt = Field(
        description="Did I notice my patterns and feelings today? 1–5.", examples=[4]
    )
    pillar_mindset: StrictInt = Field(
        description="Did I choose a helpful attitude today? 1–5.", examples=[3]
    )
    pillar_action: StrictInt = Field(
        description="Did I do what I said I would do? 1–5.", examples=[5]
    )
    pillar_impact: StrictInt = Field(
        description="Did I show up in a way that lifted others? 1–5.", examples=[2]
    )

    key_win: Annotated[str, Field(description="Key win of the day.")] = ""
    biggest_challenge: Annotated[str, Field(description="What was tricky.")] = ""
    pen_moment: Annotated[str, Field(description="A moment worth writing down.")] = ""

    @field_validator("mood_score", "energy_score", "stress_score")
    @classmethod
    def clamp_wellbeing(cls, v: int) -> int:
        return _clamp(v, WELLBEING_MIN, WELLBEING_MAX)

    @field_validator(
        "pillar_self_awareness", "pillar_mindset", "pillar_action", "pillar_impact"
    )
    @classmethod
    def clamp_pillar(cls, v: int) -> int:
        return _clamp(v, PILLAR_MIN, PILLAR_MAX)

    @field_validator("key_win", "biggest_challenge", "pen_moment", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("key_win", "biggest_challenge", "pen_moment")
    @classmethod
    def truncate(cls, v: str) -> str:
        return v[:TEXT_MAX_LENGTH]


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class PillarOut(CamelModel):
    key: str = Field(examples=["selfAwareness"])
    name: str = Field(examples=["Self-awareness"])
    value: float


class CheckInOut(CamelModel):
    id: int
    date: str = Field(description="ISO date of the check-in.")
    mood_score: int
    energy_score: int
    stress_score: int
    pillar_self_awareness: int
    pillar_mindset: int
    pillar_action: int
    pillar_impact: int
    key_win: str
    biggest_challenge: str
    pen_moment: str
    pillar_average: float = Field(description="Mean of the four pillars, one decimal.")
    pillar_feedback: dict[str, str] = Field(
        description="Short encouragement per pillar key; empty for middling scores."
    )
    strongest_pillar: PillarOut = Field(
        description="Highest pillar score of this entry; ties go to the first declared."
    )
    updated_at: Optional[str] = None


class AveragesOut(CamelModel):
    mood: float
    energy: float
    stress: float
    self_awareness: float
    mindset: float
    action: float
    impact: float


class WeekSummaryOut(CamelModel):
    """Averages and pillar extremes for a date range.

    `averages`, `strongestPillar` and `weakestPillar` are null when the
    range holds no check-ins. Null means "no data", never zero.
    """
    start_date: str
    end_date: str
    entries: list[CheckInOut]
    averages: Optional[AveragesOut] = None
    strongest_pillar: Optional[PillarOut] = None
    weakest_pillar: Optional[PillarOut] = None


class WeekBucketOut(CamelModel):
    week_start: str = Field(description="Sunday that starts the week.")
    week_end: str = Field(description="Saturday that ends the week.")
    entries: list[CheckInOut]


class MonthHistoryOut(CamelModel):
    year: int
    month: int
    total_entries: int
    weeks: list[WeekBucketOut] = Field(description="Week buckets, oldest first.")


class DeleteResponse(CamelModel):
    success: bool = Field(description="False when no check-in existed for that date.")
    date: str
