"""
Unit tests for the aggregation engine. Pure functions, no DB.

Covered:
  - empty input → entries=[], everything else None
  - per-metric averages, half-up to one decimal
  - strongest / weakest pillar with first-declared tie-break
  - single record, idempotence, order independence
  - Sunday-keyed week buckets
"""
from __future__ import annotations

import copy
import random
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from app.services.aggregation import (
    PILLARS,
    WeekSummary,
    entry_strongest_pillar,
    group_by_week,
    pillar_average,
    pillar_feedback,
    round_half_up,
    summarize,
    week_start,
)


@dataclass
class Rec:
    date: date | str
    mood_score: int = 5
    energy_score: int = 5
    stress_score: int = 5
    pillar_self_awareness: int = 3
    pillar_mindset: int = 3
    pillar_action: int = 3
    pillar_impact: int = 3


def _pillars(sa, ms, ac, im, day="2026-10-19") -> Rec:
    return Rec(
        date=date.fromisoformat(day),
        pillar_self_awareness=sa,
        pillar_mindset=ms,
        pillar_action=ac,
        pillar_impact=im,
    )


def _week(*moods: int) -> list[Rec]:
    return [Rec(date=date(2026, 10, 18 + i), mood_score=m) for i, m in enumerate(moods)]


# ---------------------------------------------------------------------------
# Empty input
# ---------------------------------------------------------------------------

class TestEmpty:
    def test_empty_summary_has_no_data(self):
        result = summarize([])
        assert result.entries == []
        assert result.averages is None
        assert result.strongest_pillar is None
        assert result.weakest_pillar is None
        assert result.is_empty

    def test_empty_is_not_zero(self):
        assert summarize([]) == WeekSummary(entries=[])


# ---------------------------------------------------------------------------
# Averages
# ---------------------------------------------------------------------------

class TestAverages:
    def test_two_moods_average(self):
        result = summarize(_week(4, 7))
        assert result.averages.mood == Decimal("5.5")

    def test_rounds_half_up_not_half_even(self):
        # 5 / 4 = 1.25 → 1.3 (banker's rounding would give 1.2)
        result = summarize(_week(1, 1, 1, 2))
        assert result.averages.mood == Decimal("1.3")

    def test_repeating_fraction(self):
        # 20 / 3 = 6.666… → 6.7
        result = summarize(_week(6, 7, 7))
        assert result.averages.mood == Decimal("6.7")

    def test_each_metric_averaged_independently(self):
        records = [
            Rec(date=date(2026, 10, 18), mood_score=1, energy_score=10, stress_score=3,
                pillar_self_awareness=1, pillar_mindset=2, pillar_action=3, pillar_impact=4),
            Rec(date=date(2026, 10, 19), mood_score=2, energy_score=9, stress_score=4,
                pillar_self_awareness=2, pillar_mindset=2, pillar_action=5, pillar_impact=5),
        ]
        a = summarize(records).averages
        assert a.mood == Decimal("1.5")
        assert a.energy == Decimal("9.5")
        assert a.stress == Decimal("3.5")
        assert a.self_awareness == Decimal("1.5")
        assert a.mindset == Decimal("2.0")
        assert a.action == Decimal("4.0")
        assert a.impact == Decimal("4.5")

    def test_odd_scores_are_averaged_as_given(self):
        result = summarize(_week(0, -4))
        assert result.averages.mood == Decimal("-2.0")

    def test_round_half_up_helper(self):
        assert round_half_up(13, 4) == Decimal("3.3")
        assert round_half_up(4, 1) == Decimal("4.0")
        assert round_half_up(1, 20) == Decimal("0.1")  # 0.05 → 0.1


# ---------------------------------------------------------------------------
# Strongest / weakest pillar
# ---------------------------------------------------------------------------

class TestPillarExtremes:
    def test_all_equal_resolves_to_self_awareness(self):
        records = [_pillars(3, 3, 3, 3, f"2026-10-{18 + i}") for i in range(4)]
        result = summarize(records)
        assert result.strongest_pillar.name == "Self-awareness"
        assert result.weakest_pillar.name == "Self-awareness"
        assert result.strongest_pillar.value == Decimal("3.0")

    def test_strongest_tie_goes_to_first_declared(self):
        result = summarize([_pillars(1, 5, 2, 5)])
        assert result.strongest_pillar.name == "Mindset"
        assert result.strongest_pillar.key == "mindset"

    def test_weakest_tie_goes_to_first_declared(self):
        result = summarize([_pillars(4, 5, 2, 2)])
        assert result.weakest_pillar.name == "Action"

    def test_strictly_greater_later_pillar_wins(self):
        result = summarize([_pillars(2, 3, 4, 5)])
        assert result.strongest_pillar.name == "Impact"
        assert result.weakest_pillar.name == "Self-awareness"

    def test_extremes_use_rounded_averages(self):
        # mindset 3.25 → 3.3, action 3.3 → ties on the rounded value, Mindset first
        records = [
            _pillars(1, 3, 3, 1, "2026-10-18"),
            _pillars(1, 3, 4, 1, "2026-10-19"),
            _pillars(1, 3, 3, 1, "2026-10-20"),
            _pillars(1, 4, 3, 1, "2026-10-21"),
        ]
        result = summarize(records)
        assert result.averages.mindset == Decimal("3.3")
        assert result.averages.action == Decimal("3.3")
        assert result.strongest_pillar.name == "Mindset"

    def test_pillar_declaration_order(self):
        assert [p.name for p in PILLARS] == ["Self-awareness", "Mindset", "Action", "Impact"]


# ---------------------------------------------------------------------------
# Single record
# ---------------------------------------------------------------------------

class TestSingleRecord:
    def test_averages_equal_raw_values(self):
        record = Rec(
            date=date(2026, 10, 19), mood_score=8, energy_score=6, stress_score=2,
            pillar_self_awareness=5, pillar_mindset=1, pillar_action=3, pillar_impact=4,
        )
        result = summarize([record])
        a = result.averages
        assert (a.mood, a.energy, a.stress) == (Decimal("8.0"), Decimal("6.0"), Decimal("2.0"))
        assert (a.self_awareness, a.mindset, a.action, a.impact) == (
            Decimal("5.0"), Decimal("1.0"), Decimal("3.0"), Decimal("4.0"),
        )
        assert result.strongest_pillar.name == "Self-awareness"
        assert result.strongest_pillar.value == Decimal("5.0")
        assert result.weakest_pillar.name == "Mindset"
        assert result.weakest_pillar.value == Decimal("1.0")
        assert result.entries == [record]


# ---------------------------------------------------------------------------
# Purity
# ---------------------------------------------------------------------------

class TestPurity:
    def _records(self) -> list[Rec]:
        return [
            Rec(date=date(2026, 10, 22), mood_score=3, pillar_action=5),
            Rec(date=date(2026, 10, 18), mood_score=9, pillar_impact=1),
            Rec(date=date(2026, 10, 20), mood_score=6, pillar_mindset=4),
        ]

    def test_idempotent(self):
        records = self._records()
        assert summarize(records) == summarize(records)

    def test_input_not_mutated(self):
        records = self._records()
        snapshot = copy.deepcopy(records)
        summarize(records)
        assert records == snapshot

    def test_order_independent(self):
        records = self._records()
        baseline = summarize(records)
        shuffled = records[:]
        random.Random(7).shuffle(shuffled)
        for candidate in (shuffled, list(reversed(records))):
            assert summarize(candidate) == baseline

    def test_entries_sorted_by_date(self):
        result = summarize(self._records())
        assert [str(r.date) for r in result.entries] == [
            "2026-10-18", "2026-10-20", "2026-10-22",
        ]

    def test_entries_sorted_with_iso_strings(self):
        records = [Rec(date="2026-10-21"), Rec(date="2026-10-05"), Rec(date="2026-10-13")]
        result = summarize(records)
        assert [r.date for r in result.entries] == ["2026-10-05", "2026-10-13", "2026-10-21"]


# ---------------------------------------------------------------------------
# Week grouping
# ---------------------------------------------------------------------------

class TestWeekGrouping:
    @pytest.mark.parametrize("day,expected", [
        ("2026-10-18", "2026-10-18"),  # Sunday is its own week start
        ("2026-10-19", "2026-10-18"),  # Monday
        ("2026-10-24", "2026-10-18"),  # Saturday
        ("2026-10-13", "2026-10-11"),  # Tuesday
        ("2026-11-01", "2026-11-01"),  # Sunday, new month
        ("2026-10-01", "2026-09-27"),  # Thursday, week starts in previous month
    ])
    def test_week_start_is_previous_sunday(self, day, expected):
        assert week_start(date.fromisoformat(day)) == date.fromisoformat(expected)

    def test_tuesday_and_following_monday_split(self):
        tuesday = Rec(date=date(2026, 10, 13))
        monday = Rec(date=date(2026, 10, 19))
        buckets = group_by_week([monday, tuesday])
        assert len(buckets) == 2
        assert buckets[0].week_start == date(2026, 10, 11)
        assert buckets[0].entries == [tuesday]
        assert buckets[1].week_start == date(2026, 10, 18)
        assert buckets[1].entries == [monday]

    def test_buckets_and_entries_chronological(self):
        records = [
            Rec(date=date(2026, 10, 24)),
            Rec(date=date(2026, 10, 2)),
            Rec(date=date(2026, 10, 18)),
            Rec(date=date(2026, 10, 1)),
        ]
        buckets = group_by_week(records)
        assert [b.week_start for b in buckets] == [date(2026, 9, 27), date(2026, 10, 18)]
        assert [r.date for r in buckets[0].entries] == [date(2026, 10, 1), date(2026, 10, 2)]
        assert [r.date for r in buckets[1].entries] == [date(2026, 10, 18), date(2026, 10, 24)]

    def test_week_end_is_saturday(self):
        bucket = group_by_week([Rec(date=date(2026, 10, 20))])[0]
        assert bucket.week_end == date(2026, 10, 24)

    def test_empty_month_has_no_buckets(self):
        assert group_by_week([]) == []


# ---------------------------------------------------------------------------
# Per-entry helpers
# ---------------------------------------------------------------------------

class TestEntryHelpers:
    def test_pillar_average(self):
        assert pillar_average(_pillars(5, 1, 3, 4)) == Decimal("3.3")

    @pytest.mark.parametrize("score,expected", [
        (5, "Nice. This pillar is working for you today."),
        (4, "Nice. This pillar is working for you today."),
        (3, ""),
        (2, "All good. This is just data, not judgement."),
        (1, "All good. This is just data, not judgement."),
    ])
    def test_pillar_feedback(self, score, expected):
        assert pillar_feedback(score) == expected

    def test_entry_strongest_pillar_uses_raw_scores(self):
        best = entry_strongest_pillar(_pillars(5, 1, 3, 4))
        assert (best.key, best.name, best.value) == ("selfAwareness", "Self-awareness", Decimal(5))

    @pytest.mark.parametrize("scores,expected", [
        ((1, 5, 2, 5), "Mindset"),
        ((3, 3, 3, 3), "Self-awareness"),
        ((2, 2, 4, 4), "Action"),
        ((1, 2, 3, 5), "Impact"),
    ])
    def test_entry_strongest_pillar_tie_goes_to_first_declared(self, scores, expected):
        assert entry_strongest_pillar(_pillars(*scores)).name == expected
