"""Deterministic sample data shown when no real ratings are available.

Scores follow a sine wave whose phase depends on the category's position, so
each category gets its own recognisable shape and the same inputs always
produce the same series.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional

from .series import Category, ScorePoint, Series, clamp_score, round_half_up


@dataclass(frozen=True)
class FallbackPreset:
    """Wave parameters for one kind of sample data."""

    name: str
    freq: float
    phase: float
    amplitude: float
    center: float

    def score(self, index: int, category_index: int) -> int:
        value = math.sin(index * self.freq + category_index * self.phase) * self.amplitude + self.center
        return clamp_score(value)


# Home screen "last 7 days" preview
WEEK_PREVIEW = FallbackPreset(name="week_preview", freq=0.5, phase=1.9, amplitude=2.5, center=6.5)

# Stats cards for the week/month/year selector
STATS_PERIOD = FallbackPreset(name="stats_period", freq=0.35, phase=1.9, amplitude=2.5, center=6.5)

# Multi-category demo history
SAMPLE_HISTORY = FallbackPreset(name="sample_history", freq=0.7, phase=2.3, amplitude=3.0, center=6.5)

WEEK_PREVIEW_DAYS = 7
SAMPLE_HISTORY_DAYS = 14


def generate_fallback_series(
    category_index: int,
    length: int,
    preset: FallbackPreset = STATS_PERIOD,
    today: Optional[date] = None,
) -> Series:
    """Build a synthetic series of ``length`` days ending today.

    Args:
        category_index: Position of the category in the user's list;
            negative (category not found) is treated as 0
        length: Number of days, oldest first
        preset: Wave parameters
        today: Date of the last point, defaults to the current day

    Returns:
        Series with integer scores in [1, 10]
    """
    if today is None:
        today = date.today()
    category_index = max(category_index, 0)

    return [
        ScorePoint(
            date=(today - timedelta(days=length - 1 - i)).isoformat(),
            score=preset.score(i, category_index),
        )
        for i in range(length)
    ]


def generate_week_preview(category_index: int, today: Optional[date] = None) -> Series:
    """Seven days of sample data for the home screen preview."""
    return generate_fallback_series(category_index, WEEK_PREVIEW_DAYS, WEEK_PREVIEW, today)


def generate_sample_history(
    categories: list[Category],
    days: int = SAMPLE_HISTORY_DAYS,
    today: Optional[date] = None,
) -> list[dict[str, Any]]:
    """Sample day-by-day history across all categories.

    Library-only: the stats site charts one category at a time and never
    needs this. It is for callers that show demo history before any ratings
    exist.

    Returns:
        One dict per day, oldest first:
        ``{"date", "ratings": [{"category_id", "score"}], "average_score"}``
    """
    if today is None:
        today = date.today()

    history = []
    for i in range(days):
        day = (today - timedelta(days=days - 1 - i)).isoformat()
        ratings = [
            {"category_id": cat.id, "score": SAMPLE_HISTORY.score(i, ci)}
            for ci, cat in enumerate(categories)
        ]
        if ratings:
            average = round_half_up(sum(r["score"] for r in ratings) / len(ratings), 1)
        else:
            average = None
        history.append({"date": day, "ratings": ratings, "average_score": average})
    return history
