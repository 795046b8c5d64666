"""Daily score series, categories and the viewport a chart is drawn into.

A series is a plain list of ``ScorePoint`` ordered oldest first. Ordering is
the caller's responsibility; nothing in this package re-sorts a series.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Union

MIN_SCORE = 1
MAX_SCORE = 10

# Fallback when a caller asks for a nonsensical number of days
DEFAULT_DAYS = 7

# Period selector: lookback in days and display label
PERIOD_CONFIG = {
    "week": {"days": 7, "label": "Week"},
    "month": {"days": 30, "label": "Month"},
    "year": {"days": 365, "label": "Year"},
}

DEFAULT_CHART_HEIGHT = 130


def round_half_up(value: float, ndigits: int = 0) -> Union[int, float]:
    """Round with halves going up, returning an int when ndigits is 0.

    ``round()`` uses banker's rounding, which would turn 6.5 into 6.
    """
    if ndigits == 0:
        return math.floor(value + 0.5)
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp_score(score: float) -> int:
    """Clamp a score into [1, 10] as an integer."""
    return max(MIN_SCORE, min(MAX_SCORE, int(round_half_up(score))))


@dataclass(frozen=True)
class ScorePoint:
    """One day's score for a category."""

    date: str  # YYYY-MM-DD, no time component
    score: int

    @property
    def day(self) -> date:
        return date.fromisoformat(self.date)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ScorePoint":
        """Build from a provider record ``{"rated_date": ..., "score": ...}``."""
        return cls(date=str(record["rated_date"]), score=clamp_score(record["score"]))

    def to_record(self) -> dict[str, Any]:
        return {"rated_date": self.date, "score": self.score}


Series = list[ScorePoint]


def series_from_records(records: list[dict[str, Any]]) -> Series:
    """Convert provider records to a series, keeping their order."""
    return [ScorePoint.from_record(r) for r in records]


@dataclass(frozen=True)
class Category:
    """A user-defined rating category."""

    id: str
    name: str
    color: str
    glyph: str = ""
    sort_order: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=str(data["id"]),
            name=data.get("name", str(data["id"])),
            color=data.get("color", "#00D4AA"),
            glyph=data.get("emoji", data.get("glyph", "")),
            sort_order=int(data.get("sortOrder", data.get("sort_order", 0))),
        )


@dataclass(frozen=True)
class Padding:
    """Space between the viewport edge and the plotted content."""

    top: float = 12
    bottom: float = 22
    left: float = 28
    right: float = 8


@dataclass(frozen=True)
class Viewport:
    """Pixel size and padding for a single render call."""

    width: float
    height: float = DEFAULT_CHART_HEIGHT
    padding: Padding = field(default_factory=Padding)

    @property
    def content_width(self) -> float:
        return self.width - self.padding.left - self.padding.right

    @property
    def content_height(self) -> float:
        return self.height - self.padding.top - self.padding.bottom

    @property
    def bottom(self) -> float:
        """Y coordinate of the content area's bottom edge."""
        return self.padding.top + self.content_height


def days_for_period(period: str) -> int:
    """Get the lookback in days for a period name.

    Raises:
        ValueError: If the period is not one of week/month/year
    """
    try:
        return PERIOD_CONFIG[period]["days"]
    except KeyError:
        raise ValueError(f"Unknown period: {period}") from None


def normalize_days(days: Any) -> int:
    """Coerce a requested day count, defaulting to a week when invalid."""
    try:
        value = int(days)
    except (TypeError, ValueError):
        return DEFAULT_DAYS
    return value if value > 0 else DEFAULT_DAYS


@dataclass(frozen=True)
class Selection:
    """The category and time span a chart is showing."""

    category_id: str
    days: int

    @classmethod
    def for_period(cls, category_id: str, period: str) -> "Selection":
        return cls(category_id=category_id, days=days_for_period(period))
