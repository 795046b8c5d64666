"""Shared formatting functions for display values."""

from typing import Optional

from .series import round_half_up
from .statistics import NO_DATA, StatValue


def format_stat(value: StatValue) -> str:
    """Format a min/max value for a stat pill."""
    if value == NO_DATA:
        return NO_DATA
    return str(value)


def format_average(value: StatValue) -> str:
    """Format an average with exactly one decimal."""
    if value == NO_DATA:
        return NO_DATA
    return f"{float(value):.1f}"


def format_days(days: Optional[int]) -> str:
    """Human label for a lookback span."""
    if days is None:
        return "N/A"
    if days == 1:
        return "1 day"
    return f"Last {days} days"


# Badge colors from 1 (red) to 10 (mint)
RATING_COLORS = (
    "#FF3B30",
    "#FF5733",
    "#FF7A33",
    "#FF9500",
    "#FFB347",
    "#FFCC00",
    "#A8D844",
    "#34C759",
    "#00B894",
    "#00D4AA",
)


def rating_color(score: StatValue) -> str:
    """Badge color for a score; neutral gray when there is no data."""
    if score == NO_DATA:
        return "#8E8E93"
    index = max(0, min(9, round_half_up(float(score)) - 1))
    return RATING_COLORS[index]
