"""X-axis label selection.

Label density is fixed per span so text never overlaps, whatever the zoom:

- up to a week: every point, labelled with its weekday letter
- up to a month: five evenly spaced points, labelled with the day of month
- longer: the first point of each month, labelled with the month name
"""

import calendar
from dataclasses import dataclass

from .series import Series, round_half_up

# Indexed by days since Sunday
WEEKDAY_LETTERS = ("S", "M", "T", "W", "T", "F", "S")

WEEK_SPAN = 7
MONTH_SPAN = 31


@dataclass(frozen=True)
class AxisLabel:
    """Label text for the point at ``index`` of the series."""

    index: int
    label: str


def _weekday_labels(series: Series) -> list[AxisLabel]:
    return [
        AxisLabel(i, WEEKDAY_LETTERS[point.day.isoweekday() % 7])
        for i, point in enumerate(series)
    ]


def _day_of_month_labels(series: Series) -> list[AxisLabel]:
    n = len(series)
    picks = [0, round_half_up(n / 4), round_half_up(n / 2), round_half_up(3 * n / 4), n - 1]
    labels = []
    for i in dict.fromkeys(picks):
        labels.append(AxisLabel(i, str(series[i].day.day)))
    return labels


def _month_labels(series: Series) -> list[AxisLabel]:
    seen: set[int] = set()
    labels = []
    for i, point in enumerate(series):
        month = point.day.month
        if month in seen:
            continue
        seen.add(month)
        labels.append(AxisLabel(i, calendar.month_abbr[month]))
    return labels


def get_x_labels(series: Series) -> list[AxisLabel]:
    """Choose which points get an X-axis label and what it says."""
    n = len(series)
    if n == 0:
        return []
    if n <= WEEK_SPAN:
        return _weekday_labels(series)
    if n <= MONTH_SPAN:
        return _day_of_month_labels(series)
    return _month_labels(series)
