"""Min/avg/max summaries for a score series."""

from dataclasses import dataclass
from typing import Union

from .series import Series, round_half_up

# Shown instead of a number when the series is empty; never treat it as 0
NO_DATA = "—"

StatValue = Union[int, float, str]


@dataclass(frozen=True)
class Stats:
    """Statistics for a series (min/avg/max)."""

    min: StatValue = NO_DATA
    avg: StatValue = NO_DATA
    max: StatValue = NO_DATA

    @property
    def has_data(self) -> bool:
        return self.avg != NO_DATA

    def to_dict(self) -> dict[str, StatValue]:
        return {"min": self.min, "avg": self.avg, "max": self.max}


def calculate_statistics(series: Series) -> Stats:
    """Calculate min/avg/max over the series scores.

    The average is rounded half-up to one decimal; min and max are actual
    scores from the series.
    """
    if not series:
        return Stats()

    scores = [p.score for p in series]
    return Stats(
        min=min(scores),
        avg=round_half_up(sum(scores) / len(scores), 1),
        max=max(scores),
    )
