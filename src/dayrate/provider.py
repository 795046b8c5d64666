"""Rating provider seam: fetch a category's scores, or fall back to samples.

The provider is the only asynchronous collaborator. Its outcome is turned
into an explicit ``Ok``/``Err`` result by ``fetch_series``; everything after
that point is synchronous. An empty result and a failure are treated the
same way: the chart shows deterministic sample data flagged ``is_sample``.
"""

import asyncio
import json
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Protocol, Union

from .fallback import STATS_PERIOD, FallbackPreset, generate_fallback_series
from .series import Category, Selection, Series, normalize_days, series_from_records
from . import log


class ProviderError(Exception):
    """The rating provider could not return ratings (auth, network, I/O)."""


@dataclass(frozen=True)
class Ok:
    series: Series


@dataclass(frozen=True)
class Err:
    reason: str


FetchResult = Union[Ok, Err]


class RatingProvider(Protocol):
    """Anything that can fetch a category's recent ratings."""

    async def fetch_ratings(self, token: Optional[str], category_id: str, days: int) -> Series:
        ...


def _within_days(series: Series, days: int, today: date) -> Series:
    """Points from the last ``days`` calendar days including today, in order."""
    cutoff = (today - timedelta(days=days - 1)).isoformat()
    return [p for p in series if p.date >= cutoff]


class StaticRatingProvider:
    """In-memory provider keyed by category id."""

    def __init__(self, ratings: dict[str, Series], today: Optional[date] = None):
        self.ratings = ratings
        self.today = today

    async def fetch_ratings(self, token: Optional[str], category_id: str, days: int) -> Series:
        if not token:
            raise ProviderError("no token")
        today = self.today or date.today()
        return _within_days(self.ratings.get(category_id, []), normalize_days(days), today)


class JsonFileRatingProvider:
    """Provider backed by a ratings export file.

    The file maps category ids to lists of ``{"rated_date", "score"}``
    records, oldest first. It is re-read on every fetch.
    """

    def __init__(self, path: Path, today: Optional[date] = None):
        self.path = path
        self.today = today

    async def fetch_ratings(self, token: Optional[str], category_id: str, days: int) -> Series:
        if not token:
            raise ProviderError("no token")

        try:
            raw = await asyncio.to_thread(self.path.read_text)
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError) as e:
            raise ProviderError(f"Failed to read ratings from {self.path}: {e}") from e

        records = data.get(category_id, []) if isinstance(data, dict) else []
        try:
            series = series_from_records(records)
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Malformed rating record for {category_id}: {e}") from e

        today = self.today or date.today()
        return _within_days(series, normalize_days(days), today)


async def fetch_series(
    provider: RatingProvider,
    token: Optional[str],
    selection: Selection,
) -> FetchResult:
    """Make exactly one provider call and capture its outcome.

    Returns:
        Ok with the (possibly empty) series, or Err with the failure reason
    """
    try:
        log.debug("Fetching ratings", category=selection.category_id, days=selection.days)
        series = await provider.fetch_ratings(
            token, selection.category_id, normalize_days(selection.days)
        )
    except Exception as e:
        log.warn(f"Rating provider failed: {e}", category=selection.category_id)
        return Err(str(e) or type(e).__name__)

    return Ok(list(series))


@dataclass(frozen=True)
class ChartData:
    """The series to chart for a selection and whether it is sample data."""

    selection: Selection
    series: Series
    is_sample: bool
    reason: Optional[str] = None  # why sample data was used


def resolve_series(
    result: FetchResult,
    selection: Selection,
    category_index: int,
    preset: FallbackPreset = STATS_PERIOD,
    today: Optional[date] = None,
) -> ChartData:
    """Use real ratings when there are any, otherwise sample data."""
    if isinstance(result, Ok) and result.series:
        return ChartData(selection=selection, series=result.series, is_sample=False)

    reason = result.reason if isinstance(result, Err) else "no data"
    log.debug("Using sample data", category=selection.category_id, reason=reason)
    series = generate_fallback_series(
        category_index, normalize_days(selection.days), preset, today
    )
    return ChartData(selection=selection, series=series, is_sample=True, reason=reason)


async def load_chart_data(
    provider: RatingProvider,
    token: Optional[str],
    selection: Selection,
    category_index: int,
    preset: FallbackPreset = STATS_PERIOD,
    today: Optional[date] = None,
) -> ChartData:
    """Fetch once and resolve to real or sample data."""
    result = await fetch_series(provider, token, selection)
    return resolve_series(result, selection, category_index, preset, today)


async def load_all(
    provider: RatingProvider,
    token: Optional[str],
    categories: list[Category],
    days: int,
    preset: FallbackPreset = STATS_PERIOD,
    today: Optional[date] = None,
) -> list[ChartData]:
    """Load every category concurrently, in category order."""
    return await asyncio.gather(
        *(
            load_chart_data(provider, token, Selection(cat.id, days), i, preset, today)
            for i, cat in enumerate(categories)
        )
    )


@dataclass(frozen=True)
class Ticket:
    """Identifies one fetch started for a selection."""

    selection: Selection
    seq: int


class SelectionTracker:
    """Keeps the chart data for the current selection only.

    Each fetch is started with ``begin`` and its result offered with
    ``accept``. Results for a selection that is no longer current, from a
    fetch started before the current selection was made, or older than a
    result already accepted are discarded.
    """

    def __init__(self) -> None:
        self._current: Optional[Selection] = None
        self._seq = 0
        # Tickets numbered at or below this are stale
        self._accepted_seq = 0
        self._data: Optional[ChartData] = None

    @property
    def current(self) -> Optional[Selection]:
        return self._current

    @property
    def data(self) -> Optional[ChartData]:
        return self._data

    def select(self, selection: Selection) -> None:
        if selection != self._current:
            self._current = selection
            self._accepted_seq = self._seq
            self._data = None

    def begin(self, selection: Selection) -> Ticket:
        self.select(selection)
        self._seq += 1
        return Ticket(selection=selection, seq=self._seq)

    def accept(self, ticket: Ticket, data: ChartData) -> bool:
        """Store ``data`` if the ticket is still relevant.

        Returns:
            True if stored, False if discarded as stale
        """
        if ticket.selection != self._current or ticket.seq <= self._accepted_seq:
            log.debug("Discarding stale ratings", category=ticket.selection.category_id)
            return False
        self._accepted_seq = ticket.seq
        self._data = data
        return True


async def refresh(
    tracker: SelectionTracker,
    provider: RatingProvider,
    token: Optional[str],
    selection: Selection,
    category_index: int,
    preset: FallbackPreset = STATS_PERIOD,
    today: Optional[date] = None,
) -> Optional[ChartData]:
    """Load data for ``selection`` and hand it to the tracker.

    Returns:
        The tracker's data after this fetch completes; this is the result
        of a newer fetch if one superseded this one
    """
    ticket = tracker.begin(selection)
    data = await load_chart_data(provider, token, selection, category_index, preset, today)
    tracker.accept(ticket, data)
    return tracker.data
