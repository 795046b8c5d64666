"""Fixtures for rating provider tests."""

import asyncio
import json
from datetime import date, timedelta

import pytest

from dayrate.provider import ProviderError, StaticRatingProvider
from tests.utils.data_generators import make_records, make_series


class FailingProvider:
    """Provider that always fails, counting its calls."""

    def __init__(self, exc: Exception):
        self.exc = exc
        self.calls = 0

    async def fetch_ratings(self, token, category_id, days):
        self.calls += 1
        raise self.exc


class SlowProvider:
    """Provider that waits a per-category delay before answering."""

    def __init__(self, ratings, delays):
        self.ratings = ratings
        self.delays = delays

    async def fetch_ratings(self, token, category_id, days):
        await asyncio.sleep(self.delays.get(category_id, 0))
        return self.ratings.get(category_id, [])


@pytest.fixture
def fitness_series(today):
    """Seven real ratings ending today."""
    return make_series(today - timedelta(days=6), [3, 4, 5, 6, 7, 8, 9])


@pytest.fixture
def static_provider(fitness_series, today):
    """Provider with ratings for fitness only."""
    return StaticRatingProvider({"fitness": fitness_series}, today=today)


@pytest.fixture
def failing_provider():
    """Provider that raises ProviderError."""
    return FailingProvider(ProviderError("GET /ratings failed: 500"))


@pytest.fixture
def ratings_file(tmp_path, today):
    """Ratings export with 40 days of fitness ratings."""
    path = tmp_path / "ratings.json"
    start = today - timedelta(days=39)
    path.write_text(json.dumps({"fitness": make_records(start, [5] * 39 + [8])}))
    return path
