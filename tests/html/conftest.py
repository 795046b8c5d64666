"""Fixtures for HTML tests."""

from datetime import timedelta

import pytest

from dayrate.fallback import generate_fallback_series
from dayrate.provider import ChartData
from dayrate.series import Selection
from tests.utils.data_generators import make_series


@pytest.fixture
def week_data(categories, today):
    """Week chart data: real ratings for the first category, samples for the rest."""
    data = [
        ChartData(
            Selection(categories[0].id, 7),
            make_series(today - timedelta(days=6), [4, 6, 8, 6, 4, 6, 8]),
            False,
        )
    ]
    for i, cat in enumerate(categories[1:], start=1):
        data.append(
            ChartData(Selection(cat.id, 7), generate_fallback_series(i, 7, today=today), True, "no data")
        )
    return data
