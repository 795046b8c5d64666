"""Fixtures for chart tests."""

import json
import re
from datetime import date

import pytest

from dayrate.charts import CHART_THEMES
from dayrate.series import Category, Padding, Viewport
from tests.utils.data_generators import cycling_scores, make_series


@pytest.fixture
def light_theme():
    """Light chart theme."""
    return CHART_THEMES["light"]


@pytest.fixture
def dark_theme():
    """Dark chart theme."""
    return CHART_THEMES["dark"]


@pytest.fixture
def viewport():
    """Stats card viewport: 343x130 with default padding (content 307x96)."""
    return Viewport(width=343)


@pytest.fixture
def round_viewport():
    """Viewport with round numbers for easy coordinate checks (content 100x90)."""
    return Viewport(width=110, height=100, padding=Padding(top=5, bottom=5, left=5, right=5))


@pytest.fixture
def category():
    """Chart category."""
    return Category(id="fitness", name="Fitness", color="#FF5733")


@pytest.fixture
def week_series():
    """Seven days starting Sunday 2024-01-07."""
    return make_series(date(2024, 1, 7), [5, 6, 7, 8, 7, 6, 5])


@pytest.fixture
def month_series():
    """Thirty days starting 2024-03-01."""
    return make_series(date(2024, 3, 1), cycling_scores(30))


@pytest.fixture
def year_series():
    """365 days from 2024-01-01 through 2024-12-30 (leap year)."""
    return make_series(date(2024, 1, 1), cycling_scores(365))


@pytest.fixture
def empty_series():
    """No ratings at all."""
    return []


@pytest.fixture
def single_point_series():
    """A single rating."""
    return make_series(date(2024, 1, 7), [7])


def extract_svg_data_attributes(svg: str) -> dict:
    """Extract data-* attributes from the root <svg> element.

    Args:
        svg: SVG string

    Returns:
        Dict with extracted data attributes
    """
    data = {}

    points_match = re.search(r'data-points="([^"]*)"', svg)
    if points_match:
        data["points"] = json.loads(points_match.group(1).replace('&quot;', '"'))

    for attr in ["data-category", "data-sample", "data-theme"]:
        match = re.search(rf'{attr}="([^"]+)"', svg)
        if match:
            data[attr.replace("data-", "")] = match.group(1)

    return data
