"""Fixtures for integration tests."""

import json
from datetime import timedelta

import pytest

from tests.utils.data_generators import make_records


@pytest.fixture
def categories_file(configured_env, categories):
    """Categories export in the app's camelCase shape, deliberately unsorted."""
    path = configured_env["categories_file"]
    items = [
        {
            "id": c.id,
            "name": c.name,
            "color": c.color,
            "emoji": c.glyph,
            "sortOrder": c.sort_order,
        }
        for c in reversed(categories)
    ]
    path.write_text(json.dumps(items))
    return path


@pytest.fixture
def ratings_export(configured_env, today):
    """Ratings for fitness (400 days) and sleep (last 3 days) only."""
    path = configured_env["ratings_file"]
    fitness_start = today - timedelta(days=399)
    path.write_text(
        json.dumps(
            {
                "fitness": make_records(fitness_start, [(i % 10) + 1 for i in range(400)]),
                "sleep": make_records(today - timedelta(days=2), [6, 7, 8]),
            }
        )
    )
    return path


@pytest.fixture
def full_integration_env(configured_env, categories_file, ratings_export, monkeypatch):
    """Configured env with data files and a token."""
    monkeypatch.setenv("DAYRATE_TOKEN", "test-token")
    import dayrate.env

    dayrate.env._config = None
    return configured_env
