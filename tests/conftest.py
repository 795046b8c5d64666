"""Root fixtures for all tests."""

import os
from datetime import date
from pathlib import Path

import pytest

from dayrate.series import Category


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear dayrate env vars and reset config singleton before each test."""
    env_prefixes = (
        "DAYRATE_",
        "CHART_",
        "OUT_DIR",
        "RATINGS_FILE",
        "CATEGORIES_FILE",
    )

    for key in list(os.environ.keys()):
        for prefix in env_prefixes:
            if key.startswith(prefix):
                monkeypatch.delenv(key, raising=False)
                break

    # Reset config singleton
    import dayrate.env

    dayrate.env._config = None

    yield

    # Reset again after test
    dayrate.env._config = None


@pytest.fixture
def tmp_out_dir(tmp_path):
    """Create temp directory for rendered output."""
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    return out_dir


@pytest.fixture
def configured_env(tmp_path, tmp_out_dir, monkeypatch):
    """Set up test environment with temp directories and data files."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    monkeypatch.setenv("OUT_DIR", str(tmp_out_dir))
    monkeypatch.setenv("RATINGS_FILE", str(data_dir / "ratings.json"))
    monkeypatch.setenv("CATEGORIES_FILE", str(data_dir / "categories.json"))
    # Reset config to pick up new values
    import dayrate.env

    dayrate.env._config = None
    return {
        "out_dir": tmp_out_dir,
        "ratings_file": data_dir / "ratings.json",
        "categories_file": data_dir / "categories.json",
    }


@pytest.fixture
def today():
    """Fixed 'today' for deterministic dates (a Saturday)."""
    return date(2024, 6, 15)


@pytest.fixture
def categories():
    """The default category set."""
    return [
        Category(id="fitness", name="Fitness", color="#FF5733", glyph="\U0001F3CB", sort_order=0),
        Category(id="productivity", name="Productivity", color="#FFB347", glyph="\U0001F4BB", sort_order=1),
        Category(id="mindfulness", name="Mindfulness", color="#00D4AA", glyph="\U0001F9D8", sort_order=2),
        Category(id="nutrition", name="Nutrition", color="#34C759", glyph="\U0001F957", sort_order=3),
        Category(id="sleep", name="Sleep", color="#A8D844", glyph="\U0001F634", sort_order=4),
    ]


@pytest.fixture
def project_root():
    """Path to the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def templates_dir(project_root):
    """Path to the Jinja2 templates directory."""
    return project_root / "src" / "dayrate" / "templates"
