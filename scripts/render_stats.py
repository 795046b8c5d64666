#!/usr/bin/env python3
"""
Render the stats site from a ratings export.

Loads every category for each period (week/month/year) through the JSON
rating provider, substitutes sample data where a category has no ratings,
and writes stats_<period>.html plus the index.html seven-day preview.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dayrate import log
from dayrate.env import get_config
from dayrate.fallback import STATS_PERIOD, WEEK_PREVIEW, WEEK_PREVIEW_DAYS
from dayrate.html import write_stats_site
from dayrate.provider import (
    ChartData,
    JsonFileRatingProvider,
    RatingProvider,
    load_all,
    load_chart_data,
)
from dayrate.series import PERIOD_CONFIG, Category, Selection


def load_categories(path: Path) -> list[Category]:
    """Load the category list, sorted by sort order."""
    if not path.exists():
        log.warn(f"Categories file not found: {path}")
        return []

    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        log.error(f"Failed to load categories: {e}")
        return []

    categories = [Category.from_dict(item) for item in data]
    return sorted(categories, key=lambda c: c.sort_order)


async def collect(
    provider: RatingProvider,
    token: Optional[str],
    categories: list[Category],
) -> tuple[dict[str, list[ChartData]], Optional[ChartData]]:
    """Load chart data for every period plus the preview."""
    data_by_period = {}
    for period, period_cfg in PERIOD_CONFIG.items():
        data_by_period[period] = await load_all(
            provider, token, categories, period_cfg["days"], STATS_PERIOD
        )

    preview = None
    if categories:
        preview = await load_chart_data(
            provider,
            token,
            Selection(categories[0].id, WEEK_PREVIEW_DAYS),
            0,
            WEEK_PREVIEW,
        )
    return data_by_period, preview


def main():
    """Load ratings and write the stats pages."""
    cfg = get_config()
    categories = load_categories(cfg.categories_file)
    if not categories:
        log.warn("No categories configured")

    provider = JsonFileRatingProvider(cfg.ratings_file)

    log.info("Loading ratings...")
    data_by_period, preview = asyncio.run(collect(provider, cfg.token, categories))

    for period, chart_data in data_by_period.items():
        samples = sum(1 for d in chart_data if d.is_sample)
        if samples:
            log.info(f"{period}: {samples}/{len(chart_data)} categories using sample data")

    written = write_stats_site(categories, data_by_period, preview)
    log.info(f"Wrote {len(written)} pages to {cfg.out_dir}")


if __name__ == "__main__":
    main()
