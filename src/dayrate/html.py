"""HTML rendering helpers using Jinja2 templates."""

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from .charts import CHART_THEMES, ChartTheme, build_chart, render_chart_svg
from .env import get_config
from .formatters import format_average, format_days, format_stat, rating_color
from .provider import ChartData
from .series import PERIOD_CONFIG, Category, Viewport
from .statistics import calculate_statistics
from . import log


# Home screen preview chart is taller than the stats cards and shows axes
PREVIEW_HEIGHT = 200

# Singleton Jinja2 environment
_jinja_env: Optional[Environment] = None


def get_jinja_env() -> Environment:
    """Get or create the singleton Jinja2 environment.

    Uses PackageLoader to load templates from src/dayrate/templates/
    with autoescape enabled for security.
    """
    global _jinja_env
    if _jinja_env is not None:
        return _jinja_env

    env = Environment(
        loader=PackageLoader("dayrate", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )

    env.filters["format_stat"] = format_stat
    env.filters["format_average"] = format_average
    env.filters["format_days"] = format_days
    env.filters["rating_color"] = rating_color

    _jinja_env = env
    return env


def get_theme() -> ChartTheme:
    return CHART_THEMES[get_config().chart_theme]


def _inline_svg(svg: str) -> str:
    """Drop the XML declaration and doctype so the SVG can sit inside HTML."""
    start = svg.find("<svg")
    return svg[start:] if start >= 0 else svg


def build_card(
    category: Category,
    data: ChartData,
    viewport: Viewport,
    theme: ChartTheme,
    show_axes: bool = False,
) -> dict[str, Any]:
    """Build the template context for one category card."""
    drawing = build_chart(
        data.series,
        category,
        viewport,
        show_axes=show_axes,
        theme=theme,
        is_sample=data.is_sample,
    )
    return {
        "category": category,
        "days": data.selection.days,
        "is_sample": data.is_sample,
        "stats": calculate_statistics(data.series).to_dict(),
        "svg": Markup(_inline_svg(render_chart_svg(drawing))),
    }


def build_stats_cards(
    categories: list[Category],
    chart_data: list[ChartData],
    viewport: Optional[Viewport] = None,
    theme: Optional[ChartTheme] = None,
) -> list[dict[str, Any]]:
    """Build one card per category, pairing categories with their data by position."""
    cfg = get_config()
    if viewport is None:
        viewport = Viewport(width=cfg.chart_width, height=cfg.chart_height)
    if theme is None:
        theme = get_theme()

    if len(categories) != len(chart_data):
        raise ValueError(
            f"Got {len(chart_data)} chart data sets for {len(categories)} categories"
        )

    return [
        build_card(category, data, viewport, theme)
        for category, data in zip(categories, chart_data)
    ]


def render_stats_page(cards: list[dict[str, Any]], period: str) -> str:
    """Render the stats page for a period."""
    env = get_jinja_env()
    template = env.get_template("stats.html")
    return template.render(
        cards=cards,
        period=period,
        periods=PERIOD_CONFIG,
        theme=get_theme().name,
    )


def render_preview_page(card: Optional[dict[str, Any]]) -> str:
    """Render the home page with the seven-day preview chart."""
    env = get_jinja_env()
    template = env.get_template("index.html")
    return template.render(card=card, periods=PERIOD_CONFIG, theme=get_theme().name)


def write_stats_site(
    categories: list[Category],
    data_by_period: dict[str, list[ChartData]],
    preview: Optional[ChartData] = None,
) -> list[Path]:
    """
    Write the stats pages and the home preview page.

    Stats pages are written as stats_<period>.html, the preview as index.html.
    The preview charts the category its data was loaded for.

    Returns list of written paths.
    """
    cfg = get_config()
    cfg.out_dir.mkdir(parents=True, exist_ok=True)
    written = []

    for period, chart_data in data_by_period.items():
        if period not in PERIOD_CONFIG:
            raise ValueError(f"Unknown period: {period}")
        cards = build_stats_cards(categories, chart_data)
        page_path = cfg.out_dir / f"stats_{period}.html"
        page_path.write_text(render_stats_page(cards, period))
        written.append(page_path)
        log.debug(f"Wrote {page_path}")

    card = None
    category = None
    if preview is not None:
        category = next(
            (c for c in categories if c.id == preview.selection.category_id), None
        )
    if category is not None:
        viewport = Viewport(width=cfg.chart_width, height=PREVIEW_HEIGHT)
        card = build_card(category, preview, viewport, get_theme(), show_axes=True)
    page_path = cfg.out_dir / "index.html"
    page_path.write_text(render_preview_page(card))
    written.append(page_path)
    log.debug(f"Wrote {page_path}")

    return written
