"""Map series positions and scores onto chart pixel coordinates.

The vertical scale is fixed to the full score domain [1, 10] rather than the
observed min/max, so charts for different categories and periods line up.
"""

from .series import MAX_SCORE, MIN_SCORE, Series, Viewport

SCORE_SPAN = MAX_SCORE - MIN_SCORE


def to_x(index: int, length: int, viewport: Viewport) -> float:
    """X coordinate of the point at ``index`` in a series of ``length``.

    A single-point series sits on the left edge.
    """
    return viewport.padding.left + (index / max(length - 1, 1)) * viewport.content_width


def to_y(score: float, viewport: Viewport) -> float:
    """Y coordinate for a score; 10 is the top edge, 1 the bottom edge."""
    return viewport.padding.top + (1 - (score - MIN_SCORE) / SCORE_SPAN) * viewport.content_height


def normalize_points(series: Series, viewport: Viewport) -> list[tuple[float, float]]:
    """Pixel coordinates for every point in the series, in order."""
    length = len(series)
    return [
        (to_x(i, length, viewport), to_y(point.score, viewport))
        for i, point in enumerate(series)
    ]
