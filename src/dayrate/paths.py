"""SVG path strings for the score curve and its area fill.

Each consecutive pair of points is joined by one cubic segment whose two
control points share the x midpoint of the pair and take the y of their own
endpoint. The curve passes through every data point and is flat at each one.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

Point = tuple[float, float]

_TOKEN_RE = re.compile(r"[MCLZ]|-?\d+(?:\.\d+)?")
_TENTH = Decimal("0.1")


def _fmt(value: float) -> str:
    # Ties on the exact binary value round up, so 258.25 becomes 258.3
    return f"{Decimal(value).quantize(_TENTH, rounding=ROUND_HALF_UP):f}"


def build_smooth_path(points: list[Point]) -> str:
    """Build the curve path, or "" when there are fewer than two points."""
    if len(points) < 2:
        return ""

    x0, y0 = points[0]
    parts = [f"M {_fmt(x0)} {_fmt(y0)}"]
    for (px, py), (x, y) in zip(points, points[1:]):
        cx = _fmt((px + x) / 2)
        parts.append(f"C {cx} {_fmt(py)}, {cx} {_fmt(y)}, {_fmt(x)} {_fmt(y)}")
    return " ".join(parts)


def build_area_path(points: list[Point], bottom: float) -> str:
    """Close the curve down to ``bottom`` under the last and first points."""
    curve = build_smooth_path(points)
    if not curve:
        return ""

    first_x = points[0][0]
    last_x = points[-1][0]
    return (
        f"{curve} L {_fmt(last_x)} {_fmt(bottom)} "
        f"L {_fmt(first_x)} {_fmt(bottom)} Z"
    )


def parse_path(path: str) -> list[tuple[str, list[Point]]]:
    """Split a path built by this module into ``(command, points)`` segments.

    Only the absolute M, C, L and Z commands are understood.
    """
    segments: list[tuple[str, list[Point]]] = []
    command = None
    numbers: list[float] = []

    def flush() -> None:
        if command is None:
            return
        pairs = [(numbers[i], numbers[i + 1]) for i in range(0, len(numbers) - 1, 2)]
        segments.append((command, pairs))

    for token in _TOKEN_RE.findall(path):
        if token in ("M", "C", "L", "Z"):
            flush()
            command = token
            numbers = []
        else:
            numbers.append(float(token))
    flush()
    return segments
