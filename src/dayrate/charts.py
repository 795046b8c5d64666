"""Score chart composition and matplotlib-based SVG rendering.

``build_chart`` turns a series into an ordered list of vector drawing
instructions (lines, paths, markers, text) for a fixed viewport. It knows
nothing about the output technology. ``render_chart_svg`` draws those
instructions with matplotlib and returns SVG text.
"""

import io
import json
import re
from dataclasses import dataclass, field
from typing import Literal, Optional, Union

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for server-side rendering
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, PathPatch
from matplotlib.path import Path as MplPath
from markupsafe import escape

from .axis import AxisLabel, get_x_labels
from .normalize import normalize_points, to_x, to_y
from .paths import Point, build_area_path, build_smooth_path, parse_path
from .series import Category, Series, Viewport
from . import log


# Type alias for theme names
ThemeName = Literal["light", "dark"]

# Horizontal reference lines, drawn regardless of data
GUIDE_SCORES = (2, 5, 8)

AREA_OPACITY = 0.15
LINE_WIDTH = 2
AXIS_WIDTH = 1.5
GUIDE_WIDTH = 1
MARKER_RADIUS = 3
LABEL_FONT_SIZE = 9

# Beyond this many points markers are dropped to avoid clutter
MARKER_MAX_POINTS = 14

# Render resolution: one SVG unit per chart pixel
DPI = 100

matplotlib.rcParams["svg.hashsalt"] = "dayrate"


@dataclass(frozen=True)
class ChartTheme:
    """Non-data colors for chart rendering."""

    name: str
    # Colors as hex values (without #)
    background: str
    guide: str
    axis: str
    y_label: str
    x_label: str


CHART_THEMES: dict[ThemeName, ChartTheme] = {
    "light": ChartTheme(
        name="light",
        background="ffffff",
        guide="e5e5ea",
        axis="c6c6c8",
        y_label="8e8e93",
        x_label="6c6c70",
    ),
    "dark": ChartTheme(
        name="dark",
        background="1a1a1f",
        guide="252530",
        axis="35353f",
        y_label="5a5a5e",
        x_label="8e8e93",
    ),
}


@dataclass(frozen=True)
class Guide:
    """A horizontal guide at a fixed score."""

    value: int
    y: float


@dataclass
class ChartGeometry:
    """Everything derived from a series for one viewport.

    Computed fresh for every render; never cached.
    """

    curve_path: str
    area_path: str
    points: list[Point]
    x_labels: list[AxisLabel]
    guides: list[Guide]


# --- Drawing instructions ---


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float
    role: str  # "axis" or "guide"


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    color: str
    font_size: float = LABEL_FONT_SIZE
    anchor: Literal["start", "middle", "end"] = "middle"
    role: str = "x_label"  # "x_label" or "guide_label"


@dataclass(frozen=True)
class PathShape:
    d: str
    role: str  # "area" or "curve"
    fill: Optional[str] = None
    fill_opacity: float = 1.0
    stroke: Optional[str] = None
    stroke_width: float = 0


@dataclass(frozen=True)
class Marker:
    cx: float
    cy: float
    r: float
    color: str


Element = Union[Line, Text, PathShape, Marker]


@dataclass
class ChartDrawing:
    """Ordered vector instructions for one chart, back to front."""

    width: float
    height: float
    category_id: str
    geometry: ChartGeometry
    theme: ChartTheme
    is_sample: bool = False
    scores: list[tuple[str, int]] = field(default_factory=list)
    elements: list[Element] = field(default_factory=list)

    def of_role(self, role: str) -> list[Element]:
        """Elements with the given role (markers have role "marker")."""
        return [e for e in self.elements if getattr(e, "role", "marker") == role]

    @property
    def markers(self) -> list[Marker]:
        return [e for e in self.elements if isinstance(e, Marker)]


def compute_geometry(series: Series, viewport: Viewport) -> ChartGeometry:
    """Compute paths, point positions, labels and guides for a series."""
    points = normalize_points(series, viewport)
    return ChartGeometry(
        curve_path=build_smooth_path(points),
        area_path=build_area_path(points, viewport.bottom),
        points=points,
        x_labels=get_x_labels(series),
        guides=[Guide(value=v, y=to_y(v, viewport)) for v in GUIDE_SCORES],
    )


def build_chart(
    series: Series,
    category: Category,
    viewport: Viewport,
    show_axes: bool = False,
    theme: ChartTheme = CHART_THEMES["light"],
    is_sample: bool = False,
) -> ChartDrawing:
    """Compose the drawing for one category chart.

    Draw order: axis lines (only with ``show_axes``), guides and their score
    labels, area fill, curve, point markers (only for short series), then
    X-axis labels.

    Args:
        series: Scores to plot, oldest first
        category: Supplies the data color
        viewport: Size and padding to draw into
        show_axes: Draw the left and bottom axis lines
        theme: Colors for guides, axes and labels
        is_sample: Whether the series is synthetic fallback data

    Returns:
        ChartDrawing with elements in paint order
    """
    geometry = compute_geometry(series, viewport)
    pad = viewport.padding
    left = pad.left
    right = pad.left + viewport.content_width
    bottom = viewport.bottom
    color = category.color

    elements: list[Element] = []

    if show_axes:
        axis_color = f"#{theme.axis}"
        elements.append(Line(left, pad.top, left, bottom, axis_color, AXIS_WIDTH, "axis"))
        elements.append(Line(left, bottom, right, bottom, axis_color, AXIS_WIDTH, "axis"))

    for guide in geometry.guides:
        elements.append(Line(left, guide.y, right, guide.y, f"#{theme.guide}", GUIDE_WIDTH, "guide"))
    for guide in geometry.guides:
        elements.append(
            Text(
                x=left - 4,
                y=guide.y + 4,
                text=str(guide.value),
                color=f"#{theme.y_label}",
                anchor="end",
                role="guide_label",
            )
        )

    if geometry.area_path:
        elements.append(
            PathShape(d=geometry.area_path, role="area", fill=color, fill_opacity=AREA_OPACITY)
        )
    if geometry.curve_path:
        elements.append(
            PathShape(d=geometry.curve_path, role="curve", stroke=color, stroke_width=LINE_WIDTH)
        )

    if len(series) <= MARKER_MAX_POINTS:
        for x, y in geometry.points:
            elements.append(Marker(cx=x, cy=y, r=MARKER_RADIUS, color=color))

    n = len(series)
    for label in geometry.x_labels:
        elements.append(
            Text(
                x=to_x(label.index, n, viewport),
                y=viewport.height - 4,
                text=label.label,
                color=f"#{theme.x_label}",
            )
        )

    return ChartDrawing(
        width=viewport.width,
        height=viewport.height,
        category_id=category.id,
        geometry=geometry,
        theme=theme,
        is_sample=is_sample,
        scores=[(p.date, p.score) for p in series],
        elements=elements,
    )


# --- matplotlib backend ---


def _px_to_pt(px: float) -> float:
    """Convert chart pixels to matplotlib points at the render DPI."""
    return px * 72 / DPI


_ANCHOR_TO_HA = {"start": "left", "middle": "center", "end": "right"}

_PATH_CODES = {
    "M": [MplPath.MOVETO],
    "C": [MplPath.CURVE4] * 3,
    "L": [MplPath.LINETO],
}


def _to_mpl_path(d: str) -> MplPath:
    """Convert a path string from ``paths`` into a matplotlib Path."""
    vertices: list[Point] = []
    codes: list[int] = []
    for command, pts in parse_path(d):
        if command == "Z":
            vertices.append(vertices[0])
            codes.append(MplPath.CLOSEPOLY)
            continue
        vertices.extend(pts)
        codes.extend(_PATH_CODES[command][: len(pts)])
    return MplPath(vertices, codes)


def _draw_element(ax, element: Element) -> None:
    if isinstance(element, Line):
        ax.plot(
            [element.x1, element.x2],
            [element.y1, element.y2],
            color=element.color,
            linewidth=_px_to_pt(element.width),
            solid_capstyle="butt",
        )
    elif isinstance(element, Text):
        ax.text(
            element.x,
            element.y,
            element.text,
            ha=_ANCHOR_TO_HA[element.anchor],
            va="baseline",
            fontsize=_px_to_pt(element.font_size),
            color=element.color,
        )
    elif isinstance(element, PathShape):
        if element.fill:
            patch = PathPatch(
                _to_mpl_path(element.d),
                facecolor=element.fill,
                alpha=element.fill_opacity,
                edgecolor="none",
            )
        else:
            patch = PathPatch(
                _to_mpl_path(element.d),
                facecolor="none",
                edgecolor=element.stroke,
                linewidth=_px_to_pt(element.stroke_width),
                capstyle="round",
                joinstyle="round",
            )
        ax.add_patch(patch)
    elif isinstance(element, Marker):
        ax.add_patch(Circle((element.cx, element.cy), element.r, color=element.color, linewidth=0))


def render_chart_svg(drawing: ChartDrawing) -> str:
    """Render a chart drawing as SVG using matplotlib.

    The axes fill the whole figure with the y axis inverted, so drawing
    coordinates map 1:1 onto the output's pixel space.

    Returns:
        SVG string with data attributes for the category and scores
    """
    fig = plt.figure(figsize=(drawing.width / DPI, drawing.height / DPI), dpi=DPI)

    try:
        fig.patch.set_facecolor(f"#{drawing.theme.background}")
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, drawing.width)
        ax.set_ylim(drawing.height, 0)
        ax.set_axis_off()

        for element in drawing.elements:
            _draw_element(ax, element)

        svg_buffer = io.StringIO()
        fig.savefig(svg_buffer, format='svg', metadata={"Date": None})
        svg_content = svg_buffer.getvalue()

    finally:
        # Ensure figure is closed to prevent memory leaks
        plt.close(fig)

    log.debug(
        "Rendered chart",
        category=drawing.category_id,
        points=len(drawing.scores),
        sample=drawing.is_sample,
    )
    return _inject_data_attributes(svg_content, drawing)


def _inject_data_attributes(svg: str, drawing: ChartDrawing) -> str:
    """Add data-category, data-sample and data-points to the root <svg>."""
    data_points = [{"date": d, "score": s} for d, s in drawing.scores]
    data_points_attr = json.dumps(data_points).replace('"', '&quot;')
    sample = "true" if drawing.is_sample else "false"
    category = escape(drawing.category_id)

    return re.sub(
        r'<svg\b',
        f'<svg data-category="{category}" data-sample="{sample}" '
        f'data-theme="{drawing.theme.name}" data-points="{data_points_attr}"',
        svg,
        count=1,
    )
