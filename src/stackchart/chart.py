"""Stacked horizontal bar chart.

The chart expects wide data: the first key of each record is the category
drawn on the y axis, every other key is a sub-category count stacked along
the x axis.

Example:
    >>> from stackchart import StackedBarHorizontal, SvgCanvas
    >>> data = [
    ...     {"gene": "BRCA1", "missense": 2, "nonsense": 2},
    ...     {"gene": "TP53", "missense": 2, "nonsense": 1},
    ... ]
    >>> chart = (
    ...     StackedBarHorizontal()
    ...     .data(data)
    ...     .position_top_left((50, 50))
    ...     .position_bottom_right((800, 700))
    ... )
    >>> canvas = SvgCanvas(900, 800)
    >>> group = chart(canvas)
    >>> len(group.select_all("stacked-rect"))
    4

Scales computed automatically on the first render are kept on the instance
and reused by later renders, even if the data changes; call
:meth:`StackedBarHorizontal.reset_scales` to have them recomputed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from stackchart.axis import DEFAULT_FONT_SIZE, DEFAULT_TICK_PADDING, Axis, axis_bottom, axis_left
from stackchart.counting import as_rows
from stackchart.layout import compute_axis_text_and_tick_buffer
from stackchart.scales import BandScale, LinearScale, OrdinalScale
from stackchart.stack import stack
from stackchart.surface import DrawingSurface
from stackchart.utils import format_number

logger = logging.getLogger(__name__)

_MISSING = object()

PALETTE: tuple[str, ...] = (
    "#66c2a5",
    "#fc8d62",
    "#8da0cb",
    "#e78ac3",
    "#a6d854",
    "#ffd92f",
    "#e5c494",
    "#b3b3b3",
)


# =============================================================================
# Data Structures
# =============================================================================


@dataclass
class ChartConfig:
    """Settings of a stacked bar chart.

    Positions are ``(x, y)`` pixels: the top left is the top of the y axis
    line, the bottom right is the right end of the x axis line.
    """

    data: list[dict[str, Any]] | None = None
    pixel_gap_between_stacks: float = 2
    position_top_left: tuple[float, float] = (50, 50)
    position_bottom_right: tuple[float, float] = (800, 700)
    y_padding: float = 0.2

    # Axes
    hide_axis_x: bool = False
    hide_axis_y: bool = False
    y_tick_size: float = 0
    y_tick_size_outer: float = 0
    y_tick_padding: float = DEFAULT_TICK_PADDING
    font_size_x: float = DEFAULT_FONT_SIZE
    font_size_y: float = DEFAULT_FONT_SIZE


@dataclass(frozen=True)
class StackSegment:
    """One rectangle of the chart: a sub-category's share of a category."""

    x: float
    width: float
    y: Any
    sub_category: str
    x_pixels: float
    width_pixels: float
    y_pixels: float | None
    height_pixels: float
    color: str
    tooltip: str


# =============================================================================
# Geometry
# =============================================================================


def category_keys(data: Sequence[Mapping[str, Any]]) -> tuple[str, list[str]]:
    """Split the first record's keys into the category and sub-categories."""
    keys = list(data[0].keys())
    return keys[0], keys[1:]


def calculate_totals(data: Sequence[Mapping[str, Any]]) -> list[tuple[Any, float]]:
    """Sum every value but the first of each record."""
    category_key = next(iter(data[0])) if data else None
    totals = []
    for record in data:
        total = sum(value for i, value in enumerate(record.values()) if i != 0)
        totals.append((record.get(category_key), total))
    return totals


def compute_marks(
    data: Sequence[Mapping[str, Any]],
    x_scale: LinearScale,
    y_scale: BandScale,
    color_scale: OrdinalScale,
    pixel_gap_between_stacks: float = 0,
) -> list[StackSegment]:
    """Stack the data and map every interval to pixel geometry.

    Marks are ordered by sub-category, then by category. Pixel widths have
    the gap subtracted and are not clamped, so they go negative when the gap
    is wider than the segment.
    """
    category_key, sub_categories = category_keys(data)

    marks = []
    for series in stack(data, sub_categories):
        color = color_scale(series.key)
        for point in series:
            width = point.end - point.start
            x_pixels = x_scale(point.start)
            marks.append(
                StackSegment(
                    x=point.start,
                    width=width,
                    y=point.data[category_key],
                    sub_category=series.key,
                    x_pixels=x_pixels,
                    width_pixels=x_scale(point.end) - x_pixels - pixel_gap_between_stacks,
                    y_pixels=y_scale(point.data[category_key]),
                    height_pixels=y_scale.bandwidth,
                    color=color,
                    tooltip=f"{category_key}<br>width: {format_number(width)}",
                )
            )
    return marks


# =============================================================================
# Chart
# =============================================================================


class StackedBarHorizontal:
    """Configurable stacked horizontal bar chart.

    Every setting has an accessor that returns the current value when called
    without an argument, and sets it and returns the chart when called with
    one, so configuration can be chained. Calling the chart with a drawing
    surface renders it.
    """

    def __init__(self, config: ChartConfig | None = None) -> None:
        self._config = config or ChartConfig()
        self._x_scale: LinearScale | None = None
        self._y_scale: BandScale | None = None
        self._color_scale: OrdinalScale | None = None
        self._marks: list[StackSegment] = []
        self._x_axis: Axis | None = None
        self._y_axis: Axis | None = None
        self._x_axis_buffer: float | None = None
        self._y_axis_buffer: float | None = None

    @property
    def config(self) -> ChartConfig:
        return self._config

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self, selection: DrawingSurface) -> DrawingSurface:
        """Draw the chart into ``selection`` and return the chart group."""
        cfg = self._config
        data = cfg.data

        category_key, sub_categories = category_keys(data)
        left, top = cfg.position_top_left
        right, bottom = cfg.position_bottom_right

        if self._x_scale is None:
            max_total = max(total for _, total in calculate_totals(data))
            self._x_scale = LinearScale([0, max_total], [left, right])
        if self._y_scale is None:
            self._y_scale = BandScale(
                [record[category_key] for record in data], [top, bottom]
            ).padding(cfg.y_padding)
        if self._color_scale is None:
            self._color_scale = OrdinalScale(sub_categories, PALETTE)

        self._marks = compute_marks(
            data,
            self._x_scale,
            self._y_scale,
            self._color_scale,
            cfg.pixel_gap_between_stacks,
        )

        chart_group = selection.select_or_create("g", "stacked-bar")
        rect_group = chart_group.select_or_create("g", "stacked-bar-rect-group")
        rects = rect_group.join("rect", "stacked-rect", len(self._marks))
        for rect, mark in zip(rects, self._marks):
            rect.attr("x", mark.x_pixels)
            rect.attr("y", mark.y_pixels)
            rect.attr("width", mark.width_pixels)
            rect.attr("height", mark.height_pixels)
            rect.attr("fill", mark.color)
            rect.attr("stroke-width", 0)

        self._y_axis = (
            axis_left(self._y_scale)
            .tick_size(cfg.y_tick_size)
            .tick_size_outer(cfg.y_tick_size_outer)
            .tick_padding(cfg.y_tick_padding)
        )
        self._x_axis = axis_bottom(self._x_scale)

        self._draw_axis(
            chart_group,
            "y-axis",
            self._y_axis,
            hidden=cfg.hide_axis_y,
            transform=f"translate({format_number(left)}, 0)",
            font_size=cfg.font_size_y,
        )
        self._draw_axis(
            chart_group,
            "x-axis",
            self._x_axis,
            hidden=cfg.hide_axis_x,
            transform=f"translate(0, {format_number(bottom)})",
            font_size=cfg.font_size_x,
        )

        self._y_axis_buffer = compute_axis_text_and_tick_buffer(self._y_axis, cfg.font_size_y)
        self._x_axis_buffer = compute_axis_text_and_tick_buffer(self._x_axis, cfg.font_size_x)

        logger.debug(
            "Rendered %d segments for %d categories x %d sub-categories",
            len(self._marks),
            len(data),
            len(sub_categories),
        )
        return chart_group

    __call__ = render

    @staticmethod
    def _draw_axis(
        chart_group: DrawingSurface,
        class_name: str,
        axis: Axis,
        hidden: bool,
        transform: str,
        font_size: float,
    ) -> None:
        if hidden:
            chart_group.join("g", class_name, 0)
            return
        group = chart_group.select_or_create("g", class_name)
        group.attr("transform", transform)
        axis.draw(group)
        for label in group.select_all(tag="text"):
            label.attr("font-size", font_size)

    def reset_scales(self) -> StackedBarHorizontal:
        """Forget cached and supplied scales so the next render derives new ones."""
        self._x_scale = None
        self._y_scale = None
        self._color_scale = None
        return self

    # =========================================================================
    # Getters / Setters
    # =========================================================================

    def _accessor(self, name: str, value: Any) -> Any:
        if value is _MISSING:
            return getattr(self._config, name)
        setattr(self._config, name, value)
        return self

    def data(self, value: Any = _MISSING) -> Any:
        if value is _MISSING or value is None:
            return self._accessor("data", value)
        return self._accessor("data", as_rows(value))

    def pixel_gap_between_stacks(self, value: Any = _MISSING) -> Any:
        return self._accessor("pixel_gap_between_stacks", value)

    def position_top_left(self, value: Any = _MISSING) -> Any:
        return self._accessor(
            "position_top_left", value if value is _MISSING else tuple(value)
        )

    def position_bottom_right(self, value: Any = _MISSING) -> Any:
        return self._accessor(
            "position_bottom_right", value if value is _MISSING else tuple(value)
        )

    def x_scale(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._x_scale
        self._x_scale = value
        return self

    def y_scale(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._y_scale
        self._y_scale = value
        logger.info("Premade y scale supplied to StackedBarHorizontal")
        return self

    def color_scale(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._color_scale
        self._color_scale = value
        return self

    def hide_axis_x(self) -> StackedBarHorizontal:
        self._config.hide_axis_x = True
        return self

    def show_axis_x(self) -> StackedBarHorizontal:
        self._config.hide_axis_x = False
        return self

    def hide_axis_y(self) -> StackedBarHorizontal:
        self._config.hide_axis_y = True
        return self

    def show_axis_y(self) -> StackedBarHorizontal:
        self._config.hide_axis_y = False
        return self

    def y_tick_size(self, value: Any = _MISSING) -> Any:
        return self._accessor("y_tick_size", value)

    def y_tick_size_outer(self, value: Any = _MISSING) -> Any:
        return self._accessor("y_tick_size_outer", value)

    def y_tick_padding(self, value: Any = _MISSING) -> Any:
        return self._accessor("y_tick_padding", value)

    def font_size_x(self, value: Any = _MISSING) -> Any:
        return self._accessor("font_size_x", value)

    def font_size_y(self, value: Any = _MISSING) -> Any:
        return self._accessor("font_size_y", value)

    # Read-only results of the last render

    def y_axis_text_and_tick_buffer(self) -> float | None:
        return self._y_axis_buffer

    def x_axis_text_and_tick_buffer(self) -> float | None:
        return self._x_axis_buffer

    def marks(self) -> list[StackSegment]:
        return list(self._marks)

    def x_axis(self) -> Axis | None:
        return self._x_axis

    def y_axis(self) -> Axis | None:
        return self._y_axis


def stacked_bar_horizontal() -> StackedBarHorizontal:
    """Create a chart with default settings."""
    return StackedBarHorizontal()
