"""Axis descriptors and axis drawing.

An :class:`Axis` pairs a scale with tick settings. It is both a descriptor,
read by :func:`stackchart.layout.compute_axis_text_and_tick_buffer`, and a
renderer that draws a domain line plus one ``g.tick`` group per tick into a
:class:`~stackchart.surface.DrawingSurface`.

Accessors follow the chart's convention: called without an argument they
return the current value, called with one they set it and return the axis.

Example:
    axis = axis_left(y_scale).tick_size_outer(0).tick_size(0)
    axis.draw(canvas.select_or_create("g", "y-axis"))
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from stackchart.scales import BandScale
from stackchart.surface import DrawingSurface
from stackchart.utils import format_number

_MISSING = object()

DEFAULT_TICK_SIZE = 6
DEFAULT_TICK_PADDING = 3
DEFAULT_FONT_SIZE = 10


class AxisOrient(str, Enum):
    """Side of the plot the axis labels sit on."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def is_vertical(self) -> bool:
        return self in (AxisOrient.LEFT, AxisOrient.RIGHT)

    @property
    def direction(self) -> int:
        return -1 if self in (AxisOrient.TOP, AxisOrient.LEFT) else 1


class Axis:
    """A scale plus tick configuration that knows how to draw itself."""

    def __init__(self, orient: AxisOrient | str, scale: Any) -> None:
        self.orient = AxisOrient(orient)
        self._scale = scale
        self._tick_arguments: tuple[Any, ...] = ()
        self._tick_values: Sequence[Any] | None = None
        self._tick_format: Callable[[Any], str] | str | None = None
        self._tick_size_inner: float = DEFAULT_TICK_SIZE
        self._tick_size_outer: float = DEFAULT_TICK_SIZE
        self._tick_padding: float = DEFAULT_TICK_PADDING

    # =========================================================================
    # Accessors
    # =========================================================================

    def scale(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._scale
        self._scale = value
        return self

    def ticks(self, *args: Any) -> Axis:
        self._tick_arguments = args
        return self

    def tick_arguments(self) -> tuple[Any, ...]:
        return self._tick_arguments

    def tick_values(self, value: Any = _MISSING) -> Any:
        """Explicit tick values; ``None`` means ask the scale."""
        if value is _MISSING:
            return None if self._tick_values is None else list(self._tick_values)
        self._tick_values = None if value is None else list(value)
        return self

    def tick_format(self, value: Any = _MISSING) -> Any:
        """Label formatter; ``None`` uses the scale's, ``""`` hides labels."""
        if value is _MISSING:
            return self._tick_format
        self._tick_format = value
        return self

    def tick_size(self, value: Any = _MISSING) -> Any:
        """Set inner and outer tick size together; get the inner size."""
        if value is _MISSING:
            return self._tick_size_inner
        self._tick_size_inner = self._tick_size_outer = value
        return self

    def tick_size_inner(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._tick_size_inner
        self._tick_size_inner = value
        return self

    def tick_size_outer(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._tick_size_outer
        self._tick_size_outer = value
        return self

    def tick_padding(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._tick_padding
        self._tick_padding = value
        return self

    # =========================================================================
    # Rendering
    # =========================================================================

    def resolved_tick_values(self) -> list[Any]:
        if self._tick_values is not None:
            return list(self._tick_values)
        return list(self._scale.ticks(*self._tick_arguments))

    def resolved_labels(self, values: Sequence[Any]) -> list[str]:
        if self._tick_format == "":
            return ["" for _ in values]
        formatter = self._tick_format or self._scale.tick_format()
        return [formatter(v) for v in values]

    def _position(self, value: Any) -> float | None:
        pos = self._scale(value)
        if pos is not None and isinstance(self._scale, BandScale):
            pos += self._scale.bandwidth / 2
        return pos

    def _domain_path(self) -> str:
        r0, r1 = self._scale.range()
        k = self.orient.direction
        outer = self._tick_size_outer
        f = format_number
        if self.orient.is_vertical:
            if outer:
                return f"M{f(k * outer)},{f(r0)}H0V{f(r1)}H{f(k * outer)}"
            return f"M0,{f(r0)}V{f(r1)}"
        if outer:
            return f"M{f(r0)},{f(k * outer)}V0H{f(r1)}V{f(k * outer)}"
        return f"M{f(r0)},0H{f(r1)}"

    def draw(self, group: DrawingSurface) -> DrawingSurface:
        """Draw the axis into ``group``, reusing nodes from earlier draws."""
        values = self.resolved_tick_values()
        labels = self.resolved_labels(values)
        k = self.orient.direction
        spacing = max(self._tick_size_inner, 0) + self._tick_padding
        vertical = self.orient.is_vertical

        group.attr("fill", "none")
        group.attr("font-size", DEFAULT_FONT_SIZE)
        group.attr("font-family", "sans-serif")
        group.attr(
            "text-anchor",
            {AxisOrient.LEFT: "end", AxisOrient.RIGHT: "start"}.get(self.orient, "middle"),
        )

        domain = group.select_or_create("path", "domain")
        domain.attr("stroke", "currentColor")
        domain.attr("d", self._domain_path())

        tick_nodes = group.join("g", "tick", len(values))
        for node, value, label in zip(tick_nodes, values, labels):
            pos = self._position(value)
            node.attr("opacity", 1 if pos is not None else 0)
            pos = pos or 0
            node.attr(
                "transform",
                f"translate(0,{format_number(pos)})"
                if vertical
                else f"translate({format_number(pos)},0)",
            )

            line = node.select_or_create("line", "tick-line")
            line.attr("stroke", "currentColor")
            line.attr("x2" if vertical else "y2", k * self._tick_size_inner)

            text = node.select_or_create("text", "tick-label")
            text.attr("fill", "currentColor")
            text.attr("x" if vertical else "y", k * spacing)
            if vertical:
                text.attr("dy", "0.32em")
            else:
                text.attr("dy", "0em" if self.orient == AxisOrient.TOP else "0.71em")
            text.text(label)

        return group

    __call__ = draw

    def __repr__(self) -> str:
        return f"Axis(orient={self.orient.value!r}, scale={self._scale!r})"


def axis_left(scale: Any) -> Axis:
    return Axis(AxisOrient.LEFT, scale)


def axis_right(scale: Any) -> Axis:
    return Axis(AxisOrient.RIGHT, scale)


def axis_bottom(scale: Any) -> Axis:
    return Axis(AxisOrient.BOTTOM, scale)


def axis_top(scale: Any) -> Axis:
    return Axis(AxisOrient.TOP, scale)
