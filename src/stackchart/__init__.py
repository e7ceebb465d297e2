"""stackchart - Stacked horizontal bar charts rendered to SVG.

Example:
    from stackchart import StackedBarHorizontal, SvgCanvas, count

    wide = count(rows, "gene", "type")
    chart = StackedBarHorizontal().data(wide)
    canvas = SvgCanvas(900, 800)
    chart(canvas)
    canvas.save("genes.svg")
"""

from stackchart.axis import Axis, AxisOrient, axis_bottom, axis_left, axis_right, axis_top
from stackchart.chart import (
    PALETTE,
    ChartConfig,
    StackedBarHorizontal,
    StackSegment,
    calculate_totals,
    compute_marks,
    stacked_bar_horizontal,
)
from stackchart.counting import count, to_frame
from stackchart.exceptions import InvalidArgumentError, StackChartError, UnsupportedFormatError
from stackchart.layout import compute_axis_text_and_tick_buffer
from stackchart.scales import BandScale, LinearScale, OrdinalScale
from stackchart.stack import StackPoint, StackSeries, stack
from stackchart.surface import DrawingSurface, SvgCanvas, SvgElement
from stackchart.utils import dput, max_characters

__version__ = "0.1.0"

__all__ = [
    # Chart
    "StackedBarHorizontal",
    "stacked_bar_horizontal",
    "ChartConfig",
    "StackSegment",
    "PALETTE",
    "calculate_totals",
    "compute_marks",
    # Data shaping
    "count",
    "to_frame",
    "dput",
    "max_characters",
    # Layout
    "compute_axis_text_and_tick_buffer",
    # Scales, stack, axis
    "LinearScale",
    "BandScale",
    "OrdinalScale",
    "stack",
    "StackPoint",
    "StackSeries",
    "Axis",
    "AxisOrient",
    "axis_left",
    "axis_right",
    "axis_bottom",
    "axis_top",
    # Surface
    "DrawingSurface",
    "SvgElement",
    "SvgCanvas",
    # Errors
    "StackChartError",
    "InvalidArgumentError",
    "UnsupportedFormatError",
]
